"""
Bloglist API package.

This package provides a FastAPI application for blog posts, user
registration and token authentication, with in-memory and SQLAlchemy
database backends.
"""
