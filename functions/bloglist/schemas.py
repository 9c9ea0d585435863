"""
Pydantic schemas for the bloglist API.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class BlogCreate(BaseModel):
    title: str = Field(..., min_length=1)
    author: Optional[str] = None
    url: str = Field(..., min_length=1)
    likes: int = Field(default=0, ge=0)


class BlogUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    author: Optional[str] = None
    url: Optional[str] = Field(default=None, min_length=1)
    likes: Optional[int] = Field(default=None, ge=0)


class BlogOwner(BaseModel):
    id: str
    username: str
    name: Optional[str] = None


class BlogResponse(BaseModel):
    id: str
    title: str
    author: Optional[str] = None
    url: str
    likes: int
    user: Optional[BlogOwner] = None


class UserCreate(BaseModel):
    username: Optional[str] = None
    name: Optional[str] = None
    password: Optional[str] = None


class UserBlog(BaseModel):
    id: str
    title: str
    author: Optional[str] = None
    url: str
    likes: int


class UserResponse(BaseModel):
    id: str
    username: str
    name: Optional[str] = None
    blogs: list[UserBlog] = Field(default_factory=list)


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    username: str
    name: Optional[str] = None


class FavoriteBlogStat(BaseModel):
    title: str
    author: Optional[str] = None
    likes: int


class AuthorBlogsStat(BaseModel):
    author: Optional[str] = None
    blogs: int


class AuthorLikesStat(BaseModel):
    author: Optional[str] = None
    likes: int


class BlogStatsResponse(BaseModel):
    total_likes: int
    favorite_blog: Optional[FavoriteBlogStat] = None
    most_blogs: Optional[AuthorBlogsStat] = None
    most_likes: Optional[AuthorLikesStat] = None
