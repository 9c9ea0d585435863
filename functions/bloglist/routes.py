"""
HTTP routes for the bloglist API.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from bloglist.db import BlogRecord, DbClient, DuplicateUsernameError, UserRecord
from bloglist.dependencies import get_current_user, get_db_client
from bloglist.schemas import (
    BlogCreate,
    BlogOwner,
    BlogResponse,
    BlogStatsResponse,
    BlogUpdate,
    LoginRequest,
    LoginResponse,
    UserBlog,
    UserCreate,
    UserResponse,
)
from bloglist.security import create_access_token, hash_password, verify_password
from bloglist.stats import collect_stats

logger = logging.getLogger(__name__)

router = APIRouter()

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 3
# bcrypt only accepts this many bytes of input.
MAX_PASSWORD_BYTES = 72


def _blog_response(blog: BlogRecord, owner: Optional[UserRecord]) -> BlogResponse:
    return BlogResponse(
        id=blog.blog_id,
        title=blog.title,
        author=blog.author,
        url=blog.url,
        likes=blog.likes,
        user=(
            BlogOwner(id=owner.user_id, username=owner.username, name=owner.name)
            if owner
            else None
        ),
    )


def _user_response(user: UserRecord, blogs: dict[str, BlogRecord]) -> UserResponse:
    populated = []
    for blog_id in user.blog_ids:
        blog = blogs.get(blog_id)
        if blog is None:
            continue
        populated.append(
            UserBlog(
                id=blog.blog_id,
                title=blog.title,
                author=blog.author,
                url=blog.url,
                likes=blog.likes,
            )
        )
    return UserResponse(
        id=user.user_id, username=user.username, name=user.name, blogs=populated
    )


def _validate_new_user(payload: UserCreate) -> None:
    if not payload.username:
        raise HTTPException(status_code=400, detail="username missing")
    if len(payload.username) < MIN_USERNAME_LENGTH:
        raise HTTPException(status_code=400, detail="username invalid")
    if not payload.password:
        raise HTTPException(status_code=400, detail="password missing")
    if (
        len(payload.password) < MIN_PASSWORD_LENGTH
        or len(payload.password.encode("utf-8")) > MAX_PASSWORD_BYTES
    ):
        raise HTTPException(status_code=400, detail="password invalid")


@router.get("/blogs", response_model=list[BlogResponse])
def list_blogs(db: DbClient = Depends(get_db_client)):
    users = {user.user_id: user for user in db.list_users()}
    return [
        _blog_response(blog, users.get(blog.user_id) if blog.user_id else None)
        for blog in db.list_blogs()
    ]


@router.get("/blogs/stats", response_model=BlogStatsResponse)
def blog_stats(db: DbClient = Depends(get_db_client)):
    """
    Aggregate statistics over every stored blog.
    """
    return BlogStatsResponse(**collect_stats(db))


@router.get("/blogs/{blog_id}", response_model=BlogResponse)
def get_blog(blog_id: str, db: DbClient = Depends(get_db_client)):
    blog = db.get_blog(blog_id)
    if not blog:
        raise HTTPException(status_code=404, detail="blog not found")
    owner = db.get_user(blog.user_id) if blog.user_id else None
    return _blog_response(blog, owner)


@router.post("/blogs", response_model=BlogResponse, status_code=201)
def create_blog(
    payload: BlogCreate,
    user: UserRecord = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    blog = db.create_blog(
        title=payload.title,
        author=payload.author,
        url=payload.url,
        likes=payload.likes,
        user_id=user.user_id,
    )
    logger.info("[%s] Blog %s created", user.username, blog.blog_id)
    return _blog_response(blog, user)


@router.delete("/blogs/{blog_id}", status_code=204)
def delete_blog(
    blog_id: str,
    user: UserRecord = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    blog = db.get_blog(blog_id)
    if not blog:
        raise HTTPException(status_code=400, detail="bad request")
    if blog.user_id != user.user_id:
        logger.warning(
            "[%s] Refused to delete blog %s owned by someone else",
            user.username,
            blog_id,
        )
        raise HTTPException(status_code=401, detail="unauthorized user")

    db.delete_blog(blog_id)
    logger.info("[%s] Blog %s deleted", user.username, blog_id)
    return Response(status_code=204)


@router.put("/blogs/{blog_id}", status_code=204)
def update_blog(
    blog_id: str, payload: BlogUpdate, db: DbClient = Depends(get_db_client)
):
    # An explicit null only makes sense for the optional author.
    changes = {
        key: value
        for key, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or key == "author"
    }
    updated = db.update_blog(blog_id, changes)
    if not updated:
        raise HTTPException(status_code=404, detail="blog not found")
    return Response(status_code=204)


@router.post("/users", response_model=UserResponse, status_code=201)
def create_user(payload: UserCreate, db: DbClient = Depends(get_db_client)):
    _validate_new_user(payload)
    try:
        user = db.create_user(
            username=payload.username,
            name=payload.name,
            password_hash=hash_password(payload.password),
        )
    except DuplicateUsernameError as exc:
        raise HTTPException(
            status_code=400, detail="expected `username` to be unique"
        ) from exc
    logger.info("User %s created", user.username)
    return _user_response(user, {})


@router.get("/users", response_model=list[UserResponse])
def list_users(db: DbClient = Depends(get_db_client)):
    blogs = {blog.blog_id: blog for blog in db.list_blogs()}
    return [_user_response(user, blogs) for user in db.list_users()]


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: DbClient = Depends(get_db_client)):
    user = db.get_user_by_username(payload.username)
    if not user or not verify_password(payload.password, user.password_hash):
        logger.warning("Failed login for %s", payload.username)
        raise HTTPException(status_code=401, detail="invalid username or password")
    token = create_access_token(user.username, user.user_id)
    return LoginResponse(token=token, username=user.username, name=user.name)
