"""
Database abstraction for SQLAlchemy and an in-memory test implementation.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

from sqlalchemy import (
    Column,
    Float,
    ForeignKey,
    Integer,
    String,
    create_engine,
    select,
)
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

# Fields a blog update may touch.
BLOG_UPDATE_FIELDS = ("title", "author", "url", "likes")


class DuplicateUsernameError(ValueError):
    """Raised when a user is created with a username that is already taken."""

    def __init__(self, username: str):
        super().__init__(f"username {username!r} already exists")
        self.username = username


class DbClient(Protocol):
    """Interface for database access."""

    def create_user(
        self, username: str, name: Optional[str], password_hash: str
    ) -> "UserRecord":
        ...

    def get_user(self, user_id: str) -> Optional["UserRecord"]:
        ...

    def get_user_by_username(self, username: str) -> Optional["UserRecord"]:
        ...

    def list_users(self) -> list["UserRecord"]:
        ...

    def create_blog(
        self,
        *,
        title: str,
        url: str,
        user_id: str,
        author: Optional[str] = None,
        likes: int = 0,
    ) -> "BlogRecord":
        ...

    def get_blog(self, blog_id: str) -> Optional["BlogRecord"]:
        ...

    def list_blogs(self) -> list["BlogRecord"]:
        ...

    def update_blog(self, blog_id: str, changes: dict) -> Optional["BlogRecord"]:
        ...

    def delete_blog(self, blog_id: str) -> bool:
        ...


@dataclass
class BlogRecord:
    blog_id: str
    title: str
    url: str
    user_id: Optional[str]
    author: Optional[str] = None
    likes: int = 0
    created_at: float = field(default_factory=lambda: time.time())


@dataclass
class UserRecord:
    user_id: str
    username: str
    name: Optional[str]
    password_hash: str
    blog_ids: List[str] = field(default_factory=list)
    created_at: float = field(default_factory=lambda: time.time())


def _pick_changes(changes: dict) -> dict:
    return {k: v for k, v in changes.items() if k in BLOG_UPDATE_FIELDS}


class InMemoryDbClient:
    """Simple in-memory database for development and tests."""

    def __init__(self):
        self.users: Dict[str, UserRecord] = {}
        self.blogs: Dict[str, BlogRecord] = {}

    def create_user(
        self, username: str, name: Optional[str], password_hash: str
    ) -> UserRecord:
        if self.get_user_by_username(username):
            raise DuplicateUsernameError(username)
        record = UserRecord(
            user_id=uuid.uuid4().hex,
            username=username,
            name=name,
            password_hash=password_hash,
        )
        self.users[record.user_id] = record
        return record

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        for user in self.users.values():
            if user.username == username:
                return user
        return None

    def list_users(self) -> list[UserRecord]:
        return list(self.users.values())

    def create_blog(
        self,
        *,
        title: str,
        url: str,
        user_id: str,
        author: Optional[str] = None,
        likes: int = 0,
    ) -> BlogRecord:
        record = BlogRecord(
            blog_id=uuid.uuid4().hex,
            title=title,
            url=url,
            user_id=user_id,
            author=author,
            likes=likes,
        )
        self.blogs[record.blog_id] = record
        owner = self.users.get(user_id)
        if owner:
            owner.blog_ids.append(record.blog_id)
        return record

    def get_blog(self, blog_id: str) -> Optional[BlogRecord]:
        return self.blogs.get(blog_id)

    def list_blogs(self) -> list[BlogRecord]:
        return list(self.blogs.values())

    def update_blog(self, blog_id: str, changes: dict) -> Optional[BlogRecord]:
        blog = self.blogs.get(blog_id)
        if not blog:
            return None
        for key, value in _pick_changes(changes).items():
            setattr(blog, key, value)
        return blog

    def delete_blog(self, blog_id: str) -> bool:
        blog = self.blogs.pop(blog_id, None)
        if not blog:
            return False
        owner = self.users.get(blog.user_id) if blog.user_id else None
        if owner and blog_id in owner.blog_ids:
            owner.blog_ids.remove(blog_id)
        return True


class SqlDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlDbClient")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def _to_blog_record(self, row: "BlogRow") -> BlogRecord:
        return BlogRecord(
            blog_id=row.blog_id,
            title=row.title,
            url=row.url,
            user_id=row.user_id,
            author=row.author,
            likes=row.likes,
            created_at=row.created_at,
        )

    def _get_blog_row(self, session: Session, blog_id: str) -> Optional["BlogRow"]:
        stmt = select(BlogRow).where(BlogRow.blog_id == blog_id)
        return session.execute(stmt).scalar_one_or_none()

    def _to_user_record(self, session: Session, row: "UserRow") -> UserRecord:
        stmt = (
            select(BlogRow.blog_id)
            .where(BlogRow.user_id == row.user_id)
            .order_by(BlogRow.seq.asc())
        )
        return UserRecord(
            user_id=row.user_id,
            username=row.username,
            name=row.name,
            password_hash=row.password_hash,
            blog_ids=list(session.execute(stmt).scalars()),
            created_at=row.created_at,
        )

    def create_user(
        self, username: str, name: Optional[str], password_hash: str
    ) -> UserRecord:
        with self.Session() as session:
            row = UserRow(
                user_id=uuid.uuid4().hex,
                username=username,
                name=name,
                password_hash=password_hash,
                created_at=time.time(),
            )
            session.add(row)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateUsernameError(username) from exc
            return self._to_user_record(session, row)

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        with self.Session() as session:
            row = session.get(UserRow, user_id)
            if not row:
                return None
            return self._to_user_record(session, row)

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        with self.Session() as session:
            stmt = select(UserRow).where(UserRow.username == username)
            row = session.execute(stmt).scalar_one_or_none()
            if not row:
                return None
            return self._to_user_record(session, row)

    def list_users(self) -> list[UserRecord]:
        with self.Session() as session:
            rows = session.execute(
                select(UserRow).order_by(UserRow.created_at.asc())
            ).scalars()
            return [self._to_user_record(session, row) for row in rows]

    def create_blog(
        self,
        *,
        title: str,
        url: str,
        user_id: str,
        author: Optional[str] = None,
        likes: int = 0,
    ) -> BlogRecord:
        with self.Session() as session:
            row = BlogRow(
                blog_id=uuid.uuid4().hex,
                title=title,
                author=author,
                url=url,
                likes=likes,
                user_id=user_id,
                created_at=time.time(),
            )
            session.add(row)
            session.commit()
            session.refresh(row)
            return self._to_blog_record(row)

    def get_blog(self, blog_id: str) -> Optional[BlogRecord]:
        with self.Session() as session:
            row = self._get_blog_row(session, blog_id)
            if not row:
                return None
            return self._to_blog_record(row)

    def list_blogs(self) -> list[BlogRecord]:
        with self.Session() as session:
            rows = session.execute(
                select(BlogRow).order_by(BlogRow.seq.asc())
            ).scalars()
            return [self._to_blog_record(row) for row in rows]

    def update_blog(self, blog_id: str, changes: dict) -> Optional[BlogRecord]:
        with self.Session() as session:
            row = self._get_blog_row(session, blog_id)
            if not row:
                return None
            for key, value in _pick_changes(changes).items():
                setattr(row, key, value)
            session.commit()
            session.refresh(row)
            return self._to_blog_record(row)

    def delete_blog(self, blog_id: str) -> bool:
        with self.Session() as session:
            row = self._get_blog_row(session, blog_id)
            if not row:
                return False
            session.delete(row)
            session.commit()
            return True


Base = declarative_base()


class UserRow(Base):
    __tablename__ = "users"

    user_id = Column(String, primary_key=True)
    username = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=True)
    password_hash = Column(String, nullable=False)
    created_at = Column(Float, nullable=False)


class BlogRow(Base):
    __tablename__ = "blogs"

    # Insertion sequence; orders blogs that share a timestamp.
    seq = Column(Integer, primary_key=True, autoincrement=True)
    blog_id = Column(String, nullable=False, unique=True, index=True)
    title = Column(String, nullable=False)
    author = Column(String, nullable=True)
    url = Column(String, nullable=False)
    likes = Column(Integer, nullable=False, default=0)
    user_id = Column(
        String, ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at = Column(Float, nullable=False)
