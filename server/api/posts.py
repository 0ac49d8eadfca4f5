# server/api/posts.py

import structlog
from pydantic import BaseModel
from fastapi import APIRouter, Depends, status
from sqlalchemy import exists, false, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from server.core import config
from server.core.errors import InternalError, ValidationError
from server.database import get_db
from server.models.hype import Hype
from server.core.clock import now_ms
from server.models.post import Post
from server.models.user import User


logger = structlog.get_logger()

router = APIRouter()


class PostCreateRequest(BaseModel):
    user_id: int | None = None
    content: str | None = None


class PostView(BaseModel):
    id: int
    username: str
    content: str
    timestamp: int
    hype_count: int
    user_hyped: bool


# -------------------------------
# Operations
# -------------------------------

def publish_post(db: Session, author_id: int | None, content: str | None) -> Post:
    """
    Stores a new post with the server clock as its creation time.
    The author id is trusted as given.
    """
    if content is None or not content.strip():
        raise ValidationError("Post content cannot be empty.")
    if author_id is None:
        raise ValidationError()

    post = Post(user_id=author_id, content=content, created_at=now_ms())
    db.add(post)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("post_create_failed", author_id=author_id, error=str(e))
        raise InternalError("Error creating post") from e
    db.refresh(post)
    return post


def query_feed(db: Session, viewer_id: int | None) -> list[dict]:
    """
    Returns every post newest first, with its author's username,
    how many hypes it has and whether the viewer hyped it.
    Posts sharing a timestamp are ordered by insertion, later first.
    """
    hype_count = (
        select(func.count(Hype.id))
        .where(Hype.post_id == Post.id)
        .scalar_subquery()
    )
    if viewer_id is None:
        user_hyped = false()
    else:
        user_hyped = exists().where(Hype.post_id == Post.id, Hype.user_id == viewer_id)

    rows = (
        db.query(
            Post.id,
            User.username,
            Post.content,
            Post.created_at,
            hype_count.label("hype_count"),
            user_hyped.label("user_hyped"),
        )
        .join(User, Post.user_id == User.id)
        .order_by(Post.created_at.desc(), Post.id.desc())
        .all()
    )
    return [
        {
            "id": row.id,
            "username": row.username,
            "content": row.content,
            "timestamp": row.created_at,
            "hype_count": row.hype_count,
            "user_hyped": bool(row.user_hyped),
        }
        for row in rows
    ]


def _parse_viewer(raw: str | None) -> int | None:
    try:
        return int(raw) if raw is not None else None
    except ValueError:
        return None


# -------------------------------
# Endpoints
# -------------------------------

@router.post("/posts", status_code=status.HTTP_201_CREATED)
def create_post(req: PostCreateRequest, db: Session = Depends(get_db)):
    post = publish_post(db, req.user_id, req.content)
    logger.info("post_created", post_id=post.id, author_id=post.user_id)
    return {"id": post.id}


@router.get("/posts", response_model=list[PostView])
def list_posts(user_id: str | None = None, db: Session = Depends(get_db)):
    try:
        return query_feed(db, _parse_viewer(user_id))
    except SQLAlchemyError as e:
        logger.error("feed_query_failed", viewer_id=user_id, error=str(e), degraded=config.FEED_DEGRADED_EMPTY)
        if config.FEED_DEGRADED_EMPTY:
            return []
        raise InternalError("Error loading feed") from e
