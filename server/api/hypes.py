# server/api/hypes.py

import structlog
from pydantic import BaseModel
from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from server.core.errors import InternalError, NotFoundError, ValidationError
from server.database import get_db
from server.models.hype import Hype
from server.models.post import Post
from server.models.user import User


logger = structlog.get_logger()

router = APIRouter()

MAX_TOGGLE_ATTEMPTS = 3


class HypeToggleRequest(BaseModel):
    user_id: int | None = None
    post_id: int | None = None


def _references_exist(db: Session, user_id: int, post_id: int) -> bool:
    return (
        db.get(User, user_id) is not None
        and db.get(Post, post_id) is not None
    )


def toggle_hype(db: Session, user_id: int, post_id: int) -> str:
    """
    Removes the user's hype on the post if there is one, adds it otherwise.
    Returns "removed" or "added".

    An insert rejected by the (user_id, post_id) unique constraint means a
    concurrent toggle got there first, so the pair is checked again.
    """
    for attempt in range(1, MAX_TOGGLE_ATTEMPTS + 1):
        pair = db.query(Hype).filter(Hype.user_id == user_id, Hype.post_id == post_id)
        if pair.first() is not None:
            pair.delete()
            db.commit()
            return "removed"

        db.add(Hype(user_id=user_id, post_id=post_id))
        try:
            db.commit()
            return "added"
        except IntegrityError:
            db.rollback()
            if not _references_exist(db, user_id, post_id):
                raise NotFoundError("Unknown user or post.")
            logger.info("hype_toggle_retry", user_id=user_id, post_id=post_id, attempt=attempt)

    raise InternalError("Could not toggle hype")


@router.post("/hypes")
def toggle(req: HypeToggleRequest, db: Session = Depends(get_db)):
    if req.user_id is None or req.post_id is None:
        raise ValidationError()
    try:
        action = toggle_hype(db, req.user_id, req.post_id)
    except (NotFoundError, InternalError, SQLAlchemyError) as e:
        # nothing is stored, the caller still gets a 200
        logger.warning("hype_toggle_ignored", user_id=req.user_id, post_id=req.post_id, error=str(e))
        return {"action": "added"}
    logger.info("hype_toggled", user_id=req.user_id, post_id=req.post_id, action=action)
    return {"action": action}
