# server/api/auth.py

from typing import Any
import structlog
from pydantic import BaseModel
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from server.database import get_db
from server.core.credentials import credential_scheme
from server.core.errors import AuthError, ConflictError, ValidationError
from server.models.user import User as UserModel


logger = structlog.get_logger()

router = APIRouter()


class Credentials(BaseModel):
    username: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    # any JSON value is accepted, anything but a string simply never matches
    username: Any = None
    password: Any = None


class UserIdentity(BaseModel):
    id: int
    username: str


def register_user(db: Session, username: str | None, password: str | None, scheme) -> UserModel:
    if not username or not password:
        raise ValidationError()

    user = UserModel(username=username, password=scheme.prepare(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError()
    db.refresh(user)
    return user


def authenticate_user(db: Session, username, password, scheme):
    if not isinstance(username, str) or not isinstance(password, str):
        return None
    if not username or not password:
        return None
    user = db.query(UserModel).filter(UserModel.username == username).first()
    if not user or not scheme.verify(password, user.password):
        return None
    return user


@router.post("/register", response_model=UserIdentity, status_code=status.HTTP_201_CREATED)
def register(req: Credentials, db: Session = Depends(get_db), scheme=Depends(credential_scheme)):
    user = register_user(db, req.username, req.password, scheme)
    logger.info("user_registered", user_id=user.id, username=user.username)
    return {"id": user.id, "username": user.username}


@router.post("/login", response_model=UserIdentity)
def login(req: LoginRequest, db: Session = Depends(get_db), scheme=Depends(credential_scheme)):
    user = authenticate_user(db, req.username, req.password, scheme)
    if not user:
        logger.info("login_failed", username=req.username)
        raise AuthError()
    return {"id": user.id, "username": user.username}
