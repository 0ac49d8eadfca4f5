# server/models/post.py

from sqlalchemy import BigInteger, Column, ForeignKey, Integer, Text
from server.core.clock import now_ms
from . import Base


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    # milliseconds since epoch
    created_at = Column(BigInteger, nullable=False, default=now_ms, index=True)
