# server/models/hype.py

from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint
from . import Base


class Hype(Base):
    __tablename__ = "hypes"
    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="uq_hypes_user_post"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    post_id = Column(Integer, ForeignKey("posts.id"), nullable=False, index=True)
