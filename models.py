import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, ForeignKey, DateTime
from sqlalchemy.orm import relationship

from database import Base


def _new_id():
    return str(uuid.uuid4())


def _now():
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    # uniqueness is checked at registration, not by the table
    email = Column(String, index=True, nullable=False)
    password = Column(String, nullable=False)  # hash
    refresh_token = Column(String, index=True, nullable=True)
    refresh_token_expires_at = Column(DateTime(timezone=True), nullable=True)

    messages = relationship(
        "Message", back_populates="user", order_by="Message.timestamp"
    )


class Message(Base):
    __tablename__ = "messages"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    prompt = Column(Text, nullable=False)
    response = Column(Text, nullable=False)
    timestamp = Column(DateTime(timezone=True), default=_now, nullable=False)

    user = relationship("User", back_populates="messages")
