from typing import List, Optional

from sqlalchemy.orm import Session

from models import Message, User


class CredentialStore:
    """
    Persistence for users and their messages.

    Email uniqueness is not enforced here; callers check before inserting,
    so two concurrent registrations for one email can both succeed.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def find_by_refresh_token(self, token: str) -> Optional[User]:
        if not token:
            return None
        return self.db.query(User).filter(User.refresh_token == token).first()

    def save_user(self, user: User) -> User:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def save_message(self, message: Message) -> Message:
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)
        return message

    def messages_for(self, user: User) -> List[Message]:
        return (
            self.db.query(Message)
            .filter(Message.user_id == user.id)
            .order_by(Message.timestamp.asc())
            .all()
        )

    def delete_message(self, message: Message):
        self.db.delete(message)
        self.db.commit()
