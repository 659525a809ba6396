import logging

from completion import CompletionClient
from errors import UserNotFound
from models import Message, User
from schemas import ChatResponse, HistoryResponse
from store import CredentialStore

logger = logging.getLogger(__name__)


def _to_response(message: Message) -> ChatResponse:
    return ChatResponse(
        id=message.id,
        prompt=message.prompt,
        response=message.response,
        timestamp=message.timestamp,
    )


def _get_user(store: CredentialStore, email: str) -> User:
    user = store.find_by_email(email)
    if not user:
        raise UserNotFound()
    return user


def send_message(store: CredentialStore, completion: CompletionClient, email: str, prompt: str) -> ChatResponse:
    """
    Ask the completion API and record the exchange for the user.

    Upstream failures do not raise; their description is saved as the
    response, so every prompt leaves a message behind.
    """
    user = _get_user(store, email)
    reply = completion.complete(prompt)

    message = store.save_message(Message(user_id=user.id, prompt=prompt, response=reply))
    return _to_response(message)


def get_history(store: CredentialStore, email: str) -> HistoryResponse:
    user = _get_user(store, email)
    return HistoryResponse(messages=[_to_response(m) for m in store.messages_for(user)])


def clear_history(store: CredentialStore, email: str) -> int:
    """Delete every message the user owns. Returns how many were removed."""
    user = _get_user(store, email)

    # snapshot before deleting anything
    messages = store.messages_for(user)
    for message in messages:
        store.delete_message(message)

    logger.info("Cleared %d messages for user %s", len(messages), user.id)
    return len(messages)
