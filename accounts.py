import logging
from datetime import datetime, timedelta, timezone

from errors import DuplicateEmail, InvalidCredentials, UnknownRefreshToken
from models import User
from schemas import LoginResponse, RefreshResponse, RegisterResponse
from security import TokenIssuer, hash_password, verify_password
from store import CredentialStore

logger = logging.getLogger(__name__)


def register(store: CredentialStore, email: str, password: str) -> RegisterResponse:
    # check-then-write; not atomic under concurrent registrations
    if store.find_by_email(email):
        raise DuplicateEmail()

    user = store.save_user(User(email=email, password=hash_password(password)))
    logger.info("Registered user %s", user.id)
    return RegisterResponse(message="User registered successfully!", user_id=user.id)


def login(
    store: CredentialStore,
    issuer: TokenIssuer,
    email: str,
    password: str,
    refresh_ttl: timedelta = timedelta(days=7),
) -> LoginResponse:
    """
    Verify credentials and hand out a fresh token pair.

    The new refresh token replaces the stored one, so any token from an
    earlier login stops working.
    """
    user = store.find_by_email(email)
    if not user or not verify_password(password, user.password):
        logger.info("Rejected login attempt")
        raise InvalidCredentials()

    access_token = issuer.issue_access_token(user.email)
    user.refresh_token = issuer.issue_refresh_token()
    user.refresh_token_expires_at = datetime.now(timezone.utc) + refresh_ttl
    user = store.save_user(user)

    logger.info("User %s logged in", user.id)
    return LoginResponse(
        access_token=access_token,
        refresh_token=user.refresh_token,
        user_id=user.id,
        email=user.email,
    )


def refresh(store: CredentialStore, issuer: TokenIssuer, refresh_token: str) -> RefreshResponse:
    """Exchange a refresh token for a new access token; the refresh token is echoed back."""
    user = store.find_by_refresh_token(refresh_token)
    if not user:
        logger.info("Rejected unknown refresh token")
        raise UnknownRefreshToken()

    expires_at = user.refresh_token_expires_at
    if expires_at is not None:
        # SQLite hands back naive datetimes
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        if expires_at <= datetime.now(timezone.utc):
            logger.info("Rejected expired refresh token for user %s", user.id)
            raise UnknownRefreshToken("Refresh token has expired")

    return RefreshResponse(
        access_token=issuer.issue_access_token(user.email),
        refresh_token=refresh_token,
    )
