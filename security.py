"""
Password hashing and token issuance.

Access tokens are HS256 JWTs whose subject is the user's email; they are
checked by signature and expiry only. Refresh tokens are opaque random
strings stored on the user record.
"""

import secrets
from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

from errors import InvalidToken

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # stored value is not a recognised hash
        return False


class TokenIssuer:
    def __init__(self, secret_key: str, algorithm: str = "HS256", access_ttl: timedelta = timedelta(minutes=15)):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_ttl = access_ttl

    def issue_access_token(self, email: str) -> str:
        """Sign a short-lived token with `sub` set to the email."""
        now = datetime.now(timezone.utc)
        payload = {"sub": email, "iat": now, "exp": now + self.access_ttl}
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def issue_refresh_token(self) -> str:
        return secrets.token_urlsafe(32)

    def validate_access_token(self, token: str) -> str:
        """
        Return the email the token was issued for.

        Raises
        ------
        InvalidToken
            If the signature, expiry or subject does not check out.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidToken("Token has expired")
        except jwt.InvalidTokenError:
            raise InvalidToken()

        email = payload.get("sub")
        if not isinstance(email, str) or not email:
            raise InvalidToken()
        return email
