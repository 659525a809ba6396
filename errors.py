class ChatBackendError(Exception):
    """Base error; carries the HTTP status it maps to."""

    status_code = 400
    default_message = "Bad request"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class DuplicateEmail(ChatBackendError):
    status_code = 400
    default_message = "Email is already in use!"


class InvalidCredentials(ChatBackendError):
    status_code = 401
    default_message = "Invalid credentials"


class UnknownRefreshToken(ChatBackendError):
    status_code = 401
    default_message = "Refresh token is not in database!"


class UserNotFound(ChatBackendError):
    status_code = 404
    default_message = "User not found"


class AuthenticationRequired(ChatBackendError):
    status_code = 401
    default_message = "Authentication required"


class InvalidToken(ChatBackendError):
    status_code = 401
    default_message = "Invalid or expired token"
