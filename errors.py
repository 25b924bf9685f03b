class AccountError(Exception):
    """
    Base class for failures reported back to the caller as
    ``{"success": False, "message": ...}``.
    """

    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AccountError):
    """Submitted data is malformed or too weak. Raised before storage is touched."""

    status_code = 400
    default_message = "Invalid input"


class DuplicateAccount(AccountError):
    """Username or email is already registered."""

    status_code = 409
    default_message = "Username or email already exists"


class InvalidCredentials(AccountError):
    """Login lookup failed. Does not say which field was wrong."""

    status_code = 401
    default_message = "Invalid username or password"


class StorageError(AccountError):
    """Unexpected persistence failure. Internal detail stays in the logs."""

    status_code = 500
    default_message = "Storage error"
