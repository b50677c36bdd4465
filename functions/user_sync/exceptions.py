UNKNOWN_ERROR = "UNKNOWN_ERROR"


class UserSyncFailure(Exception):
    """Base class for failures reported by the user sync service."""


class UserSyncError(UserSyncFailure):
    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"UserSyncError(code={self.code!r}, message={self.message!r})"


class UserSyncTooManyRequestsError(UserSyncFailure):
    """The remote service answered 429; the caller has to slow down."""

    def __init__(self, message: str = "Too many user sync requests"):
        super().__init__(message)
