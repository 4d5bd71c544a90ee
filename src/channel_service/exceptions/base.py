"""
Client-visible error taxonomy for channel operations.
"""

# canonical repository-level exception

class RepositoryError(Exception):
    """
    Base exception for repository/service errors.

    - message: human-friendly message (safe to show to clients)
    - sqlstate: optional database-native error code; only conflicts expose it
    - error_code: canonical short code ('conflict', 'not_found', 'internal') used for HTTP mapping
    """

    # Map canonical error_code -> HTTP status.
    ERROR_CODE_TO_STATUS = {
        "conflict": 409,
        "not_found": 404,
        "internal": 500,
    }

    def __init__(self, message: str, *, sqlstate: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.sqlstate = sqlstate
        self.error_code = error_code

    def __str__(self) -> str:
        parts = []
        if self.sqlstate:
            parts.append(f"sqlstate: {self.sqlstate}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{self.message} ({'; '.join(parts)})"
        return self.message

    def to_payload(self) -> dict:
        """
        Return the JSON body for HTTP responses:
            {"message": "...", "sqlstate": "23505"}
        `sqlstate` is left out entirely when there is none.
        """
        payload = {"message": self.message}
        if self.sqlstate:
            payload["sqlstate"] = self.sqlstate
        return payload

    def http_status(self) -> int:
        """
        HTTP status for this error, looked up from error_code.
        Unclassified repository errors are treated as server faults.
        """
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 500)
        return 500


class ConflictError(RepositoryError):
    """A database constraint rejected the statement (e.g. duplicate channel_id)."""

    def __init__(self, message: str, *, sqlstate: str):
        super().__init__(message, sqlstate=sqlstate, error_code="conflict")


class NotFoundError(RepositoryError):
    def __init__(self, message: str = "Not found"):
        super().__init__(message, error_code="not_found")


class InternalError(RepositoryError):
    """
    Any storage/transport failure that is not a constraint violation.
    The message is fixed; the underlying cause only goes to the logs.
    """

    MESSAGE = "INTERNAL SERVER ERROR"

    def __init__(self, message: str = MESSAGE):
        super().__init__(message, error_code="internal")


__all__ = [
    "RepositoryError",
    "ConflictError",
    "NotFoundError",
    "InternalError",
]
