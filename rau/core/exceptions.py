"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Every failure the CLI can report has its own class and a stable code,
so callers branch on the type instead of parsing message text.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ConfigNotFoundError(ApplicationError):
    """Raised when a configuration name is not defined in tables.yaml."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Configuration not found: {name}", code="CFG_NOT_FOUND")


class ConfigurationError(ApplicationError):
    """Raised when a settings file or the credential is missing or invalid."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Error: invalid configuration: {detail}", code="CFG_INVALID")


class ConflictingFlagsError(ApplicationError):
    """Raised when mutually exclusive command flags are combined."""

    def __init__(self, message: str = "--schema and --fields cannot be used together") -> None:
        super().__init__(message, code="CLI_CONFLICTING_FLAGS")


class CacheError(ApplicationError):
    """Base class for schema cache failures."""

    def __init__(self, message: str, code: str, path: str) -> None:
        self.path = path
        super().__init__(message, code=code)


class CacheMissingError(CacheError):
    """Raised when the cache file is read before it was ever written."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Schema cache not found: {path}", "CACHE_MISSING", path)


class CacheCorruptError(CacheError):
    """Raised when the cache file cannot be decoded."""

    def __init__(self, path: str, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Schema cache is corrupt: {path} ({reason})", "CACHE_CORRUPT", path)


class CacheWriteError(CacheError):
    """Raised when the cache file cannot be written."""

    def __init__(self, path: str, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Could not write schema cache: {path} ({reason})", "CACHE_WRITE_FAILED", path)


class InvalidFieldFormatError(ApplicationError):
    """Raised when an update batch contains a token without '='."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Invalid field format: {token}", code="VAL_INVALID_FIELD_FORMAT")


class RemoteError(ApplicationError):
    """Raised when the service answers with a non-success status."""

    def __init__(self, operation: str, status_code: int, body: str) -> None:
        self.operation = operation
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"Failed to {operation}. Status: {status_code}, Response: {body}",
            code="REMOTE_ERROR",
        )


class ResponseDecodeError(ApplicationError):
    """Raised when a successful response body cannot be decoded."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(
            f"Could not decode response to {operation}: {reason}",
            code="REMOTE_BAD_RESPONSE",
        )
