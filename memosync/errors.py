"""Shared error types for memosync.

Fatal errors abort the current sync run and are reported once to the operator.
ResourceDownloadError is the only one that stays local to a single attachment.
"""


class MemoSyncError(Exception):
    """Base error for memosync."""


class ConfigurationError(MemoSyncError):
    """Missing or malformed settings (URL, token, limits)."""


class TransportError(MemoSyncError):
    """The Memos server answered with a non-2xx status or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class HostUnreachableError(TransportError):
    """DNS, connection or timeout failure before any HTTP response."""

    def __init__(self, url: str, reason: str = ""):
        super().__init__(
            f"Network error: cannot connect to {url}. "
            "Please check that the URL is correct and reachable."
            + (f" ({reason})" if reason else "")
        )
        self.url = url


class FormatError(MemoSyncError):
    """The response body is not valid JSON or lacks the memos array."""

    def __init__(self, message: str, body: str = ""):
        super().__init__(f"{message}\nResponse body: {body}")
        self.body = body


class ResourceDownloadError(MemoSyncError):
    """A single attachment could not be fetched or stored."""


class LocalWriteError(MemoSyncError):
    """Writing a document or directory into the vault failed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to write {path}: {reason}")
        self.path = path
