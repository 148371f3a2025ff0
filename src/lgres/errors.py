"""Exception types raised while reading RES archives.

Every failure the library can report derives from `ResError`, so callers can
catch archive problems without also catching programming errors such as
looking up the reserved resource ID 0.
"""


class ResError(Exception):
    """Base exception class for all RES archive errors."""


class ResIOError(ResError):
    """Raised when the underlying stream fails or ends before a full read.

    When the stream itself raised, the original `OSError` is chained as
    `__cause__`.
    """


class ResUnicodeError(ResError):
    """Raised when the header comment is not valid UTF-8."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message)
        self.position = position


class BadSignatureError(ResError):
    """Raised when a stream does not start with the RES file signature."""


class ResourceNotFoundError(ResError):
    """Raised when no directory entry carries the requested resource ID."""

    def __init__(self, resource_id: int | None, message: str | None = None) -> None:
        super().__init__(message or f"Resource {resource_id} not found in directory")
        self.resource_id = resource_id


class UnsupportedResourceError(ResError):
    """Raised when a resource uses a storage feature this library cannot read.

    LZW-compressed and compound resources are valid archive content; they are
    reported with this error rather than returned as undecoded bytes.
    """

    def __init__(self, resource_id: int, flags: int) -> None:
        super().__init__(
            f"Resource {resource_id} uses unsupported storage (flags {flags:#04x})"
        )
        self.resource_id = resource_id
        self.flags = flags
