"""Error taxonomy shared by the level and replay codecs."""
from __future__ import annotations


class ElmaError(ValueError):
    """Base class for every codec error."""


class AcrossUnsupportedError(ElmaError):
    def __init__(self) -> None:
        super().__init__("Across levels are not supported")


class InvalidLevelFileError(ElmaError):
    def __init__(self) -> None:
        super().__init__("Not a level file")


class _InvalidValueError(ElmaError):
    """Carries the offending raw value read from disk."""

    what = "value"

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"Invalid {self.what} value {value}")


class InvalidGravityError(_InvalidValueError):
    what = "gravity"


class InvalidObjectError(_InvalidValueError):
    what = "object"


class InvalidClippingError(_InvalidValueError):
    what = "clipping"


class InvalidEventError(_InvalidValueError):
    what = "event"


class EODMismatchError(ElmaError):
    def __init__(self) -> None:
        super().__init__("End-of-data marker mismatch")


class EOFMismatchError(ElmaError):
    def __init__(self) -> None:
        super().__init__("End-of-file marker mismatch")


class EORMismatchError(ElmaError):
    def __init__(self) -> None:
        super().__init__("End-of-replay marker mismatch")


class InvalidTimeFormatError(ElmaError):
    def __init__(self) -> None:
        super().__init__("Invalid time format")


class PaddingTooShortError(ElmaError):
    """``deficit`` is how many bytes the text overruns its field by."""

    def __init__(self, deficit: int) -> None:
        self.deficit = deficit
        super().__init__(f"Padding too short by {deficit} bytes")


class StringDecodeError(ElmaError):
    def __init__(self, valid_up_to: int, message: str | None = None) -> None:
        self.valid_up_to = valid_up_to
        super().__init__(message or f"String not decodable after byte {valid_up_to}")


class NonASCIIError(StringDecodeError):
    def __init__(self, valid_up_to: int = 0) -> None:
        super().__init__(valid_up_to, f"String contains non-ASCII characters at {valid_up_to}")


class ElmaIOError(ElmaError):
    """I/O failure, identified by kind only (e.g. ``FileNotFoundError``, ``UnexpectedEof``)."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"I/O error: {kind}")


__all__ = [
    "ElmaError",
    "AcrossUnsupportedError",
    "InvalidLevelFileError",
    "InvalidGravityError",
    "InvalidObjectError",
    "InvalidClippingError",
    "InvalidEventError",
    "EODMismatchError",
    "EOFMismatchError",
    "EORMismatchError",
    "InvalidTimeFormatError",
    "PaddingTooShortError",
    "StringDecodeError",
    "NonASCIIError",
    "ElmaIOError",
]
