from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cpeparser.utils.validate import Status


class CpeError(Exception):
    pass


class CpeEncodingError(CpeError):
    """raised when a component violates the escaping grammar of the representation being converted"""


class CpeParsingError(CpeError):
    """raised for any CPE string that cannot be parsed (the underlying cause is chained)"""


class CpeValidationError(CpeError):
    def __init__(self, field: str, status: Status, value: str | None = None):
        self.field = field
        self.status = status
        self.value = value
        super().__init__(f"invalid {field} component {value!r}: {status.message}")
