"""Result types for decode operations."""

import typing as _t

from . import errors as _errors
from . import record as _record


class UnmarshalResult(_t.NamedTuple):
    """Result of decoding one payload into a target.

    Attributes:
        error: JsonApiError if decoding failed, None otherwise
        result: The populated target if successful, None otherwise
        value: Original payload that was decoded
    """

    error: _errors.JsonApiError | None
    result: _record.Target | None
    value: _record.Json
