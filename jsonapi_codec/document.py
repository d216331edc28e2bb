"""JSON:API document model.

The ``data`` member of a document and of each relationship is either a
single object or an array of objects. Both positions are represented by a
container holding exactly one of the two variants, chosen by looking at the
JSON value itself: an object selects the single variant, an array selects
the sequence variant, anything else is a ``ShapeError``.
"""

import enum
import typing
import uuid

import pydantic as _pydantic
import pydantic_core as _pydantic_core

from . import errors as _errors
from . import record as _record

ItemT = typing.TypeVar("ItemT", bound=_pydantic.BaseModel)

_WHITESPACE = b" \t\r\n"


class Shape(str, enum.Enum):
    """Which variant of an object-or-array union is populated.

    Attributes:
        ONE: A single JSON object
        MANY: A JSON array of objects
    """

    ONE = "one"
    MANY = "many"

    @classmethod
    def of(cls, value: typing.Any, *, what: str = "data") -> "Shape":
        """Tag an already parsed JSON value.

        Args:
            value: Parsed JSON value
            what: Name of the member, used in the error message

        Returns:
            Shape.ONE for a dict, Shape.MANY for a list

        Raises:
            ShapeError: If value is neither
        """
        if isinstance(value, dict):
            return cls.ONE
        if isinstance(value, list):
            return cls.MANY
        raise _errors.ShapeError(f"invalid {what}: neither object nor array")


def detect_shape(raw: _record.Json, *, what: str = "data") -> Shape:
    """Tag a raw JSON payload by its first significant byte.

    Args:
        raw: JSON text
        what: Name of the member, used in the error message

    Returns:
        Shape.ONE if the payload starts with ``{``, Shape.MANY for ``[``

    Raises:
        ShapeError: For any other leading byte or an empty payload
    """
    if isinstance(raw, str):
        raw = raw.encode()
    stripped = bytes(raw).lstrip(_WHITESPACE)
    if stripped.startswith(b"{"):
        return Shape.ONE
    if stripped.startswith(b"["):
        return Shape.MANY
    raise _errors.ShapeError(f"invalid {what}: neither object nor array")


def _parse(raw: _record.Json) -> typing.Any:
    try:
        return _pydantic_core.from_json(raw)
    except ValueError as e:
        raise _errors.ParseError(str(e)) from e


class Links(_pydantic.BaseModel):
    """Links for the top level, records and relationships.

    Unknown link names are kept as they are.
    """

    model_config = _pydantic.ConfigDict(populate_by_name=True, extra="allow")

    self_: str | dict[str, typing.Any] | None = _pydantic.Field(
        default=None, alias="self"
    )
    related: str | dict[str, typing.Any] | None = None
    first: str | dict[str, typing.Any] | None = None
    prev: str | dict[str, typing.Any] | None = None
    next: str | dict[str, typing.Any] | None = None
    last: str | dict[str, typing.Any] | None = None


class RelationshipData(_pydantic.BaseModel):
    """One resource identifier inside a relationship."""

    type: str = ""
    id: str = ""


class UnionContainer(_pydantic.BaseModel, typing.Generic[ItemT]):
    """Holds either one item or a list of items.

    The sequence variant takes precedence when encoding, so an empty list
    encodes as ``[]`` while a container with neither variant encodes as
    ``null``.
    """

    shape_label: typing.ClassVar[str] = "data"

    data_object: ItemT | None = None
    data_array: list[ItemT] | None = None

    @property
    def shape(self) -> Shape | None:
        if self.data_array is not None:
            return Shape.MANY
        if self.data_object is not None:
            return Shape.ONE
        return None

    @property
    def records(self) -> list[ItemT]:
        """The populated variant as a list."""
        if self.data_array is not None:
            return list(self.data_array)
        if self.data_object is not None:
            return [self.data_object]
        return []

    @classmethod
    def wrap(cls, value: typing.Any) -> dict[str, typing.Any]:
        """Turn a parsed object-or-array value into container input."""
        if Shape.of(value, what=cls.shape_label) is Shape.ONE:
            return {"data_object": value}
        return {"data_array": value}

    @classmethod
    def from_json(cls, raw: _record.Json) -> "UnionContainer[ItemT]":
        """Decode a raw object-or-array payload.

        Raises:
            ShapeError: If the payload is neither an object nor an array
            ParseError: If the payload is not valid JSON or holds bad items
        """
        shape = detect_shape(raw, what=cls.shape_label)
        value = _parse(raw)
        key = "data_object" if shape is Shape.ONE else "data_array"
        try:
            return cls.model_validate({key: value})
        except _pydantic.ValidationError as e:
            raise _errors.ParseError(str(e)) from e

    def to_json(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode()

    @_pydantic.model_serializer
    def serialize_shape(self) -> typing.Any:
        if self.data_array is not None:
            return self.data_array
        return self.data_object


class RelationshipDataContainer(UnionContainer[RelationshipData]):
    """The ``data`` member of a relationship."""

    shape_label: typing.ClassVar[str] = "relationship data"


class Relationship(_pydantic.BaseModel):
    """A named reference from a record to one or many other records."""

    links: Links | None = None
    data: RelationshipDataContainer | None = None
    meta: dict[str, typing.Any] | None = None

    @_pydantic.field_validator("data", mode="before")
    @classmethod
    def shape_data(cls, value: typing.Any) -> typing.Any:
        if value is None or isinstance(value, RelationshipDataContainer):
            return value
        return RelationshipDataContainer.wrap(value)


class Data(_pydantic.BaseModel):
    """A single resource object.

    ``attributes`` holds the raw JSON text of the attributes member. It is
    decoded only when handed to a target, so that the target's own field
    types drive the conversion.
    """

    type: str = ""
    id: str = ""
    attributes: bytes | None = None
    relationships: dict[str, Relationship] | None = None
    links: Links | None = None

    @_pydantic.field_validator("attributes", mode="before")
    @classmethod
    def keep_raw(cls, value: typing.Any) -> typing.Any:
        if value is None or isinstance(value, (bytes, bytearray)):
            return value
        return _pydantic_core.to_json(value)

    @_pydantic.field_serializer("attributes")
    def emit_raw(self, value: bytes | None) -> typing.Any:
        if value is None:
            return None
        return _pydantic_core.from_json(value)


class DataContainer(UnionContainer[Data]):
    """The primary ``data`` member of a document."""

    shape_label: typing.ClassVar[str] = "data"


class ErrorLinks(_pydantic.BaseModel):
    about: str | None = None


class ErrorSource(_pydantic.BaseModel):
    """Reference to the part of a request that caused an error."""

    pointer: str | None = None
    parameter: str | None = None


class ErrorObject(_pydantic.BaseModel):
    """A JSON:API error object.

    An error encoded without an ``id`` gets a freshly generated one.
    """

    id: str = ""
    links: ErrorLinks | None = None
    status: str | None = None
    code: str | None = None
    title: str | None = None
    detail: str | None = None
    source: ErrorSource | None = None
    meta: typing.Any = None

    def get_id(self) -> str:
        if self.id:
            return self.id
        return uuid.uuid4().hex

    def get_name(self) -> str:
        return "error"

    @_pydantic.field_serializer("id")
    def fill_id(self, value: str) -> str:
        return value or self.get_id()


class Document(_pydantic.BaseModel):
    """The top level of every JSON:API request and response.

    Primary data and errors may both be present; nothing here forbids it.
    """

    links: Links | None = None
    included: list[Data] | None = None
    data: DataContainer | None = None
    errors: list[ErrorObject] | None = None
    meta: dict[str, typing.Any] | None = None

    @_pydantic.field_validator("data", mode="before")
    @classmethod
    def shape_data(cls, value: typing.Any) -> typing.Any:
        if value is None or isinstance(value, DataContainer):
            return value
        return DataContainer.wrap(value)

    @classmethod
    def from_json(cls, payload: _record.Json) -> "Document":
        """Parse a JSON:API document.

        Args:
            payload: JSON string, bytes, or bytearray

        Returns:
            The parsed Document

        Raises:
            ParseError: If the payload is not valid JSON, or a member has the
                wrong JSON type
            ShapeError: If a data member is neither an object nor an array
        """
        value = _parse(payload)
        try:
            return cls.model_validate(value)
        except _pydantic.ValidationError as e:
            raise _errors.ParseError(str(e)) from e

    def to_json(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode()
