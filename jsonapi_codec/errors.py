"""Exceptions raised or returned by the codec."""

import typing


class JsonApiError(Exception):
    """Base class for every error produced while decoding or encoding."""


class ShapeError(JsonApiError):
    """A data union is neither a JSON object nor a JSON array."""


class ParseError(JsonApiError):
    """The payload is not valid JSON or not a valid document.

    The message is the underlying parser's message, unchanged.
    """


class EmptyDocumentError(JsonApiError):
    """The document carries no primary data."""

    def __init__(self) -> None:
        super().__init__(
            "Source JSON is empty and does not satisfy the JSONAPI specification!"
        )


class TargetNilError(JsonApiError):
    """The decode target is None."""

    def __init__(self) -> None:
        super().__init__("target must not be None")


class TargetNotPointerError(JsonApiError):
    """The decode target cannot be written to in place."""

    def __init__(self, target: typing.Any) -> None:
        self.target_type = _type_name(
            target if isinstance(target, type) else type(target)
        )
        super().__init__(
            f"target must be a mutable instance or list, got {self.target_type}"
        )


class MissingInterfaceError(JsonApiError):
    """A target or collection item lacks a required resource capability."""


class MissingTypeError(JsonApiError):
    """An incoming record has an empty type name."""

    def __init__(self) -> None:
        super().__init__("invalid record, no type was specified")


class TypeMismatchError(JsonApiError):
    """An incoming record's type name differs from the target's name.

    Attributes:
        incoming_type: Type name found in the payload
        target_type: Type name declared by the target
    """

    def __init__(self, incoming_type: str, target_type: str) -> None:
        self.incoming_type = incoming_type
        self.target_type = target_type
        super().__init__(
            f"Type {incoming_type} in JSON does not match target type {target_type}"
        )


class CollectionTypeMismatchError(JsonApiError):
    """The document carries an array but the target is not a list.

    Attributes:
        target_type: Qualified name of the offending target type
        model: Qualified name of the expected item type, if known
    """

    def __init__(self, target_type: type, model: type | None = None) -> None:
        self.target_type = _type_name(target_type)
        self.model = _type_name(model) if model is not None else None
        message = f"Cannot unmarshal array to non-list target {self.target_type}"
        if self.model is not None:
            message += f" (expected list[{self.model}])"
        super().__init__(message)


class MissingModelError(JsonApiError):
    """A collection decode cannot tell which item type to create."""

    def __init__(self) -> None:
        super().__init__(
            "model is required to create items for an empty list target"
        )


class _WrappedError(JsonApiError):
    """Carries an exception raised by the target's own code."""

    def __init__(self, original: BaseException) -> None:
        self.original = original
        super().__init__(str(original))


class AttributeDecodeError(_WrappedError):
    """The target failed to decode the record's attributes."""


class IdentitySetError(_WrappedError):
    """The target's set_id raised."""


def _type_name(cls: type) -> str:
    module = getattr(cls, "__module__", "")
    name = getattr(cls, "__qualname__", repr(cls))
    if module in ("", "builtins"):
        return name
    return f"{module}.{name}"
