import inspect
import typing
from datetime import datetime
import types

import dateutil.parser  # type: ignore[import-untyped]
import pydantic
import pydantic_core


def cast_as(value: typing.Any, annotation: typing.Any) -> typing.Any:
    """Cast a value to the specified annotation type.

    Args:
        value: The value to cast
        annotation: The target type annotation

    Returns:
        The value cast to the annotation type

    Raises:
        ValueError: If value cannot be converted to annotation type
        TypeError: If casting fails
        dateutil.parser.ParserError: If datetime parsing fails
    """
    if annotation is typing.Any:
        return value
    origin = typing.get_origin(annotation)
    if origin is list:
        if not isinstance(value, list):
            raise TypeError(f"expected a list, got {type(value).__name__}")
        (item_annotation,) = typing.get_args(annotation) or (typing.Any,)
        return [cast_as_annotation(item, item_annotation) for item in value]
    if origin is dict:
        if not isinstance(value, dict):
            raise TypeError(f"expected an object, got {type(value).__name__}")
        return dict(value)
    if isinstance(value, annotation):
        return value
    if value is None:
        raise TypeError(f"None is not a valid {_annotation_name(annotation)}")
    if annotation in (int, float, str, bool) and isinstance(value, (list, dict)):
        raise TypeError(
            f"cannot cast {type(value).__name__} to {_annotation_name(annotation)}"
        )
    if annotation is datetime:
        return dateutil.parser.parse(value)
    if isinstance(value, dict) and isinstance(annotation, type):
        if issubclass(annotation, pydantic.BaseModel):
            return annotation.model_validate(value)
        if cls_annotations(annotation):
            instance = annotation.__new__(annotation)
            cast_into_annotated(value, instance)
            return instance
    return annotation(value)


def _is_union_type(annotation: typing.Any) -> bool:
    """Check if annotation is a union type (Union[X, Y] or X | Y).

    Args:
        annotation: The type annotation to check

    Returns:
        True if annotation is a union type, False otherwise
    """
    origin = typing.get_origin(annotation)
    if origin is typing.Union:
        return True

    # X | Y builds a types.UnionType rather than a typing.Union
    return isinstance(annotation, types.UnionType) or origin is types.UnionType


def _get_union_args(annotation: typing.Any) -> tuple[type, ...]:
    """Get the arguments from a union type annotation.

    Args:
        annotation: The union type annotation

    Returns:
        Tuple of types in the union

    Raises:
        ValueError: If annotation is not a union type
    """
    if not _is_union_type(annotation):
        raise ValueError(f"{annotation} is not a union type")
    return typing.get_args(annotation)


def cast_as_union(value: typing.Any, union_annotation: typing.Any) -> typing.Any:
    """Cast a value to one of the types in a union.

    Args:
        value: The value to cast
        union_annotation: The union type annotation (Union[X, Y] or X | Y)

    Returns:
        The value cast to the first matching type in the union

    Raises:
        TypeError: If value cannot be cast to any type in the union
    """
    union_types = _get_union_args(union_annotation)
    if value is None:
        if type(None) in union_types:
            return None
        raise TypeError(
            f"Failed to cast value None to any of the union types: "
            f"{', '.join(_annotation_name(t) for t in union_types)}"
        )
    attempted_types = []
    for _type in union_types:
        if _type is type(None):
            continue
        try:
            # Don't allow casting containers (list, dict, tuple) to scalar types
            if _type in (int, float, str, bool) and isinstance(
                value, (list, dict, tuple, set)
            ):
                attempted_types.append(_type)
                continue
            return cast_as(value, _type)
        except (ValueError, TypeError, dateutil.parser.ParserError):
            attempted_types.append(_type)
            continue
    raise TypeError(
        f"Failed to cast value {value!r} to any of the union types: "
        f"{', '.join(_annotation_name(t) for t in attempted_types)}"
    )


def cls_annotations(cls: type) -> dict[str, typing.Any]:
    """Get type annotations from a class and its bases.

    Args:
        cls: The class to extract annotations from

    Returns:
        Dictionary mapping field names to their type annotations
    """
    annotations: dict[str, typing.Any] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, annotation in inspect.get_annotations(klass).items():
            if typing.get_origin(annotation) is typing.ClassVar:
                continue
            annotations[name] = annotation
    return annotations


def cast_as_annotation(value: typing.Any, annotation: typing.Any) -> typing.Any:
    """Cast a value according to its type annotation.

    Handles both simple types and union types.

    Args:
        value: The value to cast
        annotation: The type annotation (can be a simple type or union)

    Returns:
        The value cast to match the annotation

    Raises:
        TypeError: If casting fails
        ValueError: If value cannot be converted
    """
    if _is_union_type(annotation):
        return cast_as_union(value, annotation)
    return cast_as(value, annotation)


def _annotation_name(annotation: typing.Any) -> str:
    return getattr(annotation, "__name__", str(annotation))


class ValidationError(ValueError):
    """Raised when casting attributes onto a plain class fails.

    Attributes:
        errors: Dictionary mapping field names to error details
    """

    def __init__(self, errors: dict[str, dict[str, typing.Any]]) -> None:
        """Initialize ValidationError with error details.

        Args:
            errors: Dictionary mapping field names to error information
                   Each error dict should contain 'type', 'input_value', 'input_type'
        """
        self.errors = errors
        error_msg = ", ".join(
            f"{field}: expected {_annotation_name(err['type'])}, got {err['input_type'].__name__} ({err['input_value']!r})"
            for field, err in errors.items()
        )
        super().__init__(f"Validation failed: {error_msg}")


def cast_into_annotated(values: dict[str, typing.Any], target: typing.Any) -> None:
    """Cast attribute values onto an instance of a plain annotated class.

    Only keys naming an annotation of the target's class are used. Every
    value is cast before any attribute is assigned, so a failure leaves the
    target untouched.

    Args:
        values: Decoded attributes object
        target: Instance to update

    Raises:
        ValidationError: If any value cannot be cast
    """
    annotations = cls_annotations(type(target))
    cast_values: dict[str, typing.Any] = {}
    errors: dict[str, dict[str, typing.Any]] = {}

    for key, value in values.items():
        if key not in annotations:
            continue

        annotation = annotations[key]
        try:
            cast_values[key] = cast_as_annotation(value, annotation)
        except (
            ValueError,
            TypeError,
            dateutil.parser.ParserError,
            pydantic.ValidationError,
        ) as e:
            errors[key] = {
                "type": annotation,
                "input_value": value,
                "input_type": type(value),
                "error": str(e),
            }

    if errors:
        raise ValidationError(errors)

    for key, value in cast_values.items():
        setattr(target, key, value)


def _input_key(name: str, field: typing.Any) -> str:
    if isinstance(field.validation_alias, str):
        return field.validation_alias
    return field.alias or name


def cast_into_model(
    values: dict[str, typing.Any], target: pydantic.BaseModel
) -> None:
    """Merge attribute values into a Pydantic model instance.

    The target's current field values are overlaid with ``values`` and the
    result is validated by the target's class; fields missing from
    ``values`` keep their current value. When the model accepts fields by
    name as well as by alias, an incoming key in either form replaces the
    current value.

    Args:
        values: Decoded attributes object
        target: Model instance to update

    Raises:
        pydantic.ValidationError: If the merged values do not validate
    """
    model = type(target)
    config = model.model_config
    by_name = config.get("populate_by_name") or config.get("validate_by_name")

    current: dict[str, typing.Any] = {}
    renames: dict[str, str] = {}
    for name, field in model.model_fields.items():
        key = _input_key(name, field)
        if by_name and key != name:
            renames[name] = key
        # instances built with model_construct() may lack required fields
        if name in target.__dict__:
            current[key] = target.__dict__[name]

    incoming = {renames.get(key, key): value for key, value in values.items()}
    validated = model.model_validate({**current, **incoming})
    for name in model.model_fields:
        if name in validated.__dict__:
            setattr(target, name, validated.__dict__[name])


def decode_attributes(raw: bytes, target: typing.Any) -> None:
    """Decode a raw attributes payload into a target using its own rules.

    A target with an ``unmarshal_attributes(raw)`` method decodes the bytes
    itself. Otherwise the payload must be a JSON object, merged into
    Pydantic models with :func:`cast_into_model` and into plain annotated
    classes with :func:`cast_into_annotated`. An ``id`` key is dropped for
    targets with ``set_id``: the identifier comes from the record envelope.

    Args:
        raw: Raw JSON text of the attributes member
        target: Instance to update

    Raises:
        TypeError: If the payload is not a JSON object
        ValueError: If the payload is not valid JSON
        ValidationError: If a value cannot be cast onto a plain class
        pydantic.ValidationError: If the merged values do not validate
    """
    unmarshal_attributes = getattr(target, "unmarshal_attributes", None)
    if callable(unmarshal_attributes):
        unmarshal_attributes(raw)
        return

    values = pydantic_core.from_json(raw)
    if not isinstance(values, dict):
        raise TypeError(
            f"attributes must be a JSON object, got {type(values).__name__}"
        )
    if callable(getattr(target, "set_id", None)):
        values.pop("id", None)
    if isinstance(target, pydantic.BaseModel):
        cast_into_model(values, target)
    else:
        cast_into_annotated(values, target)
