import collections.abc as _abc
import copy as _copy
import logging
import typing as _typing

import pydantic as _pydantic

from . import cast as _cast
from . import document as _document
from . import errors as _errors
from . import record as _record
from . import resource as _resource
from . import result as _result

logger = logging.getLogger(__name__)

# values that cannot be populated in place
_IMMUTABLE_TARGETS = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    memoryview,
    tuple,
    frozenset,
    range,
)


def _check_target(target: _record.Target) -> None:
    if target is None:
        raise _errors.TargetNilError()
    if isinstance(target, type) or isinstance(target, _IMMUTABLE_TARGETS):
        raise _errors.TargetNotPointerError(target)


def _is_collection(target: _record.Target) -> bool:
    return isinstance(target, _abc.MutableSequence)


def unmarshal_record(record: _document.Data, target: _record.Target) -> None:
    """Decode one resource object into one target instance.

    The record's attributes are merged into the target, then the record's id
    is assigned, so an ``id`` inside the attributes never wins over the
    envelope.

    Args:
        record: Resource object to decode
        target: Instance implementing ``set_id`` and ``get_name``

    Raises:
        MissingInterfaceError: If the target lacks set_id or get_name
        MissingTypeError: If the record has no type
        TypeMismatchError: If the record type differs from the target's name
        AttributeDecodeError: If the target rejects the attributes
        IdentitySetError: If the target's set_id raises
    """
    if not isinstance(target, _resource.UnmarshalIdentifier):
        raise _errors.MissingInterfaceError(
            f"target {type(target).__qualname__} must implement "
            "UnmarshalIdentifier (set_id)"
        )

    if not record.type:
        raise _errors.MissingTypeError()

    if not isinstance(target, _resource.ResourceTyper):
        raise _errors.MissingInterfaceError(
            f"target {type(target).__qualname__} must implement "
            "ResourceTyper (get_name)"
        )
    target_type = target.get_name()
    if record.type != target_type:
        raise _errors.TypeMismatchError(record.type, target_type)

    if record.attributes is not None:
        try:
            _cast.decode_attributes(record.attributes, target)
        except _errors.JsonApiError:
            raise
        except Exception as e:
            raise _errors.AttributeDecodeError(e) from e

    try:
        target.set_id(record.id)
    except _errors.JsonApiError:
        raise
    except Exception as e:
        raise _errors.IdentitySetError(e) from e


def _find_by_id(items: list[_typing.Any], id: str) -> int | None:
    """Index of the first item whose get_id() equals id, or None."""
    for index, item in enumerate(items):
        if not isinstance(item, _resource.ResourceGetIdentifier):
            raise _errors.MissingInterfaceError(
                f"existing item {type(item).__qualname__} at index {index} "
                "must implement ResourceGetIdentifier (get_id)"
            )
        if item.get_id() == id:
            return index
    return None


def _item_model(target: _abc.MutableSequence[_typing.Any], model: type | None) -> type:
    if model is not None:
        return model
    if len(target) == 0:
        raise _errors.MissingModelError()
    return type(target[0])


def _new_item(model: type) -> _typing.Any:
    """Create an empty instance of model without requiring any field."""
    if issubclass(model, _pydantic.BaseModel):
        return model.model_construct()
    try:
        return model()
    except TypeError:
        # __init__ needs arguments: create the instance without calling it
        return model.__new__(model)


def _write_back(source: _typing.Any, target: _typing.Any) -> None:
    """Copy the state of a decoded copy onto the item it was taken from."""
    target.__dict__.update(source.__dict__)
    if isinstance(target, _pydantic.BaseModel):
        object.__setattr__(
            target, "__pydantic_fields_set__", set(source.__pydantic_fields_set__)
        )
        object.__setattr__(target, "__pydantic_extra__", source.__pydantic_extra__)
        object.__setattr__(
            target, "__pydantic_private__", source.__pydantic_private__
        )


def _reconcile(
    records: list[_document.Data],
    target: _abc.MutableSequence[_typing.Any],
    model: type | None,
) -> None:
    """Merge records into a list target by id.

    Records matching an item's id are decoded into a copy of that item;
    other records are appended as new items. Once every record has decoded,
    the copies are written back into the original items, so references held
    by the caller see the update, and the target is changed once.
    """
    working = list(target)
    originals: dict[int, _typing.Any] = {}
    for record in records:
        index = _find_by_id(working, record.id)
        if index is None:
            item = _new_item(_item_model(target, model))
            unmarshal_record(record, item)
            working.append(item)
            logger.debug(
                "Appended %s record %r at index %d",
                record.type,
                record.id,
                len(working) - 1,
            )
        else:
            if index < len(target):
                originals.setdefault(index, target[index])
            item = _copy.copy(working[index])
            unmarshal_record(record, item)
            working[index] = item
            logger.debug(
                "Merged %s record %r into index %d", record.type, record.id, index
            )

    for index, original in originals.items():
        _write_back(working[index], original)
        working[index] = original
    target[:] = working
    logger.debug("Reconciled %d records into list of %d", len(records), len(working))


def unmarshal_document(
    document: _document.Document,
    target: _record.Target,
    *,
    model: type | None = None,
) -> None:
    """Populate a target from an already parsed document.

    Args:
        document: Parsed JSON:API document
        target: Resource instance, or list of resources for array data
        model: Item type for new list items (defaults to the type of the
            first existing item)

    Raises:
        JsonApiError: Any error described in :func:`unmarshal`
    """
    _check_target(target)

    container = document.data
    if container is None or container.shape is None:
        raise _errors.EmptyDocumentError()

    if container.shape is _document.Shape.ONE:
        unmarshal_record(
            _typing.cast(_document.Data, container.data_object), target
        )
        return

    if not _is_collection(target):
        raise _errors.CollectionTypeMismatchError(type(target), model)
    _reconcile(
        _typing.cast(list[_document.Data], container.data_array), target, model
    )


def unmarshal(
    payload: _record.Json,
    target: _record.Target,
    *,
    model: type | None = None,
    raise_errors: bool = False,
) -> _result.UnmarshalResult:
    """Decode a JSON:API payload into a target.

    A single resource object is decoded into ``target`` directly. An array
    of resource objects requires ``target`` to be a list: records whose id
    matches an existing item update that item at its index, the rest are
    appended in document order. On error the list is left as it was.

    Args:
        payload: JSON string, bytes, or bytearray
        target: Resource instance, or list of resources
        model: Item type for new list items (defaults to the type of the
            first existing item)
        raise_errors: If True, raise exceptions instead of returning them in result

    Returns:
        UnmarshalResult containing error (if any), the target, and the payload

    Raises:
        JsonApiError: If raise_errors=True and decoding fails
    """
    try:
        _check_target(target)
        document = _document.Document.from_json(payload)
        unmarshal_document(document, target, model=model)
    except _errors.JsonApiError as e:
        if raise_errors:
            raise
        return _result.UnmarshalResult(e, None, payload)
    return _result.UnmarshalResult(None, target, payload)
