"""Encode resource instances and lists as JSON:API documents."""

import collections.abc as _abc
import typing as _typing

import pydantic as _pydantic
import pydantic_core as _pydantic_core

from . import cast as _cast
from . import document as _document
from . import errors as _errors
from . import resource as _resource


def _attributes_of(source: _typing.Any) -> dict[str, _typing.Any]:
    if isinstance(source, _pydantic.BaseModel):
        attributes = source.model_dump(mode="json", by_alias=True)
    else:
        attributes = _pydantic_core.to_jsonable_python(
            {
                name: getattr(source, name)
                for name in _cast.cls_annotations(type(source))
                if hasattr(source, name)
            }
        )
    # the id travels in the envelope only
    attributes.pop("id", None)
    return attributes


def marshal_record(source: _typing.Any) -> _document.Data:
    """Build the resource object for one resource instance.

    Raises:
        MissingInterfaceError: If source lacks get_id or get_name
    """
    if not isinstance(source, _resource.ResourceGetIdentifier):
        raise _errors.MissingInterfaceError(
            f"source {type(source).__qualname__} must implement "
            "ResourceGetIdentifier (get_id)"
        )
    if not isinstance(source, _resource.ResourceTyper):
        raise _errors.MissingInterfaceError(
            f"source {type(source).__qualname__} must implement "
            "ResourceTyper (get_name)"
        )
    return _document.Data(
        type=source.get_name(),
        id=source.get_id(),
        attributes=_attributes_of(source),
    )


def marshal(
    source: _typing.Any,
    *,
    links: _document.Links | dict[str, _typing.Any] | None = None,
    meta: dict[str, _typing.Any] | None = None,
    included: _typing.Iterable[_typing.Any] | None = None,
) -> bytes:
    """Encode a resource or a list of resources as a JSON:API document.

    A list always encodes ``data`` as an array, so an empty list gives
    ``"data": []``.

    Args:
        source: Resource instance, or sequence of resources
        links: Top-level links
        meta: Top-level meta object
        included: Resources for the ``included`` member

    Returns:
        The encoded document

    Raises:
        TargetNilError: If source is None
        MissingInterfaceError: If a resource lacks get_id or get_name
    """
    if source is None:
        raise _errors.TargetNilError()

    if isinstance(source, _abc.Sequence) and not isinstance(
        source, (str, bytes, bytearray)
    ):
        container = _document.DataContainer(
            data_array=[marshal_record(item) for item in source]
        )
    else:
        container = _document.DataContainer(data_object=marshal_record(source))

    document = _document.Document(
        data=container,
        links=links,
        meta=meta,
        included=[marshal_record(item) for item in included]
        if included is not None
        else None,
    )
    return document.to_json()


def marshal_errors(
    errors: _typing.Iterable[_document.ErrorObject | dict[str, _typing.Any]],
) -> bytes:
    """Encode an error document.

    Errors without an id get a generated one.
    """
    return _document.Document(errors=list(errors)).to_json()
