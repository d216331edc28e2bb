"""Decode and encode JSON:API documents using Pydantic.

A Python package for reading JSON:API documents, whose ``data`` members may
be a single object or an array, into resource instances and lists, merging
array payloads into existing lists by resource id.
"""

__version__ = "0.1.0"

import logging

from jsonapi_codec.unmarshal import unmarshal, unmarshal_document, unmarshal_record
from jsonapi_codec.marshal import marshal, marshal_errors, marshal_record
from jsonapi_codec.result import UnmarshalResult
from jsonapi_codec.resource import (
    Resource,
    ResourceGetIdentifier,
    ResourceSetIdentifier,
    ResourceTyper,
    UnmarshalIdentifier,
)
from jsonapi_codec.document import (
    Data,
    DataContainer,
    Document,
    ErrorLinks,
    ErrorObject,
    ErrorSource,
    Links,
    Relationship,
    RelationshipData,
    RelationshipDataContainer,
    Shape,
    detect_shape,
)
from jsonapi_codec.errors import (
    AttributeDecodeError,
    CollectionTypeMismatchError,
    EmptyDocumentError,
    IdentitySetError,
    JsonApiError,
    MissingInterfaceError,
    MissingModelError,
    MissingTypeError,
    ParseError,
    ShapeError,
    TargetNilError,
    TargetNotPointerError,
    TypeMismatchError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "unmarshal",
    "unmarshal_document",
    "unmarshal_record",
    "marshal",
    "marshal_errors",
    "marshal_record",
    "UnmarshalResult",
    "Resource",
    "ResourceGetIdentifier",
    "ResourceSetIdentifier",
    "ResourceTyper",
    "UnmarshalIdentifier",
    "Data",
    "DataContainer",
    "Document",
    "ErrorLinks",
    "ErrorObject",
    "ErrorSource",
    "Links",
    "Relationship",
    "RelationshipData",
    "RelationshipDataContainer",
    "Shape",
    "detect_shape",
    "AttributeDecodeError",
    "CollectionTypeMismatchError",
    "EmptyDocumentError",
    "IdentitySetError",
    "JsonApiError",
    "MissingInterfaceError",
    "MissingModelError",
    "MissingTypeError",
    "ParseError",
    "ShapeError",
    "TargetNilError",
    "TargetNotPointerError",
    "TypeMismatchError",
]
