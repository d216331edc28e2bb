"""Capabilities a resource type exposes to the codec."""

import typing

import pydantic as _pydantic


@typing.runtime_checkable
class ResourceGetIdentifier(typing.Protocol):
    """Reports the identifier of a resource."""

    def get_id(self) -> str: ...


@typing.runtime_checkable
class ResourceSetIdentifier(typing.Protocol):
    """Accepts the identifier of a resource.

    Implementations raise to reject an identifier.
    """

    def set_id(self, id: str) -> None: ...


@typing.runtime_checkable
class ResourceTyper(typing.Protocol):
    """Reports the type name a resource is published under."""

    def get_name(self) -> str: ...


@typing.runtime_checkable
class UnmarshalIdentifier(typing.Protocol):
    """The minimum a decode target must implement."""

    def set_id(self, id: str) -> None: ...


class Resource(_pydantic.BaseModel):
    """Pydantic base class implementing every resource capability.

    Subclasses set ``resource_name`` and give every field a default, so that
    ``Model()`` is a usable empty instance::

        class Article(Resource):
            resource_name: typing.ClassVar[str] = "articles"

            title: str = ""

    The ``id`` field travels in the record envelope, never in attributes.
    """

    model_config = _pydantic.ConfigDict(populate_by_name=True)

    resource_name: typing.ClassVar[str] = ""

    id: str = _pydantic.Field(default="", exclude=True)

    def get_id(self) -> str:
        return self.id

    def set_id(self, id: str) -> None:
        self.id = id

    def get_name(self) -> str:
        return self.resource_name
