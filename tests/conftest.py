"""Shared pytest fixtures for jsonapi_codec tests."""

import typing
from datetime import datetime

import pytest

from jsonapi_codec import Resource


class Manbearpig(Resource):
    """Test resource with string and datetime attributes."""

    resource_name: typing.ClassVar[str] = "manbearpigs"

    moo: str = ""
    zoo: str = ""
    foo_time: datetime | None = None
    zoo_time: datetime | None = None


class NestedManbearpigs(Resource):
    """Test resource holding a list of nested models."""

    resource_name: typing.ClassVar[str] = "nestedManbearpigs"

    mbps: list[Manbearpig] = []


class FisherBoy:
    """Plain class implementing none of the resource capabilities."""

    fish: str

    def __init__(self) -> None:
        self.id = ""
        self.fish = ""


class Widget:
    """Plain annotated class implementing every resource capability."""

    name: str
    size: int
    made_at: datetime | None

    def __init__(self) -> None:
        self.id = ""
        self.name = ""
        self.size = 0
        self.made_at = None

    def get_id(self) -> str:
        return self.id

    def set_id(self, id: str) -> None:
        self.id = id

    def get_name(self) -> str:
        return "widgets"


SINGLE = b"""
{
    "data": {
        "id": "1",
        "type": "manbearpigs",
        "attributes": {
            "moo": "Manbearpig",
            "zoo": "Pigglywiggly",
            "foo_time": "2014-11-10T16:30:48.823Z"
        }
    }
}
"""

COLLECTION = b"""
{
    "data": [
        {
            "id": "1",
            "type": "manbearpigs",
            "attributes": {
                "moo": "Manbearpig",
                "zoo": "Pigglywiggly",
                "foo_time": "2014-11-10T16:30:48.823Z"
            }
        },
        {
            "id": "2",
            "type": "manbearpigs",
            "attributes": {
                "moo": "Man bear pig",
                "zoo": "Piggly wiggly",
                "foo_time": "2014-11-10T16:30:48.823Z",
                "zoo_time": "2014-11-10T16:30:48.823Z"
            }
        }
    ]
}
"""


@pytest.fixture
def manbearpig_model() -> type[Resource]:
    """Fixture providing the Manbearpig resource model."""
    return Manbearpig


@pytest.fixture
def nested_manbearpigs_model() -> type[Resource]:
    """Fixture providing the NestedManbearpigs resource model."""
    return NestedManbearpigs


@pytest.fixture
def fisher_boy_model() -> type:
    """Fixture providing a plain class without resource capabilities."""
    return FisherBoy


@pytest.fixture
def widget_model() -> type:
    """Fixture providing a plain annotated resource class."""
    return Widget


@pytest.fixture
def single_payload() -> bytes:
    """Fixture providing a single manbearpig document."""
    return SINGLE


@pytest.fixture
def collection_payload() -> bytes:
    """Fixture providing a two-record manbearpig document."""
    return COLLECTION


@pytest.fixture
def existing_manbearpigs() -> list[Manbearpig]:
    """Fixture providing an already populated list."""
    return [
        Manbearpig(id="1", moo="old moo", zoo="kept zoo"),
        Manbearpig(id="7", moo="untouched"),
    ]
