"""Tests for jsonapi_codec.cast module."""

import pytest
from datetime import datetime
import typing

import pydantic

from jsonapi_codec import Resource
from jsonapi_codec.cast import (
    cast_as,
    cast_as_union,
    cast_as_annotation,
    cast_into_annotated,
    cast_into_model,
    decode_attributes,
    ValidationError,
    cls_annotations,
)


def test_cast_as_basic_types():
    """Test basic type casting."""
    assert cast_as(5, int) == 5
    assert cast_as("5", int) == 5
    assert cast_as(5.5, float) == 5.5
    assert cast_as("5.5", float) == 5.5
    assert cast_as("hello", str) == "hello"


def test_cast_as_datetime():
    """Test datetime casting."""
    result = cast_as("2023-01-01T12:00:00", datetime)
    assert isinstance(result, datetime)
    assert result.year == 2023
    assert result.month == 1
    assert result.day == 1


def test_cast_as_datetime_already_datetime():
    """Test that already datetime objects pass through."""
    dt = datetime(2023, 1, 1, 12, 0, 0)
    result = cast_as(dt, datetime)
    assert result is dt


def test_cast_as_invalid_type():
    """Test that invalid type casting raises ValueError."""
    with pytest.raises((ValueError, TypeError)):
        cast_as("not_a_number", int)


def test_cast_as_rejects_none_and_containers():
    with pytest.raises(TypeError):
        cast_as(None, str)
    with pytest.raises(TypeError):
        cast_as({"a": 1}, str)


def test_cast_as_list():
    assert cast_as(["1", 2], list[int]) == [1, 2]
    with pytest.raises(TypeError):
        cast_as("12", list[int])


def test_cast_as_nested_model(manbearpig_model):
    result = cast_as({"moo": "a"}, manbearpig_model)
    assert isinstance(result, manbearpig_model)
    assert result.moo == "a"


def test_cast_as_union():
    """Test union type casting."""
    # Test int | str
    assert cast_as_union(5, typing.Union[int, str]) == 5
    assert cast_as_union("hello", typing.Union[int, str]) == "hello"

    # Test with optional
    assert cast_as_union(5, typing.Optional[int]) == 5
    assert cast_as_union(None, typing.Optional[int]) is None


def test_cast_as_union_python310_syntax():
    """Test Python 3.10+ union syntax (X | Y)."""
    union_type = int | str
    assert cast_as_union(5, union_type) == 5
    assert cast_as_union("hello", union_type) == "hello"


def test_cast_as_union_failure():
    """Test that union casting fails when no type matches."""
    with pytest.raises(TypeError, match="Failed to cast value"):
        cast_as_union([1, 2, 3], typing.Union[int, str])
    with pytest.raises(TypeError, match="Failed to cast value None"):
        cast_as_union(None, int | str)


def test_cast_as_annotation_simple():
    """Test annotation-based casting for simple types."""
    assert cast_as_annotation("5", int) == 5
    assert cast_as_annotation(5, int) == 5


def test_cast_as_annotation_union():
    """Test annotation-based casting for union types."""
    assert cast_as_annotation("5", typing.Union[int, str]) == 5
    assert cast_as_annotation("hello", typing.Union[int, str]) == "hello"


def test_cls_annotations():
    """Test extracting annotations from a class and its bases."""

    class Base:
        x: int
        kind: typing.ClassVar[str] = "base"

    class TestClass(Base):
        y: str
        z: float

    annotations = cls_annotations(TestClass)
    assert annotations["x"] is int
    assert annotations["y"] is str
    assert annotations["z"] is float
    assert "kind" not in annotations


def test_cls_annotations_no_annotations():
    """Test class with no annotations."""

    class NoAnnotations:
        pass

    annotations = cls_annotations(NoAnnotations)
    assert annotations == {}


def test_cast_into_annotated_success(widget_model):
    """Test casting attributes onto a plain instance."""
    widget = widget_model()
    cast_into_annotated({"name": "gear", "size": "4", "unknown": True}, widget)

    assert widget.name == "gear"
    assert widget.size == 4
    assert not hasattr(widget, "unknown")


def test_cast_into_annotated_keeps_absent_fields(widget_model):
    widget = widget_model()
    widget.name = "kept"
    cast_into_annotated({"size": 2}, widget)

    assert widget.name == "kept"
    assert widget.size == 2


def test_cast_into_annotated_multiple_errors(widget_model):
    """Test that every failing field is reported and nothing is assigned."""
    widget = widget_model()

    with pytest.raises(ValidationError) as exc_info:
        cast_into_annotated(
            {"name": "ok", "size": "not_a_number", "made_at": "not a date"}, widget
        )

    errors = exc_info.value.errors
    assert "size" in errors
    assert "made_at" in errors
    assert errors["size"]["type"] is int
    assert widget.name == ""


def test_validation_error_message(widget_model):
    """Test that ValidationError has informative message."""
    with pytest.raises(ValidationError) as exc_info:
        cast_into_annotated({"size": "nope"}, widget_model())

    error_msg = str(exc_info.value)
    assert "Validation failed" in error_msg
    assert "size: expected int" in error_msg


def test_cast_into_model_merges(manbearpig_model):
    mbp = manbearpig_model(moo="old", zoo="kept")
    cast_into_model({"moo": "new", "foo_time": "2014-11-10T16:30:48Z"}, mbp)

    assert mbp.moo == "new"
    assert mbp.zoo == "kept"
    assert mbp.foo_time.year == 2014


def test_cast_into_model_invalid(manbearpig_model):
    mbp = manbearpig_model(moo="old")
    with pytest.raises(pydantic.ValidationError):
        cast_into_model({"moo": ["not", "a", "string"]}, mbp)
    assert mbp.moo == "old"


def test_cast_into_model_constructed_instance():
    class Strict(pydantic.BaseModel):
        name: str
        size: int = 0

    target = Strict.model_construct()
    cast_into_model({"name": "a"}, target)
    assert target.name == "a"
    assert target.size == 0

    with pytest.raises(pydantic.ValidationError):
        cast_into_model({"size": 1}, Strict.model_construct())


def test_cast_into_model_aliased_field_by_name_or_alias():
    class Aliased(Resource):
        resource_name: typing.ClassVar[str] = "aliased"

        foo_time: str = pydantic.Field("", alias="fooTime")
        zoo: str = ""

    target = Aliased(fooTime="old", zoo="kept")

    cast_into_model({"foo_time": "new"}, target)
    assert target.foo_time == "new"
    assert target.zoo == "kept"

    cast_into_model({"fooTime": "newer"}, target)
    assert target.foo_time == "newer"


def test_cast_into_model_alias_only_model_ignores_field_name():
    class AliasOnly(pydantic.BaseModel):
        foo_time: str = pydantic.Field("", alias="fooTime")

    target = AliasOnly(fooTime="old")
    cast_into_model({"foo_time": "ignored"}, target)
    assert target.foo_time == "old"


def test_decode_attributes_dispatch(manbearpig_model, widget_model):
    mbp = manbearpig_model()
    decode_attributes(b'{"moo": "m"}', mbp)
    assert mbp.moo == "m"

    widget = widget_model()
    decode_attributes(b'{"size": 9}', widget)
    assert widget.size == 9


def test_decode_attributes_not_an_object(widget_model):
    with pytest.raises(TypeError, match="attributes must be a JSON object"):
        decode_attributes(b"[]", widget_model())


def test_decode_attributes_drops_id_for_identified_targets(manbearpig_model):
    mbp = manbearpig_model(id="1")
    decode_attributes(b'{"id": 999, "moo": "m"}', mbp)

    assert mbp.id == "1"
    assert mbp.moo == "m"
