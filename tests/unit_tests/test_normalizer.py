"""Tests for parameter normalization and default merging."""

import io
from datetime import date

import pytest
from starlette.datastructures import FormData, QueryParams, UploadFile

from tool_protocol.errors import UnsupportedParamsError
from tool_protocol.models import FieldType, ParameterSchema
from tool_protocol.normalizer import get_default_params, merge_defaults, normalize_params, stringify


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, None),
        ("hi", "hi"),
        (True, "true"),
        (False, "false"),
        (2, "2"),
        (2.5, "2.5"),
        ({"a": [1, 2]}, '{"a":[1,2]}'),
        (b"bytes", "bytes"),
    ],
)
def test_stringify(value, expected) -> None:
    """Test single values convert to their string form."""
    assert stringify(value) == expected


@pytest.mark.parametrize(
    "raw",
    [
        {"text": "hi", "n": 2},
        QueryParams("text=hi&n=2"),
        FormData([("text", "hi"), ("n", "2")]),
        [("text", "hi"), ("n", "2")],
        "text=hi&n=2",
        "?text=hi&n=2",
    ],
    ids=["mapping", "query-params", "form-data", "pairs", "query-string", "query-string-with-mark"],
)
def test_input_shapes_normalize_identically(raw) -> None:
    """Test every supported container yields the same flat map."""
    assert normalize_params(raw) == {"text": "hi", "n": "2"}


MIXED = {"a": b"x", "b": [1, 2], "c": {"k": True}, "d": 1.5}


@pytest.mark.parametrize(
    "raw",
    [MIXED, list(MIXED.items()), FormData(list(MIXED.items()))],
    ids=["mapping", "pairs", "form-data"],
)
def test_non_string_values_normalize_identically(raw) -> None:
    """Test bytes, lists and nested maps convert the same way in every container."""
    assert normalize_params(raw) == {"a": "x", "b": "[1,2]", "c": '{"k":true}', "d": "1.5"}


def test_none_is_empty() -> None:
    """Test absent parameters normalize to an empty map."""
    assert normalize_params(None) == {}


def test_repeated_keys_last_value_wins() -> None:
    """Test multi-map keys resolve to their last value."""
    assert normalize_params(QueryParams("a=1&a=2&b=3")) == {"a": "2", "b": "3"}


def test_blank_query_values_are_kept() -> None:
    """Test empty query values survive as empty strings."""
    assert normalize_params("text=&n=1") == {"text": "", "n": "1"}


def test_uploaded_files_are_skipped() -> None:
    """Test non-text form parts are not treated as parameters."""
    upload = UploadFile(file=io.BytesIO(b"content"), filename="a.txt")
    form = FormData([("file", upload), ("text", "hi")])

    assert normalize_params(form) == {"text": "hi"}


def test_unknown_keys_pass_through() -> None:
    """Test keys without a schema are kept as-is."""
    assert normalize_params({"extra": True}) == {"extra": "true"}


def test_nested_values_json_cannot_encode_use_their_text() -> None:
    """Test nested values without a JSON form fall back to str()."""
    assert normalize_params({"extra": {"when": date(2024, 1, 1)}}) == {"extra": '{"when":"2024-01-01"}'}


@pytest.mark.parametrize(
    "raw",
    [{"a": b"\xff\xfe"}, [("a", b"\xff\xfe")]],
    ids=["mapping", "pairs"],
)
def test_undecodable_bytes_raise_with_key(raw) -> None:
    """Test non-UTF-8 bytes raise a typed error naming the key."""
    with pytest.raises(UnsupportedParamsError) as exc_info:
        normalize_params(raw)

    assert exc_info.value.key == "a"


@pytest.mark.parametrize("raw", [42, ["a", "b"], b"text=hi", object()])
def test_unsupported_container(raw) -> None:
    """Test unsupported containers raise a typed error."""
    with pytest.raises(UnsupportedParamsError):
        normalize_params(raw)


PARAMETERS = (
    ParameterSchema(name="text", type=FieldType.TEXT, required=True),
    ParameterSchema(name="indent", type=FieldType.NUMBER, default=2),
    ParameterSchema(name="sort", type=FieldType.BOOLEAN, default=False),
    ParameterSchema(name="note", type=FieldType.TEXT),
)


def test_get_default_params(make_definition) -> None:
    """Test only declared defaults are returned, as strings."""
    definition = make_definition(parameters=PARAMETERS, example_input={"text": "x"})

    assert get_default_params(definition) == {"indent": "2", "sort": "false"}
    assert get_default_params(PARAMETERS) == {"indent": "2", "sort": "false"}


def test_merge_fills_missing_values() -> None:
    """Test omitted parameters receive their default."""
    merged = merge_defaults({"text": "x"}, PARAMETERS)

    assert merged == {"text": "x", "indent": "2", "sort": "false"}


def test_merge_never_overwrites_supplied_values() -> None:
    """Test falsy supplied values are kept over defaults."""
    params = {"text": "", "indent": "0", "sort": "false"}

    assert merge_defaults(params, PARAMETERS) == params


def test_merge_treats_none_as_absent() -> None:
    """Test a None value is replaced by the default."""
    assert merge_defaults({"indent": None}, PARAMETERS)["indent"] == "2"


def test_merge_round_trip() -> None:
    """Test every default survives normalization and merging unchanged."""
    merged = merge_defaults(normalize_params({}), PARAMETERS)

    for param in PARAMETERS:
        if param.default is not None:
            assert merged[param.name] == stringify(param.default)
        else:
            assert param.name not in merged


def test_merge_does_not_mutate_input() -> None:
    """Test merging returns a new map."""
    params = {"text": "x"}
    merge_defaults(params, PARAMETERS)

    assert params == {"text": "x"}
