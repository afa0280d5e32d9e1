"""
Tests for body serializers.
"""

import json

import pytest

from alchemy_http.serialization import JsonSerializer, RawSerializer, Serializer, media_type


@pytest.mark.parametrize(
    "content_type,accepted",
    [
        ("application/json", True),
        ("application/json; charset=utf-8", True),
        ("Application/JSON", True),
        ("application/problem+json", True),
        ("text/plain", False),
        ("", False),
        (None, False),
    ],
)
def test_json_accepts(content_type, accepted):
    assert JsonSerializer().accepts(content_type) is accepted


def test_json_encode_decode():
    serializer = JsonSerializer(sort_keys=True)

    assert serializer.encode({"b": 1, "a": [1, 2]}) == b'{"a": [1, 2], "b": 1}'
    assert serializer.decode(b'{"a": null}') == {"a": None}


def test_json_decode_invalid():
    with pytest.raises(json.JSONDecodeError):
        JsonSerializer().decode(b"not json")


def test_raw_serializer():
    serializer = RawSerializer()

    assert not serializer.accepts("application/octet-stream")
    assert serializer.encode(bytearray(b"abc")) == b"abc"
    assert serializer.decode(b"abc") == b"abc"
    with pytest.raises(TypeError):
        serializer.encode({"a": 1})


def test_serializers_satisfy_protocol():
    assert isinstance(JsonSerializer(), Serializer)
    assert isinstance(RawSerializer(), Serializer)


def test_media_type():
    assert media_type("text/html; charset=UTF-8") == "text/html"
    assert media_type(None) == ""
