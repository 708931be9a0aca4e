"""Tests for response part parsing"""

import base64
from types import SimpleNamespace

import pytest

from co_drawing.core.errors import DecodeFailure, ParseFailure
from co_drawing.services.response_parser import (
    decode_image, parse_generate_response, parse_response_parts
)

from conftest import image_part, make_png, response_with


def test_text_then_image():
    result = parse_response_parts([{"text": "hi"}, image_part(b"XYZ")])
    assert result.message == "hi"
    assert result.image_bytes == b"XYZ"
    assert result.mime_type == "image/png"


def test_image_only():
    result = parse_response_parts([image_part(b"XYZ")])
    assert result.message is None
    assert result.image_bytes == b"XYZ"


def test_text_only_is_parse_failure():
    with pytest.raises(ParseFailure):
        parse_response_parts([{"text": "I can't draw that"}])


def test_first_of_each_kind_wins():
    result = parse_response_parts([
        image_part(b"first"),
        {"text": "one"},
        {"text": "two"},
        image_part(b"second"),
    ])
    assert result.message == "one"
    assert result.image_bytes == b"first"


def test_rest_shape_with_base64():
    encoded = base64.b64encode(b"\x89PNG").decode("ascii")
    result = parse_response_parts([{"inlineData": {"mimeType": "image/png", "data": encoded}}])
    assert result.image_bytes == b"\x89PNG"
    assert result.mime_type == "image/png"


def test_invalid_base64_is_decode_failure():
    with pytest.raises(DecodeFailure):
        parse_response_parts([{"inlineData": {"mimeType": "image/png", "data": "***"}}])


def test_sdk_objects():
    parts = [
        SimpleNamespace(text="done", inline_data=None),
        SimpleNamespace(text=None, inline_data=SimpleNamespace(data=b"IMG", mime_type="image/jpeg")),
    ]
    response = SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))])

    result = parse_generate_response(response)
    assert (result.message, result.image_bytes, result.mime_type) == ("done", b"IMG", "image/jpeg")


def test_generate_response_dict():
    result = parse_generate_response(response_with({"text": "a"}, image_part(b"B")))
    assert result.has_image


def test_no_candidates():
    with pytest.raises(ParseFailure, match="no candidates"):
        parse_generate_response({"candidates": []})


def test_blocked_prompt():
    with pytest.raises(ParseFailure, match="SAFETY"):
        parse_generate_response({"candidates": [], "promptFeedback": {"blockReason": "SAFETY"}})


def test_empty_parts():
    with pytest.raises(ParseFailure):
        parse_generate_response(response_with())


def test_decode_image(qapp):
    image = decode_image(make_png(64, 32))
    assert (image.width(), image.height()) == (64, 32)


def test_decode_corrupt_bytes(qapp):
    with pytest.raises(DecodeFailure):
        decode_image(b"not an image")
