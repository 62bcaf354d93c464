"""
Order Key Codec Tests
=====================
Wire arrays, length-prefixed storage form and text parsing.
"""

import json
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ordering.codec import (
    OrderKeyError, MAX_KEY_LENGTH,
    to_wire, from_wire, encode_key, decode_key, format_key, parse_key,
)
from ordering.keys import new_key_between


# ═══════════════════════════════════════════════════════════════════
# Wire
# ═══════════════════════════════════════════════════════════════════

class TestWire:

    def test_to_wire(self):
        assert to_wire(b"\x37\x17") == [55, 23]

    def test_wire_is_json_array(self):
        key = new_key_between(bytes([55, 23]), bytes([55, 24]))
        assert json.dumps(to_wire(key)) == "[55, 23, 128]"

    def test_from_wire(self):
        assert from_wire([55, 23]) == b"\x37\x17"
        assert from_wire((0, 255)) == b"\x00\xff"

    def test_from_json(self):
        assert from_wire(json.loads("[1, 30, 127]")) == bytes([1, 30, 127])

    @pytest.mark.parametrize("values, match", [
        ("abc", "array"),
        (None, "array"),
        (b"\x01", "array"),
        ([], "empty"),
        ([True], "not an integer"),
        ([1.0], "not an integer"),
        (["1"], "not an integer"),
        ([256], "out of byte range"),
        ([-1], "out of byte range"),
    ])
    def test_from_wire_rejects(self, values, match):
        with pytest.raises(OrderKeyError, match=match):
            from_wire(values)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            from_wire([])


# ═══════════════════════════════════════════════════════════════════
# Storage
# ═══════════════════════════════════════════════════════════════════

class TestStorage:

    def test_encode_layout(self):
        assert encode_key(b"\x80") == b"\x00\x01\x80"
        assert encode_key(bytes([55, 23, 128])) == b"\x00\x03\x37\x17\x80"

    def test_decode_at_offset(self):
        data = b"\xaa\xbb" + encode_key(b"\x37\x17")
        key, offset = decode_key(data, 2)
        assert key == b"\x37\x17"
        assert offset == len(data)

    def test_decode_consecutive_keys(self):
        keys = [b"\x80", b"\x00\xfe", b"\xff\xff\x01"]
        data = b"".join(encode_key(key) for key in keys)
        offset = 0
        decoded = []
        while offset < len(data):
            key, offset = decode_key(data, offset)
            decoded.append(key)
        assert decoded == keys

    def test_truncated_header(self):
        with pytest.raises(OrderKeyError, match="header"):
            decode_key(b"\x00")

    def test_truncated_body(self):
        with pytest.raises(OrderKeyError, match="need 3 bytes"):
            decode_key(b"\x00\x03\x01")

    def test_too_long(self):
        with pytest.raises(OrderKeyError, match="too long"):
            encode_key(bytes(MAX_KEY_LENGTH + 1))


# ═══════════════════════════════════════════════════════════════════
# Text
# ═══════════════════════════════════════════════════════════════════

class TestText:

    def test_format(self):
        assert format_key(bytes([55, 23])) == "[55, 23]"

    @pytest.mark.parametrize("text", ["55,23", "[55, 23]", "55 23", " 55, 23 "])
    def test_parse(self, text):
        assert parse_key(text) == bytes([55, 23])

    def test_parse_format_agree(self):
        key = bytes([0, 255, 128])
        assert parse_key(format_key(key)) == key

    @pytest.mark.parametrize("text, match", [
        ("", "Empty"),
        ("[]", "Empty"),
        ("a,b", "Invalid byte"),
        ("300", "out of byte range"),
        ("-1", "out of byte range"),
    ])
    def test_parse_rejects(self, text, match):
        with pytest.raises(OrderKeyError, match=match):
            parse_key(text)
