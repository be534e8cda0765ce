"""Tests for the VICI decoder (structure, validation, streams)."""
import io

import pytest

from vicipack.domain import ItemList, Section
from vicipack.errors import (
    DepthLimitExceeded,
    DuplicateKey,
    FrameKindMismatch,
    InvalidName,
    UnderlyingIoFailure,
    UnexpectedEndOfInput,
    UnexpectedTag,
    UnterminatedStructure,
)
from vicipack.wire import (
    KeyValue,
    ListEnd,
    ListItem,
    ListStart,
    SectionEnd,
    SectionStart,
    decode,
    decode_from,
    encode,
    iter_events,
)
from vicipack.wire.grammar import NAMED_ELEMENTS, VALUED_ELEMENTS, ElementType


def test_decode_canonical_example(example_message):
    tree = decode(example_message)
    assert tree == Section({
        "key1": "value1",
        "section1": {
            "sub-section": {"key2": "value2"},
            "list1": ["item1", "item2"],
        },
    })
    assert list(tree["section1"]) == ["sub-section", "list1"]


def test_decode_empty_input():
    assert decode(b"") == Section()


def test_decode_empty_value():
    assert decode(b"\x03\x01k\x00\x00") == Section({"k": b""})


def test_decode_empty_list_and_section():
    tree = decode(b"\x04\x01l\x06\x01\x01s\x02")
    assert tree["l"] == ItemList()
    assert tree["s"] == Section()


def test_decode_keeps_raw_bytes():
    tree = decode(b"\x03\x04cert\x00\x03\x30\x82\xff")
    assert tree["cert"] == b"\x30\x82\xff"


def test_iter_events(example_message):
    events = list(iter_events(example_message))
    assert events == [
        KeyValue("key1", b"value1"),
        SectionStart("section1"),
        SectionStart("sub-section"),
        KeyValue("key2", b"value2"),
        SectionEnd(),
        ListStart("list1"),
        ListItem(b"item1"),
        ListItem(b"item2"),
        ListEnd(),
        SectionEnd(),
    ]


@pytest.mark.parametrize("tag", [0x00, 0x07, 0xFF])
def test_unknown_tag(tag):
    with pytest.raises(UnexpectedTag) as exc:
        decode(b"\x03\x01k\x00\x01v" + bytes([tag]))
    assert exc.value.input == tag
    assert exc.value.position == 6
    assert exc.value.is_data()


@pytest.mark.parametrize(
    "data",
    [
        b"\x06",                        # list end at root
        b"\x01\x01s\x06",               # list end closing a section
        b"\x02",                        # section end at root
        b"\x04\x01l\x02",               # section end closing a list
        b"\x05\x00\x01a",               # list item in root section
        b"\x01\x01s\x05\x00\x01a\x02",  # list item in nested section
        b"\x04\x01l\x03\x01k\x00\x01v",  # key/value inside a list
        b"\x04\x01l\x01\x01s",          # section inside a list
        b"\x04\x01l\x04\x01m",          # list inside a list
    ],
)
def test_frame_kind_mismatch(data):
    with pytest.raises(FrameKindMismatch):
        decode(data)


def test_unterminated_section():
    with pytest.raises(UnterminatedStructure) as exc:
        decode(b"\x01\x01s\x03\x01k\x00\x01v")
    assert exc.value.is_eof()


def test_unterminated_list():
    with pytest.raises(UnterminatedStructure):
        decode(b"\x04\x01l\x05\x00\x01a")


@pytest.mark.parametrize(
    "data",
    [
        b"\x01",                  # missing name length
        b"\x03\x04ke",            # name shorter than its length
        b"\x03\x01k\x00",         # half a value length
        b"\x03\x01k\x00\x05ab",   # value shorter than its length
        b"\x04\x01l\x05\x00",     # item length cut off
    ],
)
def test_truncated_input(data):
    with pytest.raises(UnexpectedEndOfInput) as exc:
        decode(data)
    assert exc.value.is_eof()
    assert "EOF while parsing" in str(exc.value)


def test_invalid_utf8_name():
    with pytest.raises(InvalidName) as exc:
        decode(b"\x03\x01\xff\x00\x00")
    assert exc.value.input == 0xFF
    assert exc.value.position == 2


def test_depth_limit():
    data = b"\x01\x01a\x01\x01b\x04\x01c\x06\x02\x02"
    assert decode(data, max_depth=3) == Section({"a": {"b": {"c": []}}})
    with pytest.raises(DepthLimitExceeded):
        decode(data, max_depth=2)


def test_depth_limit_from_settings(monkeypatch):
    monkeypatch.setenv("VICIPACK_MAX_DEPTH", "1")
    with pytest.raises(DepthLimitExceeded):
        decode(b"\x01\x01a\x01\x01b\x02\x02")


@pytest.mark.parametrize("limit", [0, -1])
def test_depth_limit_must_be_positive(limit):
    data = b"\x01\x01a\x02"
    with pytest.raises(ValueError, match="max_depth"):
        decode(data, max_depth=limit)
    with pytest.raises(ValueError, match="max_depth"):
        list(iter_events(data, max_depth=limit))


def test_explicit_depth_limit_overrides_settings(monkeypatch):
    monkeypatch.setenv("VICIPACK_MAX_DEPTH", "10")
    with pytest.raises(DepthLimitExceeded):
        decode(b"\x01\x01a\x01\x01b\x02\x02", max_depth=1)


def test_deep_nesting_within_limit():
    data = b"\x01\x01s" * 1500 + b"\x02" * 1500
    assert encode(decode(data, max_depth=1500)) == data


def test_duplicate_key_rejected_by_default():
    with pytest.raises(DuplicateKey) as exc:
        decode(b"\x03\x01a\x00\x011\x03\x01a\x00\x012")
    assert exc.value.code == "ERR_DUPLICATE_KEY"
    # the second "a" starts right after the 6-byte first element
    assert exc.value.position == 6


def test_duplicate_section_name_rejected():
    with pytest.raises(DuplicateKey) as exc:
        decode(b"\x03\x01a\x00\x011\x01\x01a\x02")
    assert exc.value.position == 6


def test_duplicate_key_last_wins():
    data = b"\x03\x01a\x00\x011\x03\x01b\x00\x012\x03\x01a\x00\x013"
    tree = decode(data, duplicate_keys="last")
    assert list(tree.items()) == [("a", b"3"), ("b", b"2")]


def test_duplicate_key_policy_from_settings(monkeypatch):
    monkeypatch.setenv("VICIPACK_DUPLICATE_KEYS", "last")
    assert decode(b"\x03\x01a\x00\x011\x03\x01a\x00\x012") == Section({"a": "2"})


def test_invalid_duplicate_policy():
    with pytest.raises(ValueError):
        decode(b"", duplicate_keys="first")


def test_decode_from_stream(example_message):
    assert decode_from(io.BytesIO(example_message)) == decode(example_message)


def test_decode_from_short_reads(example_message):
    class Trickle:
        def __init__(self, data):
            self.data = data

        def read(self, size=-1):
            chunk, self.data = self.data[:1], self.data[1:]
            return chunk

    assert decode_from(Trickle(example_message)) == decode(example_message)


def test_decode_from_truncated_stream():
    with pytest.raises(UnexpectedEndOfInput) as exc:
        decode_from(io.BytesIO(b"\x03\x01k\x00\x05ab"))
    assert exc.value.position == 5


def test_decode_from_wraps_stream_errors():
    class Broken:
        def read(self, size=-1):
            raise ConnectionResetError("reset by peer")

    with pytest.raises(UnderlyingIoFailure) as exc:
        decode_from(Broken())
    assert exc.value.code == "ERR_IO"
    assert isinstance(exc.value.__cause__, ConnectionResetError)


def test_element_tables():
    assert NAMED_ELEMENTS == {ElementType.SECTION_START, ElementType.KEY_VALUE, ElementType.LIST_START}
    assert VALUED_ELEMENTS == {ElementType.KEY_VALUE, ElementType.LIST_ITEM}
