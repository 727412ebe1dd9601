from __future__ import annotations

import io
from typing import Iterator, List

import pytest
from hypothesis import given
from hypothesis import strategies as st

from line_editor.buffer import (
    BufferFullError,
    BufferIOError,
    EmptyBufferError,
    IndexOutOfRangeError,
    InvalidLineError,
    LineBuffer,
    LineTooLongError,
    OverflowPolicy,
)

line_text = st.text(
    alphabet=st.characters(blacklist_characters="\n\r", blacklist_categories=("Cs",)),
    max_size=9,
)


def make_buffer(
    *lines: str,
    capacity: int = 3,
    max_line_length: int = 20,
    overflow: OverflowPolicy = OverflowPolicy.REJECT,
) -> LineBuffer:
    buffer = LineBuffer(capacity, max_line_length, overflow=overflow)
    for line in lines:
        buffer.insert(line)
    return buffer


def test_insert_returns_one_based_line_numbers() -> None:
    buffer = make_buffer()

    assert buffer.insert("alpha") == 1
    assert buffer.insert("beta") == 2
    assert buffer.active_count == 2
    assert buffer.get(1) == "alpha"
    assert buffer.get(2) == "beta"


def test_capacity_scenario_delete_compacts() -> None:
    buffer = make_buffer("alpha", "beta", "gamma")
    assert buffer.active_count == 3

    buffer.delete(2)

    assert buffer.serialize() == ["alpha", "gamma"]
    assert buffer.active_count == 2
    with pytest.raises(IndexOutOfRangeError):
        buffer.get(3)


def test_insert_on_full_buffer_fails_without_mutation() -> None:
    buffer = make_buffer("a", "b", "c")
    version = buffer.version

    with pytest.raises(BufferFullError) as info:
        buffer.insert("d")

    assert info.value.capacity == 3
    assert buffer.serialize() == ["a", "b", "c"]
    assert buffer.version == version


def test_delete_from_empty_buffer() -> None:
    buffer = make_buffer()

    with pytest.raises(EmptyBufferError):
        buffer.delete(1)


@pytest.mark.parametrize("line_number", [0, -1, 3, 99])
def test_delete_out_of_range_leaves_state(line_number: int) -> None:
    buffer = make_buffer("a", "b")

    with pytest.raises(IndexOutOfRangeError) as info:
        buffer.delete(line_number)

    assert info.value.line_number == line_number
    assert info.value.active_count == 2
    assert buffer.serialize() == ["a", "b"]


def test_get_out_of_range_on_empty_buffer() -> None:
    with pytest.raises(IndexOutOfRangeError):
        make_buffer().get(1)


def test_delete_last_and_first_lines() -> None:
    buffer = make_buffer("a", "b", "c")

    buffer.delete(3)
    assert buffer.serialize() == ["a", "b"]
    buffer.delete(1)
    assert buffer.serialize() == ["b"]
    buffer.delete(1)
    assert buffer.is_empty()


def test_freed_slot_is_reusable_after_delete() -> None:
    buffer = make_buffer("a", "b", "c")
    buffer.delete(1)

    assert buffer.insert("d") == 3
    assert buffer.serialize() == ["b", "c", "d"]
    assert buffer.is_full()


def test_reject_policy_refuses_lines_at_the_limit() -> None:
    buffer = make_buffer(max_line_length=6)

    assert buffer.insert("12345") == 1
    with pytest.raises(LineTooLongError) as info:
        buffer.insert("123456")

    assert info.value.length == 6
    assert info.value.max_line_length == 6
    assert buffer.serialize() == ["12345"]


def test_truncate_policy_keeps_max_minus_one_characters() -> None:
    buffer = make_buffer(max_line_length=6, overflow=OverflowPolicy.TRUNCATE)

    buffer.insert("abcdefghij")

    assert buffer.get(1) == "abcde"


def test_overflow_policy_accepts_strings() -> None:
    buffer = LineBuffer(2, 4, overflow="truncate")

    assert buffer.overflow is OverflowPolicy.TRUNCATE


def test_embedded_terminator_is_rejected() -> None:
    buffer = make_buffer()

    with pytest.raises(InvalidLineError):
        buffer.insert("two\nlines")
    assert buffer.is_empty()


@pytest.mark.parametrize("capacity,max_line_length", [(0, 10), (3, 0), (-1, -1)])
def test_dimensions_must_be_positive(capacity: int, max_line_length: int) -> None:
    with pytest.raises(ValueError):
        LineBuffer(capacity, max_line_length)


def test_serialize_and_persisted_form() -> None:
    buffer = make_buffer("alpha", "", "gamma")

    assert buffer.serialize() == ["alpha", "", "gamma"]
    assert list(buffer.iter_serialized()) == ["alpha\n", "\n", "gamma\n"]


def test_deserialize_strips_terminators() -> None:
    buffer = make_buffer("old")

    count = buffer.deserialize(io.StringIO("one\ntwo\r\nthree"))

    assert count == 3
    assert buffer.serialize() == ["one", "two", "three"]


def test_deserialize_strips_bare_carriage_return() -> None:
    buffer = make_buffer()

    buffer.deserialize(["one\r", "two\n", "three\r\n"])

    assert buffer.serialize() == ["one", "two", "three"]


def test_deserialize_stops_at_capacity() -> None:
    buffer = make_buffer(capacity=2)
    consumed: List[str] = []

    def source() -> Iterator[str]:
        for line in ["a\n", "b\n", "c\n", "d\n"]:
            consumed.append(line)
            yield line

    assert buffer.deserialize(source()) == 2
    assert buffer.serialize() == ["a", "b"]
    assert consumed == ["a\n", "b\n"]


def test_deserialize_empty_source_clears_buffer() -> None:
    buffer = make_buffer("a", "b")

    assert buffer.deserialize([]) == 0
    assert buffer.is_empty()


def test_deserialize_read_failure_keeps_content() -> None:
    buffer = make_buffer("keep")

    def broken() -> Iterator[str]:
        yield "first\n"
        raise OSError("disk gone")

    with pytest.raises(BufferIOError) as info:
        buffer.deserialize(broken())

    assert isinstance(info.value.__cause__, OSError)
    assert buffer.serialize() == ["keep"]


def test_deserialize_too_long_line_keeps_content() -> None:
    buffer = make_buffer("old", max_line_length=4)

    with pytest.raises(LineTooLongError):
        buffer.deserialize(["ok\n", "too long\n"])

    assert buffer.serialize() == ["old"]


def test_deserialize_truncates_under_truncate_policy() -> None:
    buffer = make_buffer(max_line_length=4, overflow=OverflowPolicy.TRUNCATE)

    buffer.deserialize(["ok\n", "too long\n"])

    assert buffer.serialize() == ["ok", "too"]


def test_snapshot_is_detached() -> None:
    buffer = make_buffer("a")
    view = buffer.snapshot()

    buffer.insert("b")

    assert view.lines == ("a",)
    assert view.active_count == 1
    assert buffer.snapshot().version == view.version + 1


@given(
    existing=st.lists(line_text, max_size=4),
    text=line_text,
)
def test_insert_then_delete_restores_lines(existing: List[str], text: str) -> None:
    buffer = make_buffer(*existing, capacity=5)

    line_number = buffer.insert(text)
    buffer.delete(line_number)

    assert buffer.serialize() == existing
    assert buffer.active_count == len(existing)


@given(lines=st.lists(line_text, max_size=5))
def test_serialize_deserialize_round_trip(lines: List[str]) -> None:
    original = make_buffer(*lines, capacity=5)
    restored = make_buffer(capacity=5)

    restored.deserialize(original.iter_serialized())

    assert restored.serialize() == original.serialize() == lines
