import datetime as dt
import uuid

import pytest
from hypothesis import given
from hypothesis import strategies as st

from todolist.convert import (
    parse_status,
    parse_title,
    parse_todo_id,
    require_content,
    require_due_date,
    status_to_code,
    title_to_str,
    todo_id_to_str,
)
from todolist.errors import ConvertError
from todolist.model import PlainContent, TodoId, TodoStatus, TodoTitle, WholeDay


@given(st.uuids())
def test_todo_id_round_trip(raw):
    todo_id = TodoId(raw)
    assert parse_todo_id(todo_id_to_str(todo_id)) == todo_id


def test_todo_id_is_hyphenated_lowercase():
    raw = uuid.uuid4()
    assert todo_id_to_str(TodoId(raw)) == str(raw)


def test_invalid_todo_id():
    with pytest.raises(ConvertError) as info:
        parse_todo_id("not-a-uuid")
    assert info.value.message == "UUID Error"
    assert isinstance(info.value.cause, ValueError)


@given(st.text(min_size=1))
def test_title_round_trip(text):
    assert title_to_str(parse_title(text)) == text


def test_empty_title_rejected():
    with pytest.raises(ConvertError) as info:
        parse_title("")
    assert str(info.value) == "An empty title."


@pytest.mark.parametrize("status", list(TodoStatus))
def test_status_round_trip(status):
    assert parse_status(status_to_code(status)) is status


@pytest.mark.parametrize("code", [-1, 5, 100])
def test_invalid_status(code):
    with pytest.raises(ConvertError) as info:
        parse_status(code)
    assert info.value.message == f"Invalid status code: {code}."


def test_require_due_date_missing():
    with pytest.raises(ConvertError) as info:
        require_due_date(None, lambda v: v)
    assert info.value.message == "Unable to convert an empty Option to TodoDueDate!"


def test_require_due_date_converts():
    day = dt.date(2030, 1, 2)
    assert require_due_date(day, WholeDay) == WholeDay(day)


def test_require_due_date_propagates_conversion_error():
    def fail(_):
        raise ConvertError("Empty DueDate.")

    with pytest.raises(ConvertError) as info:
        require_due_date(object(), fail)
    assert info.value.message == "Empty DueDate."


def test_require_content():
    assert require_content("hi", PlainContent) == PlainContent("hi")
    with pytest.raises(ConvertError) as info:
        require_content(None, PlainContent)
    assert info.value.message == "Unable to convert an empty Option to TodoContent!"


def test_parse_title_returns_title():
    assert parse_title("Buy milk") == TodoTitle("Buy milk")