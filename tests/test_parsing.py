from __future__ import annotations

import datetime as dt

import pytest

from fittrack.errors import InvalidInput
from fittrack.parsing import (
    FOOD_KEY_ALIASES,
    WORKOUT_KEY_ALIASES,
    command_payload,
    map_keys,
    parse_date_arg,
    parse_foods_query,
    parse_id,
    parse_kv,
)


def test_command_payload() -> None:
    assert command_payload("/log@fit_bot lunch 3 150") == "lunch 3 150"
    assert command_payload("/day") == ""
    assert command_payload(None) == ""
    assert command_payload("🧮 Calculator") == ""


def test_kv_space_separated() -> None:
    assert parse_kv("Weight=82 goal=cut") == {"weight": "82", "goal": "cut"}


def test_kv_semicolon_keeps_spaces_and_commas() -> None:
    raw = parse_kv("name=Greek yogurt; kcal=59; tags=dairy, protein; note=a=b")
    assert raw == {"name": "Greek yogurt", "kcal": "59", "tags": "dairy, protein", "note": "a=b"}


def test_kv_rejects_bare_words() -> None:
    with pytest.raises(InvalidInput):
        parse_kv("weight 82")


def test_map_keys() -> None:
    assert map_keys({"kcal": "59", "protein": "10"}, FOOD_KEY_ALIASES) == {"calories": "59", "protein_g": "10"}
    assert map_keys({"muscle": "chest"}, WORKOUT_KEY_ALIASES) == {"muscle_group": "chest"}
    with pytest.raises(InvalidInput, match="unknown field"):
        map_keys({"colour": "red"}, FOOD_KEY_ALIASES)


def test_parse_id() -> None:
    assert parse_id("#12") == 12
    with pytest.raises(InvalidInput):
        parse_id("twelve")


def test_dates() -> None:
    today = dt.date(2024, 5, 10)
    current = dt.date(2024, 5, 1)
    assert parse_date_arg("", current=current, today=today) == today
    assert parse_date_arg("+1", current=current, today=today) == dt.date(2024, 5, 2)
    assert parse_date_arg("prev", current=current, today=today) == dt.date(2024, 4, 30)
    assert parse_date_arg("-7", current=current, today=today) == dt.date(2024, 4, 24)
    assert parse_date_arg("2023-12-31", current=current, today=today) == dt.date(2023, 12, 31)
    with pytest.raises(InvalidInput):
        parse_date_arg("yesterday-ish", current=current, today=today)


def test_foods_query() -> None:
    assert parse_foods_query("chicken #Meat") == ("chicken", "meat")
    assert parse_foods_query("greek yogurt") == ("greek yogurt", None)
    assert parse_foods_query("") == ("", None)
