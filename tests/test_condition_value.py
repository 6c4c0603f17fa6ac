# tests/test_condition_value.py

import pytest

from planning.conditions import ConditionValue


def test_of_maps_bool_and_none():
    assert ConditionValue.of(True) is ConditionValue.TRUE
    assert ConditionValue.of(False) is ConditionValue.FALSE
    assert ConditionValue.of(None) is ConditionValue.UNKNOWN


def test_as_definite_treats_unknown_as_false():
    assert ConditionValue.UNKNOWN.as_definite() is ConditionValue.FALSE
    assert ConditionValue.TRUE.as_definite() is ConditionValue.TRUE
    assert ConditionValue.FALSE.as_definite() is ConditionValue.FALSE


@pytest.mark.parametrize(
    "raw, expected",
    [
        (True, ConditionValue.TRUE),
        (False, ConditionValue.FALSE),
        (None, ConditionValue.UNKNOWN),
        ("TRUE", ConditionValue.TRUE),
        (" false ", ConditionValue.FALSE),
        ("Unknown", ConditionValue.UNKNOWN),
        (ConditionValue.FALSE, ConditionValue.FALSE),
    ],
)
def test_parse_accepts_config_values(raw, expected):
    assert ConditionValue.parse(raw) is expected


@pytest.mark.parametrize("raw", ["yes", "", 1, 0.5, ["true"]])
def test_parse_rejects_anything_else(raw):
    with pytest.raises(ValueError):
        ConditionValue.parse(raw)


def test_str_is_member_name():
    assert str(ConditionValue.UNKNOWN) == "UNKNOWN"
