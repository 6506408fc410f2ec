import pytest

from sqlany_schema.schema.defaults import DefaultValue, classify_default


@pytest.mark.parametrize("raw", ["42", "-1", "+3.5", ".5", "1e10", "2.5E-3", "'abc'", "''"])
def test_literals_pass_through_unchanged(raw):
    assert classify_default(raw) == DefaultValue(raw, None)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("current timestamp", "CURRENT TIMESTAMP"),
        ("autoincrement", "AUTOINCREMENT"),
        ("newid()", "NEWID()"),
        ("abc'", "ABC'"),
    ],
)
def test_other_text_is_a_function_default(raw, expected):
    assert classify_default(raw) == DefaultValue(None, expected)


def test_absent_default():
    assert classify_default(None) == DefaultValue(None, None)
