import pytest

from expectations import Assignment, BaselineError, Record, State, lookup, parse_assignment, parse_baseline, validate

BASELINE = (
    "onoff\n"
    "onoff: test: unset\n"
    "\n"
    "e\"\n"
    "\"e\\\"\": test: e\n"
    "\n"
    "no\n"
    "no: notest: set\n"
    "\n"
    "unknown\n"
    "\n"
)

def test_parse_baseline():
    records = list(parse_baseline(BASELINE))

    assert records == [
        Record("onoff", [Assignment("test", State.UNSET)]),
        Record("e\"", [Assignment("test", "e")]),
        Record("no", [Assignment("notest", State.SET)]),
        Record("unknown", []),
    ]

def test_parse_baseline_ignores_incomplete_trailing_record():
    records = list(parse_baseline("a/g\na/g: test: a/g\n\na/b/g\na/b/g: test: a/b/g\n"))

    assert [record.path for record in records] == ["a/g"]

def test_parse_assignment_values():
    assert parse_assignment("a/b/d/ANY: test: a/b/d/*") == Assignment("test", "a/b/d/*")
    assert parse_assignment("x: test: unspecified") == Assignment("test", State.UNSPECIFIED)
    assert parse_assignment("x: test: a: b") == Assignment("test", "a: b")

def test_parse_assignment_keeps_spaces_in_path():
    assert parse_assignment("\" d \": test: d") == Assignment("test", "d")

def test_parse_assignment_rejects_malformed_line():
    with pytest.raises(BaselineError):
        parse_assignment("no separators here")

def test_validate(tmp_path):
    (tmp_path / "baseline").write_text(BASELINE)

    records = validate(str(tmp_path), ["onoff", "e\"", "no", "unknown"])

    assert lookup(records, "onoff") == {"test": State.UNSET}
    with pytest.raises(KeyError):
        lookup(records, "missing")

def test_validate_rejects_log_truncated_before_last_output(tmp_path):
    paths = ["onoff", "e\"", "no", "global"]
    (tmp_path / "baseline").write_text(BASELINE.replace("unknown\n\n", "global\n"))

    with pytest.raises(BaselineError):
        validate(str(tmp_path), paths)

def test_parse_baseline_empty_text():
    assert list(parse_baseline("")) == []

def test_validate_rejects_wrong_order(tmp_path):
    (tmp_path / "baseline").write_text(BASELINE)

    with pytest.raises(BaselineError):
        validate(str(tmp_path), ["e\"", "onoff", "no", "unknown"])
