# tests/test_validation.py

from __future__ import annotations

import pytest

from villain_timeline.core.exceptions import ValidationError
from villain_timeline.validation import validate_raw_series, validate_serialized_dataset


def raw(**overrides):
    data = {
        "series": "Amazing Spider-Man Vol 1",
        "baseUrl": "https://marvel.fandom.com/wiki/Amazing_Spider-Man_Vol_1_{issue}",
        "issues": [
            {
                "issueNumber": 1,
                "title": "Amazing Spider-Man #1",
                "releaseDate": "March 10, 1963",
                "antagonists": [{"name": "Chameleon", "url": "https://x/wiki/Chameleon"}],
            }
        ],
    }
    data.update(overrides)
    return data


def issue(**fields):
    base = {"issueNumber": 1, "title": "#1", "antagonists": []}
    base.update(fields)
    return base


# -----------------------------
# Raw series
# -----------------------------

def test_valid_raw_series():
    series = validate_raw_series(raw())

    assert series.series == "Amazing Spider-Man Vol 1"
    (first,) = series.issues
    assert first.issue_number == 1
    assert first.release_date == "March 10, 1963"
    assert first.antagonists[0].url == "https://x/wiki/Chameleon"


def test_integral_float_issue_number_becomes_int():
    series = validate_raw_series(raw(issues=[issue(issueNumber=3.0)]))
    assert series.issues[0].issue_number == 3
    assert isinstance(series.issues[0].issue_number, int)


def test_bare_string_antagonist_is_name_only():
    series = validate_raw_series(raw(issues=[issue(antagonists=["Tinkerer"])]))
    assert series.issues[0].antagonists[0].name == "Tinkerer"
    assert series.issues[0].antagonists[0].url is None


def test_missing_series():
    data = raw()
    del data["series"]

    with pytest.raises(ValidationError) as excinfo:
        validate_raw_series(data)

    assert excinfo.value.code == "VALIDATION_MISSING_FIELD"
    assert excinfo.value.context == {"fieldName": "series"}


def test_empty_issue_list():
    with pytest.raises(ValidationError) as excinfo:
        validate_raw_series(raw(issues=[]))
    assert excinfo.value.code == "VALIDATION_INVALID_FORMAT"


def test_wrong_antagonist_name_type_reports_path():
    data = raw(issues=[issue(), issue(issueNumber=2, antagonists=[{"name": 42}])])

    with pytest.raises(ValidationError) as excinfo:
        validate_raw_series(data)

    err = excinfo.value
    assert err.code == "VALIDATION_SCHEMA_ERROR"
    assert err.context["fieldPath"] == "issues[1].antagonists[0].name"
    assert err.context["expectedType"] == "string"
    assert err.context["actualValue"] == 42


def test_issue_number_must_be_positive():
    with pytest.raises(ValidationError) as excinfo:
        validate_raw_series(raw(issues=[issue(issueNumber=0)]))
    assert excinfo.value.code == "VALIDATION_INVALID_FORMAT"


def test_issue_number_must_be_numeric():
    with pytest.raises(ValidationError) as excinfo:
        validate_raw_series(raw(issues=[issue(issueNumber="3")]))
    assert excinfo.value.context["fieldPath"] == "issues[0].issueNumber"


def test_boolean_is_not_an_issue_number():
    with pytest.raises(ValidationError):
        validate_raw_series(raw(issues=[issue(issueNumber=True)]))


def test_non_mapping_input():
    with pytest.raises(ValidationError) as excinfo:
        validate_raw_series(["not", "a", "dict"])
    assert excinfo.value.context["fieldPath"] == "$"


def test_error_to_dict():
    with pytest.raises(ValidationError) as excinfo:
        validate_raw_series(raw(baseUrl=None))

    payload = excinfo.value.to_dict()
    assert payload["code"] == "VALIDATION_MISSING_FIELD"
    assert payload["context"] == {"fieldName": "baseUrl"}
    assert "baseUrl" in payload["message"]


# -----------------------------
# Serialized datasets
# -----------------------------

def test_valid_serialized_dataset_is_copied():
    data = {
        "series": "A",
        "villains": [{"id": "v", "name": "V", "appearances": [1]}],
        "timeline": [{"issue": 1}],
    }
    checked = validate_serialized_dataset(data)

    assert checked == data
    assert checked is not data


def test_serialized_villain_without_appearances():
    data = {"series": "A", "villains": [{"id": "v", "name": "V"}], "timeline": []}

    with pytest.raises(ValidationError) as excinfo:
        validate_serialized_dataset(data, source="villains.A.json")

    assert excinfo.value.code == "VALIDATION_MISSING_FIELD"
    assert excinfo.value.context["fieldName"] == "villains[0].appearances"
    assert excinfo.value.context["source"] == "villains.A.json"


def test_serialized_timeline_issue_must_be_number():
    data = {"series": "A", "villains": [], "timeline": [{"issue": "1"}]}

    with pytest.raises(ValidationError) as excinfo:
        validate_serialized_dataset(data)

    assert excinfo.value.context["fieldPath"] == "timeline[0].issue"


def test_serialized_group_appearances_must_be_numbers():
    data = {"villains": [], "timeline": [], "groups": [{"name": "G", "appearances": ["x"]}]}

    with pytest.raises(ValidationError) as excinfo:
        validate_serialized_dataset(data)

    assert excinfo.value.context["fieldPath"] == "groups[0].appearances[0]"
