import pytest
from pydantic import ValidationError

from sonarcloud_report.models import REPORT_HEADER, Row


def test_row_is_immutable():
    row = Row(project="x", branch="main")
    with pytest.raises(ValidationError):
        row.bugs = 5

def test_row_defaults_are_empty_strings():
    row = Row(project="x", branch="main")
    assert row.contributor == ""
    assert row.analysis_date == ""
    assert row.url == ""

def test_counts_must_not_be_negative():
    with pytest.raises(ValidationError):
        Row(project="x", branch="main", code_smells=-1)

def test_to_record_follows_header():
    record = Row(project="x", branch="main", bugs=3).to_record()
    assert list(record) == REPORT_HEADER
    assert record["Bugs"] == 3
