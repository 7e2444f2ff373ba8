import re
from pathlib import Path

import pandas as pd
import pytest

from utils.errors import StorageError
from utils.survey_log import SurveyLog, join_interests, utc_timestamp


def test_append_writes_header_once_and_quotes_feedback(tmp_path: Path) -> None:
    path = tmp_path / "survey.csv"
    log = SurveyLog(str(path))

    log.append("student", ["drawing", "painting"], 'He said "hi"')
    log.append("teacher", [], "")

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == '"Timestamp","Role","Interests","Feedback"'
    assert len(lines) == 3
    assert lines[1].endswith(',"student","drawing, painting","He said ""hi"""')
    assert lines[2].endswith(',"teacher","",""')


def test_append_round_trips_through_csv_reader(tmp_path: Path) -> None:
    path = tmp_path / "survey.csv"
    log = SurveyLog(str(path))

    log.append("student", ["drawing", "painting"], 'line one, "quoted"\nline two')

    frame = pd.read_csv(path, keep_default_na=False)
    assert list(frame.columns) == ["Timestamp", "Role", "Interests", "Feedback"]
    assert frame.loc[0, "Interests"] == "drawing, painting"
    assert frame.loc[0, "Feedback"] == 'line one, "quoted"\nline two'


def test_identical_submissions_produce_distinct_rows(tmp_path: Path) -> None:
    path = tmp_path / "survey.csv"
    log = SurveyLog(str(path))

    log.append("student", ["drawing"], "same")
    log.append("student", ["drawing"], "same")

    frame = pd.read_csv(path, keep_default_na=False)
    assert len(frame) == 2
    assert list(frame["Feedback"]) == ["same", "same"]


def test_append_creates_parent_directory(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "survey.csv"

    SurveyLog(str(path)).append("artist", None, "hello")

    assert path.exists()


def test_append_failure_raises_storage_error(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")
    log = SurveyLog(str(blocker / "survey.csv"))

    with pytest.raises(StorageError):
        log.append("student", [], "x")


def test_join_interests_ignores_non_lists() -> None:
    assert join_interests(["a", "b"]) == "a, b"
    assert join_interests("drawing") == ""
    assert join_interests(None) == ""


def test_utc_timestamp_format() -> None:
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_timestamp())


def test_unencodable_feedback_raises_storage_error(tmp_path: Path) -> None:
    log = SurveyLog(str(tmp_path / "survey.csv"))

    with pytest.raises(StorageError):
        log.append("student", [], "\ud800")
