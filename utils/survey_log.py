"""
===============================================================================
Artb Survey Log
===============================================================================
Append-only CSV log of survey submissions.

Each submission becomes one row ``Timestamp,Role,Interests,Feedback``. Rows
are never updated or deduplicated; file order is arrival order. Every field
is quoted and inner quotes are doubled, so free text containing commas,
quotes or newlines stays in its own column.
"""

import csv
import logging
import os
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import pandas as pd

from utils.errors import StorageError

logger = logging.getLogger(__name__)

SURVEY_COLUMNS = ["Timestamp", "Role", "Interests", "Feedback"]


def utc_timestamp() -> str:
    """UTC time as ISO-8601 with milliseconds, e.g. ``2025-01-31T09:15:00.123Z``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def join_interests(interests: Any) -> str:
    if not isinstance(interests, list):
        return ""
    return ", ".join(str(item) for item in interests)


@dataclass(frozen=True)
class SurveyRecord:
    timestamp: str
    role: str
    interests: str
    feedback: str

    def as_row(self) -> dict:
        return {
            "Timestamp": self.timestamp,
            "Role": self.role,
            "Interests": self.interests,
            "Feedback": self.feedback,
        }


class SurveyLog:
    """
    CSV-backed survey store.

    Args:
        path (str): CSV file path; created with a header on first append.
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def append(self, role: str, interests: Any, feedback_text: str) -> SurveyRecord:
        """
        Append one survey submission.

        Args:
            role (str): Respondent role (e.g. "student").
            interests (list): Selected interests; anything else is stored empty.
            feedback_text (str): Free-text feedback.

        Returns:
            SurveyRecord: The record as written.

        Raises:
            StorageError: If the log file cannot be written.
        """
        record = SurveyRecord(
            timestamp=utc_timestamp(),
            role=role,
            interests=join_interests(interests),
            feedback=feedback_text,
        )
        row = pd.DataFrame.from_records([record.as_row()], columns=SURVEY_COLUMNS)

        with self._lock:
            try:
                directory = os.path.dirname(self.path)
                if directory:
                    os.makedirs(directory, exist_ok=True)
                write_header = not os.path.isfile(self.path)
                row.to_csv(
                    self.path,
                    mode="a",
                    header=write_header,
                    index=False,
                    quoting=csv.QUOTE_ALL,
                    lineterminator="\n",
                    encoding="utf-8",
                )
            except (OSError, UnicodeError) as e:
                logger.error("Failed to append survey row to %s: %s", self.path, e)
                raise StorageError() from e

        logger.info("Survey response recorded (role=%s)", role)
        return record
