"""Keyword extraction from free-text issue bodies.

Issue authors schedule work by adding lines such as::

    Start Date: 2024-03-01
    Due Date: 2024-03-15
    Label: backend
    Progress: 40%

Each line is tested against every configured prefix. Lines that do not
start with a prefix, or whose value cannot be parsed, contribute nothing.
When a prefix appears on several lines the last one wins.
"""

import math
from collections.abc import Sequence

from ..models import IssueLabel, IssueMetadata, KeywordConfig
from ..utils.datetime import parse_calendar_date


def sanitize_progress(text: str) -> float | None:
    """Turn a progress value into a fraction in [0, 1].

    Accepts plain numbers ("0.4") and percentages ("40%"). Values outside the
    range are clamped.

    Returns:
        The fraction, or None if the text is not a finite number
    """
    value = text.strip()
    percent = value.endswith("%")
    if percent:
        value = value[:-1].strip()
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    if percent:
        number /= 100
    return min(max(number, 0.0), 1.0)


def match_label(name: str, labels: Sequence[IssueLabel]) -> tuple[str, str] | None:
    """Find an issue label by exact name.

    Returns:
        (label name, "#RRGGBB" colour) or None when no label with that name
        and a colour is attached to the issue
    """
    found = None
    for label in labels:
        if label.name == name and label.color:
            found = (label.name, f"#{label.color.upper()}")
    return found


class MetadataExtractor:
    """Parses keyword lines out of issue bodies."""

    def __init__(self, keywords: KeywordConfig | None = None) -> None:
        self.keywords = keywords or KeywordConfig()

    def extract(self, body: str | None, labels: Sequence[IssueLabel] = ()) -> IssueMetadata:
        """Extract scheduling metadata from an issue body.

        Args:
            body: Raw issue body, may be None or empty
            labels: Labels attached to the issue

        Returns:
            IssueMetadata with a value for every keyword that matched
        """
        metadata = IssueMetadata()
        if not body:
            return metadata

        keywords = self.keywords
        for line in body.splitlines():
            if line.startswith(keywords.start_date):
                start = parse_calendar_date(line[len(keywords.start_date) :])
                if start is not None:
                    metadata.start_date = start

            if line.startswith(keywords.due_date):
                due = parse_calendar_date(line[len(keywords.due_date) :])
                if due is not None:
                    metadata.due_date = due

            if line.startswith(keywords.label):
                matched = match_label(line[len(keywords.label) :].strip(), labels)
                if matched is not None:
                    metadata.label, metadata.color = matched

            if line.startswith(keywords.progress):
                metadata.progress = sanitize_progress(line[len(keywords.progress) :])

        return metadata
