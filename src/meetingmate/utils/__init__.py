"""Utility functions for parsing and formatting.

This package includes the schedule-line time parser and the markdown
and plain-text renderers used by the CLI and the tools.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..schemas import Meeting
from .date_parser import format_timestamp, parse_meeting_time, to_date_key
from .markdown_export import render_meeting_markdown
from .plain_export import render_meeting_plain


def render_meeting(
    meeting: Meeting,
    *,
    include_details: bool = False,
    include_attendees: bool = False,
    plain: bool = False,
    now: Optional[datetime] = None,
) -> str:
    """Render a meeting as plain text or as markdown with front matter."""

    if plain:
        return render_meeting_plain(
            meeting,
            include_details=include_details,
            include_attendees=include_attendees,
        )
    return render_meeting_markdown(
        meeting,
        include_details=include_details,
        include_attendees=include_attendees,
        now=now,
    )


__all__ = [
    "format_timestamp",
    "parse_meeting_time",
    "to_date_key",
    "render_meeting",
    "render_meeting_markdown",
    "render_meeting_plain",
]
