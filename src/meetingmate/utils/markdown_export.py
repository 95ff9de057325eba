"""Markdown export helpers.

Generates note-taking friendly markdown for meetings: a front-matter
block with tags, dates and participants, followed by the title and
the selected sections.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from ..schemas import Attendee, Meeting
from .date_parser import format_timestamp, to_date_key


def organizer_tag(organizer: str) -> str:
    """Tag derived from the organizer's first name, e.g. "Jane Doe" -> "jane"."""
    return organizer.split(" ")[0].replace(" ", "").lower()


def participant_names(meeting: Meeting) -> List[str]:
    """Organizer first, then attendees other than the organizer, in order."""
    names: List[str] = []
    if meeting.organizer:
        names.append(meeting.organizer)
    for attendee in meeting.attendees:
        if attendee.name and attendee.name != meeting.organizer:
            names.append(attendee.name)
    return names


def _front_matter(meeting: Meeting, now: datetime) -> List[str]:
    tags = ["meeting"]
    if meeting.organizer:
        tags.append(organizer_tag(meeting.organizer))

    lines = ["---", f"tags: [{', '.join(tags)}]", f"date: {to_date_key(now)}"]
    if meeting.meeting_time is not None:
        lines.append(f"meeting: {format_timestamp(meeting.meeting_time)}")
    if meeting.organizer:
        lines.append(f"organiser: {meeting.organizer}")

    names = participant_names(meeting)
    if names:
        lines.append("participants:")
        lines.extend(f"  - {name}" for name in names)
    lines.append("---")
    return lines


def _format_attendee(attendee: Attendee) -> str:
    """Format an attendee as a Markdown bullet point."""
    line = f"- **{attendee.name}**"
    if attendee.status:
        line += f" ({attendee.status})"
    if attendee.location:
        line += f" - {attendee.location}"
    return line


def render_meeting_markdown(
    meeting: Meeting,
    *,
    include_details: bool = False,
    include_attendees: bool = False,
    now: Optional[datetime] = None,
) -> str:
    """Render a meeting into Markdown with front matter.

    Args:
        meeting: Extracted meeting record.
        include_details: Emit the "Meeting Details" section.
        include_attendees: Emit the "Attendees" section when there are any.
        now: Reference time for the `date` stamp; defaults to the current time.

    Returns:
        Markdown string ending with a newline.
    """

    now = now or datetime.now().astimezone()
    parts: List[str] = _front_matter(meeting, now)

    parts.append("")
    parts.append(f"# {meeting.title}")

    if include_details:
        parts.append("")
        parts.append("## Meeting Details")
        if meeting.date_time:
            parts.append(f"**Date & Time:** {meeting.date_time}")
        if meeting.frequency:
            parts.append(f"**Frequency:** {meeting.frequency}")
        if meeting.meet_link:
            parts.append(f"**Meeting Link:** {meeting.meet_link}")
        if meeting.phone_info:
            parts.append("**Phone Information:**")
            parts.append("```")
            parts.append(meeting.phone_info)
            parts.append("```")
        if meeting.organizer:
            parts.append(f"**Organizer:** {meeting.organizer}")

    if include_attendees and meeting.attendees:
        parts.append("")
        parts.append("## Attendees")
        parts.extend(_format_attendee(a) for a in meeting.attendees)

    if meeting.description:
        parts.append("")
        parts.append("## Description")
        parts.append(meeting.description)

    parts.append("")
    parts.append("## Notes")
    parts.append("<!-- Add your meeting notes here -->")

    if meeting.links:
        parts.append("")
        parts.append("## Links")
        parts.extend(f"- {link}" for link in meeting.links)

    parts.append("")
    parts.append("## Action Items")
    parts.append("- [ ] ")

    return "\n".join(parts) + "\n"
