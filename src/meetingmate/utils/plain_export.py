"""Plain-text export helpers.

Same sections as the markdown export, without front matter or markup,
for pasting into email or chat.
"""

from __future__ import annotations

from typing import List

from ..schemas import Meeting


def render_meeting_plain(
    meeting: Meeting,
    *,
    include_details: bool = False,
    include_attendees: bool = False,
) -> str:
    """Render a meeting as plain text with an underlined title."""

    parts: List[str] = [meeting.title, "=" * len(meeting.title)]

    if include_details:
        parts.append("")
        parts.append("Meeting Details:")
        if meeting.date_time:
            parts.append(f"Date & Time: {meeting.date_time}")
        if meeting.frequency:
            parts.append(f"Frequency: {meeting.frequency}")
        if meeting.meet_link:
            parts.append(f"Meeting Link: {meeting.meet_link}")
        if meeting.phone_info:
            parts.append("Phone Information:")
            parts.append(meeting.phone_info)
        if meeting.organizer:
            parts.append(f"Organizer: {meeting.organizer}")

    if include_attendees and meeting.attendees:
        parts.append("")
        parts.append("Attendees:")
        for attendee in meeting.attendees:
            line = f"- {attendee.name}"
            if attendee.status:
                line += f" ({attendee.status})"
            if attendee.location:
                line += f" - {attendee.location}"
            parts.append(line)

    if meeting.description:
        parts.append("")
        parts.append("Description:")
        parts.append(meeting.description)

    parts.append("")
    parts.append("Notes:")
    parts.append("(Add your meeting notes here)")

    if meeting.links:
        parts.append("")
        parts.append("Links:")
        parts.extend(f"- {link}" for link in meeting.links)

    parts.append("")
    parts.append("Action Items:")
    parts.append("- [ ] ")

    return "\n".join(parts) + "\n"
