"""Pydantic schemas for meeting records and tool inputs and outputs.

`Meeting` and `Attendee` are the records recovered from an invitation
dump. They are frozen: the extractor validates them once the scan has
finished and nothing mutates them afterwards.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

AttendeeStatus = Literal["Declined", "Optional"]


class Attendee(BaseModel):
    """A participant listed in the invitation.

    Attributes:
        name: Display name as it appeared in the source; empty means the
            candidate line was rejected.
        status: "Declined" or "Optional" when the next line said so.
        location: Working location such as "Home" or "Office".
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    status: Optional[AttendeeStatus] = None
    location: Optional[str] = None


class Meeting(BaseModel):
    """Full meeting record.

    Attributes:
        title: First non-blank line of the invitation.
        date_time: Raw schedule line, e.g. "Monday, 27 October⋅14:30 – 15:00".
        meeting_time: Parsed start in UTC, or None when it could not be parsed.
        frequency: Raw recurrence line, e.g. "Weekly on Monday".
        location: Free-text location.
        meet_link: Line carrying the video meeting link.
        phone_info: Dial-in lines, newline-joined.
        organizer: Organizer display name.
        attendees: Attendees in order of appearance.
        description: Free-text body, newline-joined.
        links: URLs in order of appearance, duplicates kept.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    date_time: Optional[str] = None
    meeting_time: Optional[datetime] = None
    frequency: Optional[str] = None
    location: Optional[str] = None
    meet_link: Optional[str] = None
    phone_info: Optional[str] = None
    organizer: Optional[str] = None
    attendees: List[Attendee] = Field(default_factory=list)
    description: Optional[str] = None
    links: List[str] = Field(default_factory=list)


# Inputs


class ParseMeetingInput(BaseModel):
    text: str = Field(description="Invitation text as copied from the calendar")


class ParseMeetingOutput(BaseModel):
    meeting: Meeting


class ConvertMeetingInput(BaseModel):
    text: str = Field(description="Invitation text as copied from the calendar")
    include_details: Optional[bool] = None
    include_attendees: Optional[bool] = None
    plain: Optional[bool] = Field(
        default=None, description="Plain text instead of markdown"
    )


class ConvertMeetingOutput(BaseModel):
    notes: str
    meeting: Meeting
