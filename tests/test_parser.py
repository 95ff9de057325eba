"""Unit tests for the invitation scanner and its rule table.

Rules are exercised one at a time through classify_line() with a
hand-built LineContext, then end to end through extract_meeting().
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

import pytest
from pydantic import ValidationError

from meetingmate.parser import (
    RULES,
    LineContext,
    MeetingDict,
    MeetingExtractor,
    ScanState,
    classify_line,
    extract_meeting,
)
from meetingmate.schemas import Attendee


def make_ctx(
    line: str,
    *,
    lines: Optional[List[str]] = None,
    index: int = 0,
    meeting: Optional[MeetingDict] = None,
    state: Optional[ScanState] = None,
) -> LineContext:
    return LineContext(
        line=line,
        index=index,
        lines=lines if lines is not None else [line],
        meeting=meeting if meeting is not None else {"title": "Sync"},
        state=state or ScanState(),
        now=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )


# ── Rule table ───────────────────────────────────────────────────────────────


class TestRuleOrder:
    """The rule table order decides which heuristic wins."""

    def test_rule_names_in_priority_order(self) -> None:
        assert [rule.name for rule in RULES] == [
            "title",
            "schedule",
            "recurrence",
            "video_link",
            "bare_url",
            "phone_marker",
            "phone_entry",
            "guest_marker",
            "organizer_label",
            "created_by",
            "description_start",
            "description_continuation",
            "attendee",
        ]


class TestClassifyLine:
    """Tests for individual rules via classify_line()."""

    def test_first_line_becomes_title(self) -> None:
        ctx = make_ctx("Monday, 27 October⋅14:30 – 15:00", meeting={})
        assert classify_line(ctx) == "title"
        assert ctx.meeting["title"] == "Monday, 27 October⋅14:30 – 15:00"

    def test_title_is_not_overwritten(self) -> None:
        ctx = make_ctx("Another Title")
        classify_line(ctx)
        assert ctx.meeting["title"] == "Sync"

    def test_schedule_line(self) -> None:
        ctx = make_ctx("Monday, 27 October⋅14:30 – 15:00")
        assert classify_line(ctx) == "schedule"
        assert ctx.meeting["date_time"] == "Monday, 27 October⋅14:30 – 15:00"
        assert ctx.meeting["meeting_time"] == datetime(
            2025, 10, 27, 14, 30, tzinfo=timezone.utc
        )

    def test_schedule_needs_middle_dot(self) -> None:
        ctx = make_ctx("Monday, 27 October 14:30 – 15:00")
        assert classify_line(ctx) != "schedule"
        assert "date_time" not in ctx.meeting

    def test_schedule_needs_en_dash(self) -> None:
        ctx = make_ctx("Monday, 27 October⋅14:30 - 15:00")
        assert classify_line(ctx) != "schedule"
        assert "date_time" not in ctx.meeting

    def test_recurrence(self) -> None:
        ctx = make_ctx("Daily")
        assert classify_line(ctx) == "recurrence"
        assert ctx.meeting["frequency"] == "Daily"

    @pytest.mark.parametrize(
        "line",
        [
            "meet.google.com/abc-defg-hij",
            "https://zoom.us/j/123456789",
            "https://teams.microsoft.com/l/meetup-join/xyz",
        ],
    )
    def test_video_link(self, line: str) -> None:
        ctx = make_ctx(line)
        assert classify_line(ctx) == "video_link"
        assert ctx.meeting["meet_link"] == line
        assert ctx.meeting["links"] == [line]

    def test_bare_url_alone_is_consumed(self) -> None:
        ctx = make_ctx("https://example.com")
        assert classify_line(ctx) == "bare_url"
        assert ctx.meeting["links"] == ["https://example.com"]
        assert "attendees" not in ctx.meeting

    def test_url_in_prose_falls_through(self) -> None:
        """Every URL token is collected and later rules still see the line."""
        line = "Slides http://a.example/x and https://b.example/y"
        ctx = make_ctx(line)
        assert classify_line(ctx) == "attendee"
        assert ctx.meeting["links"] == ["http://a.example/x", "https://b.example/y"]
        assert "attendees" not in ctx.meeting

    def test_url_in_description_is_kept_in_both(self) -> None:
        state = ScanState(in_description_mode=True)
        ctx = make_ctx("Agenda: https://docs.example.com/agenda", state=state)
        assert classify_line(ctx) == "description_continuation"
        assert ctx.meeting["links"] == ["https://docs.example.com/agenda"]
        assert state.description_lines == ["Agenda: https://docs.example.com/agenda"]

    def test_phone_marker_opens_phone_section(self) -> None:
        state = ScanState()
        assert classify_line(make_ctx("Join by phone", state=state)) == "phone_marker"
        assert state.in_phone_section is True

    def test_phone_entries_are_joined(self) -> None:
        state = ScanState(in_phone_section=True)
        meeting: MeetingDict = {"title": "Sync"}
        for line in ("(US) +1 555-0100", "PIN: 123456#", "Meeting ID: 42"):
            assert classify_line(make_ctx(line, meeting=meeting, state=state)) == "phone_entry"
        assert meeting["phone_info"] == "(US) +1 555-0100\nPIN: 123456#\nMeeting ID: 42"

    def test_phone_entry_needs_marker(self) -> None:
        ctx = make_ctx("(US) +1 555-0100")
        assert classify_line(ctx) != "phone_entry"
        assert "phone_info" not in ctx.meeting

    @pytest.mark.parametrize("line", ["4 guests", "2 yes", "1 no", "1 maybe, 3 yes"])
    def test_guest_marker(self, line: str) -> None:
        state = ScanState(in_phone_section=True)
        assert classify_line(make_ctx(line, state=state)) == "guest_marker"
        assert state.saw_guest_marker is True
        assert state.in_phone_section is False

    def test_guest_marker_needs_whole_word(self) -> None:
        """'no' inside a name is not a guest response."""
        ctx = make_ctx("Nora Snow")
        assert classify_line(ctx) == "attendee"
        assert ctx.meeting["attendees"] == [Attendee(name="Nora Snow")]

    def test_organizer_label_takes_next_line(self) -> None:
        lines = ["Sync", "Organizer", "  Jane Doe  "]
        ctx = make_ctx("Organizer", lines=lines, index=1)
        assert classify_line(ctx) == "organizer_label"
        assert ctx.meeting["organizer"] == "Jane Doe"

    def test_organiser_label_at_end_of_text(self) -> None:
        ctx = make_ctx("Organiser", lines=["Sync", "Organiser"], index=1)
        assert classify_line(ctx) == "organizer_label"
        assert "organizer" not in ctx.meeting

    def test_created_by(self) -> None:
        ctx = make_ctx("Created by: Sam Lee")
        assert classify_line(ctx) == "created_by"
        assert ctx.meeting["organizer"] == "Sam Lee"

    def test_created_by_without_name(self) -> None:
        ctx = make_ctx("Created by:")
        assert classify_line(ctx) == "created_by"
        assert "organizer" not in ctx.meeting

    def test_greeting_starts_description(self) -> None:
        state = ScanState()
        assert classify_line(make_ctx("Hi, all", state=state)) == "description_start"
        assert state.in_description_mode is True
        assert state.description_lines == ["Hi, all"]

    def test_long_line_starts_description(self) -> None:
        line = "Quarterly planning session covering roadmap and hiring"
        assert len(line) > 50
        state = ScanState()
        assert classify_line(make_ctx(line, state=state)) == "description_start"

    def test_long_line_without_spaces_is_not_description(self) -> None:
        state = ScanState()
        classify_line(make_ctx("x" * 60, state=state))
        assert state.in_description_mode is False

    def test_description_mode_is_sticky(self) -> None:
        """Once in description mode a name-like line is not an attendee."""
        state = ScanState(in_description_mode=True)
        ctx = make_ctx("Priya Patel", state=state)
        assert classify_line(ctx) == "description_continuation"
        assert "attendees" not in ctx.meeting

    def test_attendee_fallback_uses_lookahead(self) -> None:
        lines = ["Sync", "Priya Patel", "Home"]
        ctx = make_ctx("Priya Patel", lines=lines, index=1)
        assert classify_line(ctx) == "attendee"
        assert ctx.meeting["attendees"] == [Attendee(name="Priya Patel", location="Home")]


# ── End to end ───────────────────────────────────────────────────────────────


class TestExtractMeeting:
    """Tests for extract_meeting() over whole invitation dumps."""

    def test_full_invitation(self, invitation: str, now: datetime) -> None:
        meeting = extract_meeting(invitation, now=now)

        assert meeting.title == "Weekly Product Sync"
        assert meeting.date_time == "Monday, 27 October⋅14:30 – 15:00"
        assert meeting.meeting_time == datetime(2025, 10, 27, 14, 30, tzinfo=timezone.utc)
        assert meeting.frequency == "Weekly on Monday"
        assert meeting.meet_link == "meet.google.com/abc-defg-hij"
        assert meeting.phone_info == "(GB) +44 20 3956 0000\nPIN: 123 456 789#"
        assert meeting.organizer == "Jane Doe"
        assert meeting.attendees == [
            Attendee(name="Jane Doe"),
            Attendee(name="Priya Patel", location="Home"),
            Attendee(name="Alex Brown", status="Declined"),
        ]
        assert meeting.description == (
            "Hi, this is our weekly sync to review the roadmap and blockers.\n"
            "Agenda: https://docs.example.com/agenda\n"
            "Bring updates"
        )
        assert meeting.links == [
            "meet.google.com/abc-defg-hij",
            "https://docs.example.com/agenda",
        ]
        assert meeting.location is None

    def test_title_is_trimmed(self) -> None:
        meeting = extract_meeting("\n\n   Design Review  \n")
        assert meeting.title == "Design Review"

    def test_blank_input_yields_empty_meeting(self) -> None:
        meeting = extract_meeting("  \n\n\t\n")
        assert meeting.title == ""
        assert meeting.attendees == []
        assert meeting.links == []
        assert meeting.description is None

    def test_unparseable_schedule_keeps_raw_line(self) -> None:
        meeting = extract_meeting("Sync\nSomeday, 27 Brumaire⋅14:30 – 15:00\n")
        assert meeting.date_time == "Someday, 27 Brumaire⋅14:30 – 15:00"
        assert meeting.meeting_time is None

    def test_superscript_schedule_does_not_raise(self) -> None:
        meeting = extract_meeting(
            "Sync\nMonday, 27 October⋅¹⁴:30 – 15:00\n",
            now=datetime(2025, 1, 1, tzinfo=timezone.utc),
        )
        assert meeting.date_time == "Monday, 27 October⋅¹⁴:30 – 15:00"
        assert meeting.meeting_time == datetime(2025, 10, 27, 0, 30, tzinfo=timezone.utc)

    def test_date_like_line_without_separators(self) -> None:
        meeting = extract_meeting("Sync\nMonday 27 October 14:30 to 15:00\n")
        assert meeting.date_time is None
        assert meeting.meeting_time is None

    def test_duplicate_links_and_attendees_are_kept(self) -> None:
        text = "Sync\nhttps://x.example\nhttps://x.example\nSam Lee\nSam Lee\n"
        meeting = extract_meeting(text)
        assert meeting.links == ["https://x.example", "https://x.example"]
        assert [a.name for a in meeting.attendees] == ["Sam Lee", "Sam Lee"]

    def test_line_equal_to_title_is_not_an_attendee(self) -> None:
        meeting = extract_meeting("Standup\nStandup\n")
        assert meeting.attendees == []

    def test_meeting_is_frozen(self, invitation: str) -> None:
        meeting = extract_meeting(invitation)
        with pytest.raises(ValidationError):
            meeting.title = "Changed"

    def test_extractor_uses_injected_now(self, invitation: str) -> None:
        extractor = MeetingExtractor(now=datetime(2030, 5, 5, tzinfo=timezone.utc))
        assert extractor.extract(invitation).meeting_time.year == 2030

    def test_custom_rule_table(self) -> None:
        """Dropping the attendee rule leaves names unclassified."""
        rules = [rule for rule in RULES if rule.name != "attendee"]
        meeting = MeetingExtractor(rules=rules).extract("Sync\nSam Lee\n")
        assert meeting.attendees == []
