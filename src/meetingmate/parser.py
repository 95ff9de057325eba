"""Meeting invitation parser.

Recovers a `Meeting` from text copy-pasted out of a calendar
application. There is no grammar to lean on, so each non-blank line is
run through an ordered table of rules and the first rule that claims the
line wins. A few rules flip sticky flags on a `ScanState` (phone
section, guest list, description mode) that change how later lines are
read.

Public API:
    - extract_meeting
    - classify_attendee
    - MeetingExtractor

Usage example:
    meeting = extract_meeting(open("invite.txt").read())
    print(meeting.title, meeting.meeting_time)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple, TypedDict

import structlog

from .schemas import Attendee, Meeting
from .utils.date_parser import (
    RANGE_SEPARATOR,
    SCHEDULE_SEPARATOR,
    parse_meeting_time,
)

logger = structlog.get_logger(__name__)

FREQUENCY_PREFIXES = ("Weekly", "Daily", "Monthly")
VIDEO_DOMAINS = ("meet.google.com", "zoom.us", "teams.microsoft.com")
URL_PREFIXES = ("http://", "https://")
PHONE_MARKER = "Join by phone"
PHONE_TOKENS = ("+", "PIN:", "ID:")
ORGANIZER_LABELS = ("Organiser", "Organizer")
CREATED_BY_PREFIX = "Created by:"
GREETING = "Hi,"
DESCRIPTION_MIN_LENGTH = 50
MEETING_LINK_TOKEN = "meet."

WORK_LOCATIONS = ("Home", "Office", "Scotland")
ATTENDEE_REJECT_TOKENS = (
    "guests",
    "yes",
    "awaiting",
    "Edit",
    "More joining",
    "http",
    "@",
    "event_busy",
    "Out of office",
    "bedtime",
    "Outside working hours",
    "Declined because",
)
DECLINED_TOKENS = ("event_busy", "Out of office")

_GUEST_RESPONSE = re.compile(r"\b(?:yes|no|maybe)\b")
_NAME_FORBIDDEN = re.compile(r"[0-9@.]")


class MeetingDict(TypedDict, total=False):
    """TypedDict for the meeting fields gathered during a scan."""

    title: str
    date_time: str
    meeting_time: Optional[datetime]
    frequency: str
    location: str
    meet_link: str
    phone_info: str
    organizer: Optional[str]
    attendees: List[Attendee]
    description: str
    links: List[str]


@dataclass
class ScanState:
    """Flags set by earlier lines that change how later lines are read."""

    in_phone_section: bool = False
    in_description_mode: bool = False
    saw_guest_marker: bool = False
    description_lines: List[str] = field(default_factory=list)


@dataclass
class LineContext:
    """One trimmed line plus access to its neighbours and the scan so far."""

    line: str
    index: int
    lines: Sequence[str]
    meeting: MeetingDict
    state: ScanState
    now: Optional[datetime] = None

    @property
    def next_line(self) -> Optional[str]:
        """The raw following line, trimmed, even when blank."""
        if self.index + 1 < len(self.lines):
            return self.lines[self.index + 1].strip()
        return None


@dataclass(frozen=True)
class Rule:
    """A named predicate and the action taken when it matches.

    `apply` returns True when the line is consumed; False lets the line
    fall through to the rules after it.
    """

    name: str
    matches: Callable[[LineContext], bool]
    apply: Callable[[LineContext], bool]


# ---------------------- Attendee classification ----------------------


def _is_rejected_attendee(line: str) -> bool:
    if any(token in line for token in ATTENDEE_REJECT_TOKENS):
        return True
    if line == RANGE_SEPARATOR or line in WORK_LOCATIONS:
        return True
    return len(line) < 3 or line.startswith(URL_PREFIXES)


def _looks_like_name(line: str) -> bool:
    if MEETING_LINK_TOKEN in line or ".com" in line:
        return False
    words = line.split()
    if not 1 <= len(words) <= 4:
        return False
    return not any(_NAME_FORBIDDEN.search(word) for word in words)


def classify_attendee(line: str, next_line: Optional[str] = None) -> Attendee:
    """Decide whether a line names an attendee.

    Args:
        line: Candidate line, already trimmed.
        next_line: The following line, used for status or location.

    Returns:
        An `Attendee`; its `name` is empty when the line was rejected.

    Examples:
        >>> classify_attendee("John Smith", "Optional").status
        'Optional'
        >>> classify_attendee("jane@example.com").name
        ''
    """

    if _is_rejected_attendee(line) or not _looks_like_name(line):
        return Attendee()

    if next_line is None:
        return Attendee(name=line)
    if any(token in next_line for token in DECLINED_TOKENS):
        return Attendee(name=line, status="Declined")
    if "Optional" in next_line:
        return Attendee(name=line, status="Optional")
    if next_line in WORK_LOCATIONS:
        return Attendee(name=line, location=next_line)
    return Attendee(name=line)


# ---------------------- Rule predicates and actions ----------------------


def _append_link(ctx: LineContext, url: str) -> None:
    ctx.meeting.setdefault("links", []).append(url)


def _set_title(ctx: LineContext) -> bool:
    ctx.meeting["title"] = ctx.line
    return True


def _is_schedule(ctx: LineContext) -> bool:
    return SCHEDULE_SEPARATOR in ctx.line and RANGE_SEPARATOR in ctx.line


def _set_schedule(ctx: LineContext) -> bool:
    ctx.meeting["date_time"] = ctx.line
    ctx.meeting["meeting_time"] = parse_meeting_time(ctx.line, now=ctx.now)
    return True


def _set_frequency(ctx: LineContext) -> bool:
    ctx.meeting["frequency"] = ctx.line
    return True


def _set_meet_link(ctx: LineContext) -> bool:
    ctx.meeting["meet_link"] = ctx.line
    _append_link(ctx, ctx.line)
    return True


def _collect_urls(ctx: LineContext) -> bool:
    words = ctx.line.split()
    for word in words:
        if word.startswith(URL_PREFIXES):
            _append_link(ctx, word)
    # Only a line that is nothing but a URL is consumed here.
    return len(words) == 1 and ctx.line.startswith(URL_PREFIXES)


def _enter_phone_section(ctx: LineContext) -> bool:
    ctx.state.in_phone_section = True
    return True


def _is_phone_entry(ctx: LineContext) -> bool:
    return ctx.state.in_phone_section and any(
        token in ctx.line for token in PHONE_TOKENS
    )


def _append_phone(ctx: LineContext) -> bool:
    existing = ctx.meeting.get("phone_info")
    ctx.meeting["phone_info"] = f"{existing}\n{ctx.line}" if existing else ctx.line
    return True


def _is_guest_marker(ctx: LineContext) -> bool:
    return "guests" in ctx.line or bool(_GUEST_RESPONSE.search(ctx.line))


def _enter_guest_list(ctx: LineContext) -> bool:
    ctx.state.saw_guest_marker = True
    ctx.state.in_phone_section = False
    return True


def _take_next_as_organizer(ctx: LineContext) -> bool:
    following = ctx.next_line
    if following is not None:
        ctx.meeting["organizer"] = following or None
    return True


def _set_created_by(ctx: LineContext) -> bool:
    created_by = ctx.line[len(CREATED_BY_PREFIX):].strip()
    if created_by:
        ctx.meeting["organizer"] = created_by
    return True


def _starts_description(ctx: LineContext) -> bool:
    line = ctx.line
    return GREETING in line or (len(line) > DESCRIPTION_MIN_LENGTH and " " in line)


def _append_description(ctx: LineContext) -> bool:
    ctx.state.in_description_mode = True
    ctx.state.description_lines.append(ctx.line)
    return True


def _is_attendee_candidate(ctx: LineContext) -> bool:
    line = ctx.line
    return (
        line != ctx.meeting.get("title")
        and SCHEDULE_SEPARATOR not in line
        and MEETING_LINK_TOKEN not in line
    )


def _add_attendee(ctx: LineContext) -> bool:
    attendee = classify_attendee(ctx.line, ctx.next_line)
    if attendee.name:
        ctx.meeting.setdefault("attendees", []).append(attendee)
    return True


RULES: Tuple[Rule, ...] = (
    Rule("title", lambda ctx: not ctx.meeting.get("title"), _set_title),
    Rule("schedule", _is_schedule, _set_schedule),
    Rule(
        "recurrence",
        lambda ctx: ctx.line.startswith(FREQUENCY_PREFIXES),
        _set_frequency,
    ),
    Rule(
        "video_link",
        lambda ctx: any(domain in ctx.line for domain in VIDEO_DOMAINS),
        _set_meet_link,
    ),
    Rule(
        "bare_url",
        lambda ctx: any(prefix in ctx.line for prefix in URL_PREFIXES),
        _collect_urls,
    ),
    Rule("phone_marker", lambda ctx: PHONE_MARKER in ctx.line, _enter_phone_section),
    Rule("phone_entry", _is_phone_entry, _append_phone),
    Rule("guest_marker", _is_guest_marker, _enter_guest_list),
    Rule(
        "organizer_label",
        lambda ctx: any(label in ctx.line for label in ORGANIZER_LABELS),
        _take_next_as_organizer,
    ),
    Rule(
        "created_by",
        lambda ctx: ctx.line.startswith(CREATED_BY_PREFIX),
        _set_created_by,
    ),
    Rule("description_start", _starts_description, _append_description),
    Rule(
        "description_continuation",
        lambda ctx: ctx.state.in_description_mode,
        _append_description,
    ),
    Rule("attendee", _is_attendee_candidate, _add_attendee),
)


def classify_line(
    ctx: LineContext, rules: Sequence[Rule] = RULES
) -> Optional[str]:
    """Run a line through the rules and return the name of the one that consumed it.

    Rules that match without consuming (a URL embedded in prose) still
    apply their action before the next rule is tried.
    """

    for rule in rules:
        if rule.matches(ctx) and rule.apply(ctx):
            return rule.name
    return None


# ---------------------- Extraction ----------------------


class MeetingExtractor:
    """Single forward scan over an invitation dump.

    Args:
        now: Reference time used for the year of the parsed schedule.
            If None, the current time is used.
        rules: Ordered rule table; earlier rules take priority.
    """

    def __init__(
        self, *, now: Optional[datetime] = None, rules: Sequence[Rule] = RULES
    ) -> None:
        self._now = now
        self._rules = tuple(rules)

    def extract(self, text: str) -> Meeting:
        """Scan the text and return the recovered meeting.

        Never raises on content: anything unrecognized is left unset.
        """

        lines = text.split("\n")
        draft: MeetingDict = {}
        state = ScanState()

        for index, raw in enumerate(lines):
            line = raw.strip()
            if not line:
                continue
            ctx = LineContext(
                line=line,
                index=index,
                lines=lines,
                meeting=draft,
                state=state,
                now=self._now,
            )
            rule = classify_line(ctx, self._rules)
            logger.debug("line_classified", index=index, rule=rule)

        if state.description_lines:
            draft["description"] = "\n".join(state.description_lines)

        meeting = Meeting.model_validate(draft)
        logger.debug(
            "meeting_extracted",
            title=meeting.title,
            attendees=len(meeting.attendees),
            links=len(meeting.links),
            has_time=meeting.meeting_time is not None,
        )
        return meeting


def extract_meeting(text: str, *, now: Optional[datetime] = None) -> Meeting:
    """Extract a `Meeting` from invitation text.

    Args:
        text: Newline-separated invitation text.
        now: Reference time for the schedule year; defaults to now.

    Returns:
        The frozen meeting record.
    """

    return MeetingExtractor(now=now).extract(text)
