"""Invitation-to-notes tool functions."""

from __future__ import annotations

from typing import Optional

import structlog

from ..config import AppConfig
from ..errors import BadRequestError
from ..parser import extract_meeting
from ..schemas import (
    ConvertMeetingInput,
    ConvertMeetingOutput,
    ParseMeetingInput,
    ParseMeetingOutput,
)
from ..utils import render_meeting

logger = structlog.get_logger(__name__)


def _pick(value: Optional[bool], default: bool) -> bool:
    return default if value is None else value


def parse_meeting(config: AppConfig, params: ParseMeetingInput) -> ParseMeetingOutput:
    """Extract the structured meeting record from invitation text."""

    if not params.text.strip():
        raise BadRequestError("'text' is required")
    return ParseMeetingOutput(meeting=extract_meeting(params.text))


def convert_meeting(
    config: AppConfig, params: ConvertMeetingInput
) -> ConvertMeetingOutput:
    """Extract a meeting and render it as notes.

    Toggles left unset in `params` fall back to the configured defaults.
    """

    if not params.text.strip():
        raise BadRequestError("'text' is required")

    meeting = extract_meeting(params.text)
    plain = _pick(params.plain, config.plain)
    notes = render_meeting(
        meeting,
        include_details=_pick(params.include_details, config.include_details),
        include_attendees=_pick(params.include_attendees, config.include_attendees),
        plain=plain,
    )
    logger.info(
        "meeting_converted",
        title=meeting.title,
        format="plain" if plain else "markdown",
    )
    return ConvertMeetingOutput(notes=notes, meeting=meeting)
