"""MeetingMate package.

Turns a meeting invitation copy-pasted from a calendar application into
structured notes. A heuristic line scanner recovers a `Meeting` record
and a renderer writes it out as markdown with front matter or as plain
text.

Usage example:
    from meetingmate.parser import extract_meeting
    from meetingmate.utils import render_meeting

    meeting = extract_meeting(text)
    notes = render_meeting(meeting, include_details=True,
                           include_attendees=True, plain=False)

Note: The same operations are exposed as tools by `meetingmate.server`
and on the command line by `meetingmate.cli`.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
