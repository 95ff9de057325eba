"""Shared fixtures: a realistic invitation dump and a fixed clock."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

INVITATION = """\
Weekly Product Sync

Monday, 27 October⋅14:30 – 15:00
Weekly on Monday
meet.google.com/abc-defg-hij
Join by phone
(GB) +44 20 3956 0000
PIN: 123 456 789#

4 guests
2 yes
2 awaiting
Organiser
Jane Doe
Priya Patel
Home
Alex Brown
event_busy
Hi, this is our weekly sync to review the roadmap and blockers.
Agenda: https://docs.example.com/agenda
Bring updates
"""


@pytest.fixture
def invitation() -> str:
    return INVITATION


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 11, 3, 9, 0, tzinfo=timezone.utc)
