"""Tools for parsing invitations and converting them into notes.

Each tool is exposed as a plain Python function to facilitate testing.
An MCP runtime adapter (see `server.py`) registers these with the
FastMCP runtime. The tool functions return Pydantic models.
"""

from .notes import convert_meeting, parse_meeting

__all__ = [
    "parse_meeting",
    "convert_meeting",
]
