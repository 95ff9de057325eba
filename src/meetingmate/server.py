"""FastMCP server entrypoint.

Registers the MeetingMate tools. The tool implementations live in
`tools` so they can be unit-tested without the runtime.

Note: FastMCP is imported lazily; it is only needed when the server is
actually run.
"""

from __future__ import annotations


from .config import load_config
from .log import configure_logging
from .schemas import (
    ConvertMeetingInput,
    ConvertMeetingOutput,
    ParseMeetingInput,
    ParseMeetingOutput,
)
from .tools import convert_meeting, parse_meeting


def _register_fastmcp_tools(app, config):
    # Namespace: meetingmate.*

    @app.tool("meetingmate.meetings.parse")
    def meetings_parse(params: ParseMeetingInput) -> ParseMeetingOutput:
        return parse_meeting(config, params)

    @app.tool("meetingmate.notes.convert")
    def notes_convert(params: ConvertMeetingInput) -> ConvertMeetingOutput:
        return convert_meeting(config, params)


def main() -> None:
    """Run the FastMCP application.

    Loads configuration, configures logging on stderr and registers all
    tools with the FastMCP runtime.
    """

    config = load_config()
    configure_logging(config.log_level, json_output=config.log_json)

    try:
        from fastmcp import FastMCP
    except Exception as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "fastmcp is not installed. Install with 'pip install meetingmate[mcp]'"
        ) from exc

    app = FastMCP("meetingmate")
    _register_fastmcp_tools(app, config)

    # Serves until interrupted
    app.run()


if __name__ == "__main__":  # pragma: no cover
    main()
