"""Environment configuration for MeetingMate.

Output defaults can be set once in the environment instead of being
passed on every run:

```bash
export MEETINGMATE_INCLUDE_DETAILS=true
export MEETINGMATE_INCLUDE_ATTENDEES=true
export MEETINGMATE_PLAIN=false
export MEETINGMATE_LOG_LEVEL=DEBUG
```

These are rendered to the AppConfig class and can be accessed like this:

```python
from meetingmate.config import load_config
cfg = load_config()
print(cfg.include_details)
```
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class AppConfig(BaseSettings):
    """Application configuration settings loaded from environment variables.

    All environment variables are prefixed with MEETINGMATE_
    (e.g., MEETINGMATE_PLAIN). Command-line flags and tool parameters
    can switch sections on over these defaults.
    """

    # ---- rendering ----
    include_details: bool = Field(
        default=False,
        description="Include the Meeting Details section in rendered notes",
    )
    include_attendees: bool = Field(
        default=False,
        description="Include the Attendees section in rendered notes",
    )
    plain: bool = Field(
        default=False,
        description="Render plain text instead of markdown with front matter",
    )

    # ---- logging ----
    log_level: str = Field(
        default="WARNING", description="Minimum level for log output on stderr"
    )
    log_json: bool = Field(
        default=False, description="Emit JSON log lines instead of console output"
    )

    model_config = SettingsConfigDict(
        env_prefix="MEETINGMATE_",
        case_sensitive=False,
        env_file=(".env",),  # will read if present
        env_file_encoding="utf-8",
        frozen=True,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v):
        level = str(v or "WARNING").strip().upper()
        if level not in _LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level


def load_config() -> AppConfig:
    """Load and validate application configuration from environment variables.

    • All variables are prefixed with MEETINGMATE_.
    • Missing values fall back to the documented defaults.
    """
    return AppConfig()
