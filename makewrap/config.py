"""Runtime configuration: env-driven defaults for makewrap's own behavior.

Settings are read from ``MAKEWRAP_*`` environment variables or a ``.env``
file.  They only change how makewrap runs (which program, echo, logging);
the forwarded make arguments and the line rules are never affected.
Command-line options override every setting here.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class WrapConfig(BaseSettings):
    """makewrap configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export MAKEWRAP_MAKE_PROGRAM=gmake
        export MAKEWRAP_LOG_LEVEL=DEBUG
        export MAKEWRAP_SHOW_SUMMARY=true
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="MAKEWRAP_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Build invocation
    make_program: str = "make"
    merge_stderr: bool = True

    # Presentation
    echo_command: bool = True
    show_summary: bool = False

    # Observability
    log_level: str = "WARNING"


# Module-level singleton: import as `from makewrap.config import config`
config = WrapConfig()
