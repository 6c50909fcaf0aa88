"""Output format configuration shared by the generator commands."""

import os
from enum import Enum
from typing import Literal


class OutputFormat(str, Enum):
    """Console output formats."""
    AUTO = "auto"
    RICH = "rich"
    PLAIN = "plain"
    JSON = "json"


LogFormat = Literal["json", "console", "plain"]

ENV_VAR_NAME = "CONSOLE_OUTPUT_FORMAT"


def get_output_format(cli_override: str | None = None) -> OutputFormat:
    """
    Get the output format with priority: CLI parameter > Environment variable > Default (auto).

    Args:
        cli_override: Optional CLI parameter value that takes precedence

    Returns:
        OutputFormat enum value
    """
    if cli_override:
        try:
            return OutputFormat(cli_override.lower())
        except ValueError:
            pass

    env_value = os.environ.get(ENV_VAR_NAME)
    if env_value:
        try:
            return OutputFormat(env_value.lower())
        except ValueError:
            pass

    return OutputFormat.AUTO


def get_log_format(cli_override: str | None = None) -> LogFormat:
    """
    Get the log format with the same priority as ``get_output_format``.

    Maps output format to log format:
    - auto/rich -> console (with colors)
    - plain -> plain (no colors)
    - json -> json
    """
    if cli_override and cli_override.lower() in ("json", "console", "plain"):
        return cli_override.lower()  # type: ignore[return-value]

    output_format = get_output_format()
    if output_format == OutputFormat.JSON:
        return "json"
    if output_format == OutputFormat.PLAIN:
        return "plain"
    return "console"
