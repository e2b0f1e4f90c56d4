#!/usr/bin/env python3
"""PktTrim command line entry point"""

import logging
import os

import typer

from pkttrim.cli.commands import config_command, trim_command, validate_command
from pkttrim.common.constants import EnvVars
from pkttrim.infrastructure.logging import get_logger

app = typer.Typer(
    help="PktTrim - strip application payload from PCAP/PCAPNG captures",
    add_completion=False,
)

get_logger()

# PKTTRIM_LOG_LEVEL=DEBUG pkttrim trim input.pcap
_env_log_level = os.environ.get(EnvVars.LOG_LEVEL, "").upper()
if _env_log_level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
    _level = getattr(logging, _env_log_level)
    for _handler in logging.getLogger("pkttrim").handlers:
        if type(_handler) is logging.StreamHandler:
            _handler.setLevel(_level)

app.command("trim", help="Strip payload above the transport layer")(trim_command)
app.command("validate", help="Dry run: report packets that cannot be trimmed")(validate_command)
app.command("config", help="Display the effective configuration")(config_command)


def main():
    app()


if __name__ == "__main__":
    main()
