"""
CLI Error Reporting
===================

Maps exceptions raised by the translator and the reference machine to a
diagnostic on stderr and an exit code, shared by every exprc subcommand.

| Exception            | Message prefix        | Exit code      |
|----------------------|-----------------------|----------------|
| TranslationError     | (already "error: ...")| BUILD_ERROR    |
| MachineError         | "Execution error: "   | BUILD_ERROR    |
| other ExprcError     | "Error: "             | BUILD_ERROR    |
| click.BadParameter   | "Error: "             | INVALID_ARGS   |
| OSError              | "Error: "             | INVALID_ARGS   |
| anything else        | "Internal error: "    | INTERNAL_ERROR |
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from exprc.errors import ExprcError, MachineError, TranslationError


class ExitCode(IntEnum):
    """Exit codes of the exprc tool."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Syntax, code generation or execution error
    INVALID_ARGS = 2     # Invalid arguments, missing or unwritable files
    INTERNAL_ERROR = 3   # Unexpected internal error


def describe_error(error: Exception) -> tuple[str, ExitCode]:
    """Return the diagnostic text and exit code for an exception."""
    if isinstance(error, TranslationError):
        return str(error), ExitCode.BUILD_ERROR
    if isinstance(error, MachineError):
        return f"Execution error: {error}", ExitCode.BUILD_ERROR
    if isinstance(error, ExprcError):
        return f"Error: {error}", ExitCode.BUILD_ERROR
    if isinstance(error, (click.BadParameter, OSError)):
        return f"Error: {error}", ExitCode.INVALID_ARGS
    return f"Internal error: {error}", ExitCode.INTERNAL_ERROR


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception from a subcommand and exit.

    Args:
        error: The exception that was raised
        verbose: If True, print the traceback of internal errors

    Raises:
        SystemExit: Always, with the code from describe_error
    """
    message, code = describe_error(error)
    click.echo(message, err=True)
    if verbose and code is ExitCode.INTERNAL_ERROR:
        traceback.print_exc()
    sys.exit(code)
