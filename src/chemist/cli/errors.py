"""
Unified CLI Error Handling
==========================

Provides consistent error reporting and exit codes for the command-line
tools.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Exit codes for CLI tools."""
    SUCCESS = 0
    ERROR = 1            # Usage, file access, compilation or assembler error
    INTERNAL_ERROR = 3   # Unexpected internal error


class AssemblerError(click.ClickException):
    """The external assembler ran but reported a failure."""

    exit_code = ExitCode.ERROR


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception on stderr and exit with the matching code.

    Raises:
        SystemExit: Always
    """
    from chemist.cc.errors import CompilerError
    from chemist.errors import ChemistError

    if isinstance(error, CompilerError):
        # Already formatted with location and "error:" prefix
        click.echo(str(error), err=True)
        sys.exit(ExitCode.ERROR)

    elif isinstance(error, ChemistError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.ERROR)

    elif isinstance(error, click.ClickException):
        error.show()
        sys.exit(ExitCode.ERROR)

    elif isinstance(error, OSError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.ERROR)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
