"""
exprc - Expression Compiler Command-Line Interface
==================================================

This module implements the command-line interface for the expression
compiler. Input is read from a file or standard input; assembly goes to
standard output or a file, line by line as it is generated.

Commands
--------
- **compile**: Translate an expression to assembly
- **run**: Translate an expression and print its value
- **hello**: Read a name and a digit and greet them

Usage Examples
--------------
Translate from standard input:
    $ echo "2*3+4" | exprc compile

Translate a file to a file, in Intel syntax:
    $ exprc compile -s intel expr.txt -o expr.s

Translate and show the computed value:
    $ echo "(2+3)*4" | exprc compile --run

Evaluate only:
    $ echo "9-3-2" | exprc run

Exit Codes
----------
0 - Success
1 - Syntax, code generation or execution error
2 - Invalid arguments or missing files
3 - Internal error
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

import click

from exprc import __version__
from exprc.cli.errors import handle_cli_exception
from exprc.translator import (
    ExpressionTranslator,
    LookaheadSource,
    RegisterMachine,
    TargetSyntax,
    TrailingInput,
    TranslatorOptions,
    greet,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Shared Options and Utilities
# =============================================================================

SYNTAX_CHOICES = [s.value for s in TargetSyntax]
TRAILING_CHOICES = [t.value for t in TrailingInput]


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s" if verbose else "%(message)s",
    )


def build_options(
    syntax: Optional[str],
    trailing: Optional[str],
) -> TranslatorOptions:
    """Start from environment overrides, then apply command-line flags."""
    options = TranslatorOptions.from_env()
    if syntax:
        options.syntax = TargetSyntax(syntax.lower())
    if trailing:
        options.trailing = TrailingInput(trailing.lower())
    logger.debug(f"Options: syntax={options.syntax.value}, trailing={options.trailing.value}")
    return options


def input_argument(func):
    """
    Shared INPUT argument: a file, or '-' for standard input.

    Undecodable bytes are kept as surrogate escapes so they reach the
    matcher and are reported as syntax errors.
    """
    return click.argument(
        "input_file",
        metavar="INPUT",
        type=click.File("r", errors="surrogateescape"),
        default="-",
    )(func)


def trailing_option(func):
    return click.option(
        "--trailing",
        type=click.Choice(TRAILING_CHOICES, case_sensitive=False),
        default=None,
        help="What may follow the expression: ignore, newline (default) or end.",
    )(func)


def verbose_option(func):
    return click.option(
        "-v", "--verbose",
        is_flag=True,
        help="Verbose output (debug log on stderr)",
    )(func)


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.version_option(__version__, "--version", "-V", prog_name="exprc")
def main() -> None:
    """
    Single-pass compiler for arithmetic expressions.

    Translates one expression over single digits, parentheses and
    + - * / into 32-bit x86 stack-machine assembly.

    \b
    Commands:
      compile   Translate an expression to assembly
      run       Translate and print the computed value
      hello     Greet a one-letter name and a digit

    \b
    Examples:
      echo "2*3+4" | exprc compile
      exprc compile -s intel expr.txt -o expr.s
      echo "9-3-2" | exprc run
    """
    pass


# =============================================================================
# Compile Command
# =============================================================================

@main.command("compile")
@input_argument
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output assembly file (default: standard output)",
)
@click.option(
    "-s", "--syntax",
    type=click.Choice(SYNTAX_CHOICES, case_sensitive=False),
    default=None,
    help="Assembly syntax: att (default), intel or mnemonic.",
)
@trailing_option
@click.option(
    "--run",
    "run_code",
    is_flag=True,
    help="Also execute the generated code and print the result",
)
@verbose_option
def cmd_compile(
    input_file: TextIO,
    output: Optional[Path],
    syntax: Optional[str],
    trailing: Optional[str],
    run_code: bool,
    verbose: bool,
) -> None:
    """
    Translate an expression to assembly.

    INPUT is a file holding the expression, or '-' (default) for
    standard input. Instructions are written as they are generated, so
    the lines produced before a syntax error remain in the output.

    \b
    Examples:
      echo "(2+3)*4" | exprc compile
      exprc compile expr.txt -o expr.s
      exprc compile -s mnemonic --run expr.txt
    """
    setup_logging(verbose)
    options = build_options(syntax, trailing)
    translator = ExpressionTranslator(options)

    try:
        if output is not None:
            with output.open("w") as sink:
                result = translator.translate_stream(input_file, sink)
        else:
            result = translator.translate_stream(input_file, sys.stdout)

        if verbose:
            click.echo(
                f"Translated {result.consumed} characters into "
                f"{len(result.instructions)} instructions "
                f"(stack depth {result.max_stack_depth}, {options.syntax.value} syntax)",
                err=True,
            )
            if output is not None:
                click.echo(f"Wrote {output}", err=True)

        if run_code:
            value = RegisterMachine().run(result.instructions)
            click.echo(f"Result: {value}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


# =============================================================================
# Run Command
# =============================================================================

@main.command("run")
@input_argument
@trailing_option
@verbose_option
def cmd_run(input_file: TextIO, trailing: Optional[str], verbose: bool) -> None:
    """
    Translate an expression and print its value.

    The generated code is executed on the reference register machine
    with 32-bit signed arithmetic; division truncates toward zero.

    \b
    Example:
      echo "9-3-2" | exprc run      # prints 4
    """
    setup_logging(verbose)
    options = build_options(None, trailing)

    try:
        result = ExpressionTranslator(options).translate_stream(input_file)
        value = RegisterMachine().run(result.instructions)
        click.echo(str(value))
    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


# =============================================================================
# Hello Command
# =============================================================================

@main.command("hello")
@input_argument
@verbose_option
def cmd_hello(input_file: TextIO, verbose: bool) -> None:
    """
    Read a one-letter name followed by a digit and greet them.

    \b
    Example:
      echo "x7" | exprc hello       # prints Hello, X7
    """
    setup_logging(verbose)

    try:
        click.echo(greet(LookaheadSource(input_file)))
    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
