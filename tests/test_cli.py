"""
Command-Line Interface Tests
============================

Tests for the exprc CLI tool, run in-process with click's CliRunner.
"""

import sys

import pytest
from click.testing import CliRunner

from exprc.cli.errors import ExitCode, describe_error, handle_cli_exception
from exprc.cli.exprc import main
from exprc.errors import ExpressionSyntaxError, MachineError


@pytest.fixture
def runner():
    return CliRunner()


class TestGroup:
    """Top-level group behaviour."""

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Single-pass compiler" in result.output
        assert "compile" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestCompileCommand:
    """Tests for `exprc compile`."""

    def test_compile_stdin(self, runner):
        result = runner.invoke(main, ["compile"], input="2*3+4\n")
        assert result.exit_code == 0
        assert result.output == (
            "\tmov $2, %eax\n"
            "\tpush %eax\n"
            "\tmov $3, %eax\n"
            "\tpop %ebx\n"
            "\timul %ebx, %eax\n"
            "\tpush %eax\n"
            "\tmov $4, %eax\n"
            "\tpop %ebx\n"
            "\tadd %ebx, %eax\n"
        )

    def test_compile_file_to_file(self, runner, tmp_path):
        source = tmp_path / "expr.txt"
        source.write_text("(2+3)*4\n")
        target = tmp_path / "expr.s"

        result = runner.invoke(main, ["compile", str(source), "-o", str(target)])

        assert result.exit_code == 0
        text = target.read_text()
        assert text.startswith("\tmov $2, %eax\n")
        assert text.endswith("\timul %ebx, %eax\n")

    def test_intel_syntax(self, runner):
        result = runner.invoke(main, ["compile", "-s", "intel"], input="1+2")
        assert result.exit_code == 0
        assert "\tadd eax, ebx\n" in result.output

    def test_syntax_from_environment(self, runner):
        result = runner.invoke(
            main, ["compile"], input="1", env={"EXPRC_SYNTAX": "mnemonic"}
        )
        assert result.exit_code == 0
        assert result.output == "\tLOAD_IMMEDIATE eax, 1\n"

    def test_flag_overrides_environment(self, runner):
        result = runner.invoke(
            main, ["compile", "-s", "att"], input="1", env={"EXPRC_SYNTAX": "intel"}
        )
        assert result.output == "\tmov $1, %eax\n"

    def test_run_flag(self, runner):
        result = runner.invoke(main, ["compile", "--run"], input="(2+3)*4\n")
        assert result.exit_code == 0
        assert result.output.endswith("Result: 20\n")

    def test_syntax_error_exit_code(self, runner):
        result = runner.invoke(main, ["compile"], input="*3\n")
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "Integer expected" in result.output
        assert "mov" not in result.output

    def test_partial_output_before_error(self, runner):
        result = runner.invoke(main, ["compile"], input="(2+3")
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "\tadd %ebx, %eax\n" in result.output
        assert "')' expected" in result.output

    def test_trailing_ignore(self, runner):
        result = runner.invoke(main, ["compile", "--trailing", "ignore"], input="2 junk")
        assert result.exit_code == 0
        assert result.output == "\tmov $2, %eax\n"

    def test_trailing_end(self, runner):
        result = runner.invoke(main, ["compile", "--trailing", "end"], input="2\n")
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "End of input expected" in result.output

    def test_undecodable_input(self, runner):
        result = runner.invoke(main, ["compile"], input=b"\xff\n")
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "Integer expected" in result.output
        assert "found byte 0xFF" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["compile", str(tmp_path / "missing.txt")])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_invalid_syntax_choice(self, runner):
        result = runner.invoke(main, ["compile", "-s", "arm"], input="1")
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_verbose_summary(self, runner):
        result = runner.invoke(main, ["compile", "-v"], input="1+2\n")
        assert result.exit_code == 0
        assert "into 5 instructions" in result.output


class TestRunCommand:
    """Tests for `exprc run`."""

    def test_run(self, runner):
        result = runner.invoke(main, ["run"], input="9-3-2\n")
        assert result.exit_code == 0
        assert result.output == "4\n"

    def test_run_division_by_zero(self, runner):
        result = runner.invoke(main, ["run"], input="5/0\n")
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "Execution error: division by zero" in result.output

    def test_run_syntax_error(self, runner):
        result = runner.invoke(main, ["run"], input="2+\n")
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "Integer expected" in result.output

    def test_run_nesting_too_deep(self, runner):
        depth = max(400, sys.getrecursionlimit())
        text = "(" * depth + "1" + ")" * depth + "\n"
        result = runner.invoke(main, ["run"], input=text)
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "nested too deeply" in result.output
        assert "Internal error" not in result.output


class TestHelloCommand:
    """Tests for `exprc hello`."""

    def test_hello(self, runner):
        result = runner.invoke(main, ["hello"], input="x7\n")
        assert result.exit_code == 0
        assert result.output == "Hello, X7\n"

    def test_hello_missing_name(self, runner):
        result = runner.invoke(main, ["hello"], input="7\n")
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "Name expected" in result.output


class TestErrorReporting:
    """Mapping of exceptions to diagnostics and exit codes."""

    def test_translation_error_printed_as_is(self):
        message, code = describe_error(ExpressionSyntaxError("Integer", found="*"))
        assert message.startswith("error: Integer expected")
        assert code is ExitCode.BUILD_ERROR

    def test_machine_error_prefix(self):
        message, code = describe_error(MachineError("division by zero"))
        assert message == "Execution error: division by zero"
        assert code is ExitCode.BUILD_ERROR

    def test_os_error_is_invalid_args(self):
        message, code = describe_error(FileNotFoundError("missing.txt"))
        assert message == "Error: missing.txt"
        assert code is ExitCode.INVALID_ARGS

    def test_unexpected_error_is_internal(self):
        message, code = describe_error(RuntimeError("boom"))
        assert message == "Internal error: boom"
        assert code is ExitCode.INTERNAL_ERROR

    def test_handler_exits_with_code(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(MachineError("pop from empty stack at step 0"))
        assert exc_info.value.code == ExitCode.BUILD_ERROR
        assert "Execution error: pop" in capsys.readouterr().err
