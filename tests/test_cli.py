"""Tests for the exprcalc command line."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from exprcalc import __version__
from exprcalc.cli import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestEval:
    def test_prints_result(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["eval", "2 + 3 * 4"])
        assert result.exit_code == 0
        assert result.output == "14\n"

    def test_fractional_result(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["eval", "10 / 4"])
        assert result.exit_code == 0
        assert result.output == "2.5\n"

    def test_leading_minus_after_separator(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["eval", "--", "-5 + 3"])
        assert result.exit_code == 0
        assert result.output == "-2\n"

    @pytest.mark.parametrize(
        "code, message",
        [
            ("2 $ 3", "[Tokenizer error] Unexpected character: '$'"),
            ("2 * * 3", "Parser error: Operand expected, found STAR"),
            ("1 / 0", "[Runtime error] Division by zero"),
        ],
    )
    def test_error_exits_with_failure(self, runner: CliRunner, code: str, message: str) -> None:
        result = runner.invoke(main, ["eval", code])
        assert result.exit_code == 1
        assert message in result.output

    def test_max_depth_option(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["eval", "--max-depth", "1", "((1))"])
        assert result.exit_code == 1
        assert "nested too deeply (limit is 1)" in result.output

    def test_max_depth_from_environment(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["eval", "((1))"], env={"EXPRCALC_MAX_DEPTH": "1"})
        assert result.exit_code == 1
        assert "nested too deeply" in result.output

    def test_max_depth_must_be_positive(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["eval", "--max-depth", "0", "1"])
        assert result.exit_code == 2

    def test_verbose_logs_tokens(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["-v", "eval", "1 + 1"])
        assert result.exit_code == 0
        assert "tokens: <NUMBER>1 <PLUS>+ <NUMBER>1" in result.output


class TestRepl:
    def test_evaluates_each_line(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["repl"], input="1 + 1\n\n2 *\n3 ^ 2\n")
        assert result.exit_code == 0
        assert "> 2" in result.output
        assert "> 9" in result.output
        assert "Parser error: Unexpected end of expression" in result.output

    def test_exits_on_eof(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["repl"], input="")
        assert result.exit_code == 0


class TestExplain:
    def test_shows_stages(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["explain", "sqrt(16)"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "tokens: <IDENTIFIER>sqrt <BRACKET_OPEN>( <NUMBER>16 <BRACKET_CLOSE>)",
            "ast: Call(function=SQRT, argument=Literal(value=16.0))",
            "result: 4",
        ]

    def test_stops_at_failing_stage(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["explain", "2 +"])
        assert result.exit_code == 1
        assert "tokens: <NUMBER>2 <PLUS>+" in result.output
        assert "ast:" not in result.output


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


class TestDeepTrees:
    chain = "1" + " + 1" * 2000

    def test_explain_long_chain(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["explain", self.chain])
        assert result.exit_code == 0
        assert result.output.startswith("tokens: ")
        assert "ast: BinaryOperation(operator=ADD, left=BinaryOperation(" in result.output
        assert result.output.endswith("result: 2001\n")

    def test_verbose_eval_long_chain(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["-v", "eval", self.chain])
        assert result.exit_code == 0
        assert "Logging error" not in result.output
        assert "ast: BinaryOperation(" in result.output
        assert "2001" in result.output.splitlines()

    def test_max_depth_above_limit_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["eval", "--max-depth", "5000", "1"])
        assert result.exit_code == 2
