"""Tests for the interactive loop."""

import io

import pytest

from batchcalc.app.config import CalculatorConfig
from batchcalc.app.repl import BANNER, respond, run_repl


def run(lines: str, config: CalculatorConfig = None) -> tuple[int, list[str]]:
    out = io.StringIO()
    count = run_repl(io.StringIO(lines), out, config)
    return count, out.getvalue().splitlines()


class TestRespond:
    """Single response lines."""

    def test_result(self):
        assert respond("3+4*2", CalculatorConfig()) == "Result: 11"

    def test_error(self):
        line = respond("5/0", CalculatorConfig())
        assert line.startswith("Err: ")
        assert "zero" in line


class TestRunRepl:
    """Prompt loop."""

    def test_banner_and_results(self):
        count, lines = run("1/3+1/3\n(3+4)*2\nexit\n")
        assert count == 2
        assert lines[0] == BANNER.format(exit="exit")
        assert "> Result: 2/3" in lines
        assert "> Result: 14" in lines

    @pytest.mark.parametrize("command", ["exit", "EXIT", "Exit", "  exit  "])
    def test_exit_case_insensitive(self, command):
        count, _ = run(f"{command}\n1+1\n")
        assert count == 0

    def test_errors_do_not_end_session(self):
        count, lines = run("5/0\n1+\n2*3\nexit\n")
        assert count == 3
        assert sum(1 for line in lines if "Err: " in line) == 2
        assert "> Result: 6" in lines

    def test_eof_ends_session(self):
        count, _ = run("1+1\n")
        assert count == 1

    def test_custom_prompt_and_exit_command(self):
        config = CalculatorConfig(prompt="calc> ", exit_command="quit")
        count, lines = run("2*2\nexit\nQUIT\n", config)
        # "exit" is evaluated (and fails) because the exit command is "quit"
        assert count == 2
        assert "calc> Result: 4" in lines
