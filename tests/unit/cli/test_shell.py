"""Unit tests for the interactive shell."""

import io

import pytest
from rich.console import Console

from rau.cli.shell import PROMPT, InteractiveShell


def _lines(*lines: str, end: type[BaseException] = EOFError):
    """Line source yielding the given lines, then raising end."""
    pending = list(lines)
    prompts = []

    def read_line(prompt: str) -> str:
        prompts.append(prompt)
        if not pending:
            raise end()
        return pending.pop(0)

    read_line.prompts = prompts
    return read_line


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


def _shell(read_line, output: io.StringIO) -> InteractiveShell:
    console = Console(file=output, force_terminal=False, width=120)
    return InteractiveShell(["Name", "Status"], read_line=read_line, out=console)


class TestCheck:
    """Tests for per-line validation."""

    @pytest.fixture
    def shell(self, output) -> InteractiveShell:
        return _shell(_lines(), output)

    def test_known_field(self, shell):
        assert shell.check("Status=Active") == "Field: Status Value: Active"

    def test_unknown_field(self, shell):
        assert shell.check("Colour=Red") == "Unknown field: Colour"

    @pytest.mark.parametrize("line", ["Status", "a=b=c", ""])
    def test_invalid_input(self, shell, line):
        assert shell.check(line) == "Invalid input. Use format key=value"

    def test_empty_value_is_accepted(self, shell):
        assert shell.check("Name=") == "Field: Name Value: "


class TestRun:
    """Tests for the read loop."""

    def test_echoes_each_line_until_eof(self, output):
        read_line = _lines("Name=Acme", "Bogus=1", "nonsense")
        shell = _shell(read_line, output)

        shell.run()

        text = output.getvalue()
        assert "Field: Name Value: Acme" in text
        assert "Unknown field: Bogus" in text
        assert "Invalid input. Use format key=value" in text
        assert read_line.prompts == [PROMPT] * 4
        assert shell.running is False

    def test_interrupt_exits_cleanly(self, output):
        shell = _shell(_lines("Name=Acme", end=KeyboardInterrupt), output)

        shell.run()

        assert "Field: Name Value: Acme" in output.getvalue()

    def test_brackets_are_printed_literally(self, output):
        shell = _shell(_lines('Name=["a","b"]'), output)

        shell.run()

        assert 'Field: Name Value: ["a","b"]' in output.getvalue()
