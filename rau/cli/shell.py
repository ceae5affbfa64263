"""
Interactive Shell Mode.

A line-at-a-time prompt for entering `key=value` pairs against a table's
cached field names. Each line is checked on its own; Ctrl-C or Ctrl-D
ends the session.
"""

from collections.abc import Callable, Iterable

from rich.console import Console
from rich.panel import Panel

from rau.core.logging import get_logger

console = Console()
logger = get_logger(__name__)

PROMPT = ">> "


class InteractiveShell:
    """
    Validates `key=value` lines against a set of field names.

    Usage:
        shell = InteractiveShell(["Name", "Status"])
        shell.run()
    """

    def __init__(
        self,
        field_names: Iterable[str],
        read_line: Callable[[str], str] | None = None,
        out: Console | None = None,
    ) -> None:
        """
        Args:
            field_names: Known field names of the table
            read_line: Line source taking a prompt; defaults to the console
            out: Console to print to
        """
        self.field_names = frozenset(field_names)
        self.console = out or console
        self.read_line = read_line or self.console.input
        self.running = False

    def check(self, line: str) -> str:
        """Return the reply for one input line."""
        parts = line.split("=")
        if len(parts) != 2:
            return "Invalid input. Use format key=value"
        key, value = parts
        if key in self.field_names:
            return f"Field: {key} Value: {value}"
        return f"Unknown field: {key}"

    def run(self) -> None:
        """Read lines until end of input or interrupt."""
        self.running = True

        self.console.print(Panel(
            f"[bold]{len(self.field_names)}[/bold] known fields.\n"
            "Enter [cyan]key=value[/cyan] lines, Ctrl-D to exit.",
            title="rau shell",
        ))

        while self.running:
            try:
                line = self.read_line(PROMPT)
            except (KeyboardInterrupt, EOFError):
                logger.debug("Shell input closed")
                break

            self.console.print(self.check(line), markup=False, highlight=False)

        self.running = False


def run_shell(field_names: Iterable[str]) -> None:
    """Run the interactive shell on the given field names."""
    InteractiveShell(field_names).run()
