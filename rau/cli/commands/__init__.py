"""
CLI Commands.

Helper commands grouped under `rau-tools`.
"""

from rau.cli.commands.completion import app as completion_app

__all__ = [
    "completion_app",
]
