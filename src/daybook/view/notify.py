# SPDX-License-Identifier: MIT

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from daybook.color import ERROR_COLOR, SUCCESS_COLOR

console = Console()
error_console = Console(stderr=True)


def _toast(target: Console, title: str, description: str, color: str) -> None:
    target.print(
        Panel(
            Text(description),
            title=f"[bold {color}]{title}[/bold {color}]",
            title_align="left",
            border_style=color,
            expand=False,
        )
    )


def notify_success(title: str, description: str) -> None:
    _toast(console, title, description, SUCCESS_COLOR)


def notify_error(title: str, description: str) -> None:
    _toast(error_console, title, description, ERROR_COLOR)
