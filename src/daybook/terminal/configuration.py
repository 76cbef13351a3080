# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from daybook import configuration
from daybook.configuration import Configuration
from daybook.repository.configuration import CONFIGURATION_REPO
from daybook.terminal.completion import complete_event_type
from daybook.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _configuration_table(config: Configuration, title: Optional[str] = None) -> Table:
    table = Table(title=title, show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("data_path", escape(str(configuration.DATA_PATH)))
    table.add_row(
        "export_path", escape(config["export_path"] or "None (current directory)")
    )
    table.add_row("default_event_type", config["default_event_type"])
    table.add_row("log_level", config["log_level"])
    return table


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print(_configuration_table(config))
    console.print()
    console.print(f"Config file: {escape(str(configuration.APP_CONFIG_PATH))}")


@app.command("set, s")
def set(
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Show/hide the header above views",
        ),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory for data files (default: platform data directory)",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the platform data directory",
        ),
    ] = False,
    export_path: Annotated[
        Optional[str],
        typer.Option("--export-path", help="Default directory for exports"),
    ] = None,
    remove_export_path: Annotated[
        bool,
        typer.Option(
            "--remove-export-path", help="Export to the current directory again"
        ),
    ] = False,
    default_event_type: Annotated[
        Optional[str],
        typer.Option(
            "--default-event-type",
            help="Type for new events when --type is omitted",
            autocompletion=complete_event_type,
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL"),
    ] = None,
) -> None:
    """
    Update configuration settings.
    """
    try:
        CONFIGURATION_REPO.update_config(
            show_header=show_header,
            data_path=data_path,
            remove_data_path=remove_data_path,
            export_path=export_path,
            remove_export_path=remove_export_path,
            default_event_type=default_event_type,
            log_level=log_level,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e))

    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(_configuration_table(config, title="Updated Configuration"))
