# SPDX-License-Identifier: MIT

from typing import Annotated, Any

import click
import typer

from daybook.logger import configure_logging
from daybook.repository.configuration import CONFIGURATION_REPO
from daybook.repository.event import EventDataError
from daybook.terminal import calendar, configuration, event
from daybook.terminal.custom_typer import OrderedAliasedTyperGroup
from daybook.view import state as view_state
from daybook.view.notify import notify_error


class DaybookTyperGroup(OrderedAliasedTyperGroup):
    """Reports an unreadable events file as an error toast instead of a traceback"""

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except EventDataError as e:
            notify_error(
                "Events file unreadable",
                f"{e.location}: {e.reason}. Fix or move the file and try again.",
            )
            raise typer.Exit(1)


app = typer.Typer(
    cls=DaybookTyperGroup,
    help="daybook - a month calendar for your events in the CLI",
    no_args_is_help=True,
)
app.command(name="show, s")(calendar.show)
app.command(name="next, n")(calendar.next_month)
app.command(name="prev, p")(calendar.prev_month)
app.command(name="today, t")(calendar.today)
app.command(name="goto, g", no_args_is_help=True)(calendar.goto)
app.command(name="select, sel", no_args_is_help=True)(calendar.select)
app.command(name="day, d", no_args_is_help=True)(calendar.day)
app.command(name="close, cl")(calendar.close)
app.add_typer(event.app, name="event, e", help="Add, edit, delete, search and export events")
app.add_typer(configuration.app, name="config, c", help="View and change settings")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in views",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug output to stderr"),
    ] = False,
) -> None:
    """
    daybook - a month calendar for your events in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)
    if verbose:
        configure_logging(CONFIGURATION_REPO.get_config()["log_level"], verbose=True)


def run() -> None:
    app()
