# SPDX-License-Identifier: MIT

import os
import re
import subprocess
import tempfile
from typing import Optional

import pendulum
import typer

from daybook.time import date_from_iso_str


def parse_month(month_str: str) -> tuple[int, int]:
    """
    Parse a YYYY-MM (or YYYY-M) string into (year, month).

    Raises:
        typer.BadParameter: If the format is wrong or the month is out of range
    """
    month_match = re.match(r"^(\d{4})-(\d{1,2})$", month_str.strip())
    if not month_match:
        raise typer.BadParameter(f"Month must be in YYYY-MM format, got '{month_str}'")

    year = int(month_match.group(1))
    month = int(month_match.group(2))
    if month < 1 or month > 12:
        raise typer.BadParameter(f"Month must be between 1 and 12, got {month}")
    return (year, month)


def parse_date(date_str: Optional[str]) -> Optional[pendulum.Date]:
    if date_str is None:
        return None

    date = date_from_iso_str(date_str.strip())
    if date is None:
        raise typer.BadParameter(f"Date must be in YYYY-MM-DD format, got '{date_str}'")
    return date


def open_editor_for_text(initial_text: Optional[str] = None) -> Optional[str]:
    """
    Open the user's preferred editor on some text.
    Returns the edited text with trailing newlines removed, or None if empty.
    """
    # Get the editor from environment, default to nano
    editor = os.environ.get("EDITOR", "nano")

    with tempfile.NamedTemporaryFile(mode="w+", suffix=".yaml") as tf:
        if initial_text is not None:
            tf.write(initial_text)
            tf.flush()

        subprocess.run([editor, tf.name], check=True)
        tf.seek(0)
        text = tf.read()
        if not text.strip():
            return None
        return text.rstrip("\n")
