"""Module: cli.py

Date: 2026-10-19

Command line access to a form's submissions table layout.

Usage:
    python -m formgrid columns form.json
    python -m formgrid toggle-visibility form.json email
    python -m formgrid move form.json email 0
    python -m formgrid resize form.json email 320
    python -m formgrid reset form.json [--column email]
"""

import argparse
import json
import sys
from collections.abc import Callable
from typing import TextIO

from formgrid.config import APP_NAME, APP_VERSION
from formgrid.core.column_preferences import ColumnPreferenceStore
from formgrid.core.pyqt_imports import QCoreApplication
from formgrid.core.table_state import TableStateManager
from formgrid.models.form_definition import FormDefinition
from formgrid.utils.logging.init_logging import init_logging
from formgrid.utils.logging.logger_factory import get_cached_logger
from formgrid.utils.paths import AppPaths
from formgrid.utils.shared.json_config_manager import create_app_config_manager

logger = get_cached_logger(__name__)

EXIT_OK = 0
EXIT_BAD_FORM = 2


class FormFileError(Exception):
    """The form file could not be read or is not a form definition."""


def load_form(path: str) -> FormDefinition:
    """Read a form resource from a JSON file.

    Raises:
        FormFileError: if the file is missing, not JSON, or has no table key
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        form = FormDefinition.from_dict(data)
    except (OSError, ValueError, TypeError) as e:
        raise FormFileError(f"Cannot read form from {path}: {e}") from e

    if not form.table_key:
        raise FormFileError(f"Form in {path} has neither an id nor a slug")
    return form


def print_columns(state: TableStateManager, out: TextIO) -> None:
    """Write the table columns with their resolved preferences."""
    visibility = state.column_visibility
    wrapping = state.column_wrapping
    sizing = state.column_sizing
    pinning = state.column_pinning

    header = f"{'#':>3}  {'id':<24} {'header':<24} {'type':<12} {'visible':<8} {'pin':<6} {'wrap':<5} {'width':>5}"
    print(header, file=out)
    print("-" * len(header), file=out)
    for index, column in enumerate(state.table_columns):
        if column.id in pinning["right"]:
            pin = "right"
        elif column.id in pinning["left"]:
            pin = "left"
        else:
            pin = ""
        visible = "yes" if visibility.get(column.id, True) else "no"
        wrap = "yes" if wrapping.get(column.id, False) else "no"
        removed = " (removed)" if column.removed else ""
        print(
            f"{index:>3}  {column.id:<24} {(column.header + removed):<24} {column.type:<12} "
            f"{visible:<8} {pin:<6} {wrap:<5} {sizing.get(column.id, 0):>5}",
            file=out,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Inspect and customise the submissions table layout of a form.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    parser.add_argument("--config-dir", help="Directory holding config.json (default: user data dir)")
    parser.add_argument("--with-actions", action="store_true", help="Include the row actions column")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show informational log output")

    commands = parser.add_subparsers(dest="command", required=True)

    columns = commands.add_parser("columns", help="List the table columns")
    columns.add_argument("form", help="Path to the form JSON resource")

    for name, help_text in (
        ("toggle-visibility", "Show or hide a column"),
        ("toggle-wrap", "Toggle text wrapping of a column"),
        ("toggle-pin", "Pin a column to the left edge, or unpin it"),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("form", help="Path to the form JSON resource")
        sub.add_argument("column", help="Column id")

    move = commands.add_parser("move", help="Move a column among the visible columns")
    move.add_argument("form", help="Path to the form JSON resource")
    move.add_argument("column", help="Column id")
    move.add_argument("index", type=int, help="New position among visible columns")

    resize = commands.add_parser("resize", help="Set the width of a column")
    resize.add_argument("form", help="Path to the form JSON resource")
    resize.add_argument("column", help="Column id")
    resize.add_argument("width", type=int, help="Width in pixels (clamped to 80-700)")

    reset = commands.add_parser("reset", help="Forget stored preferences")
    reset.add_argument("form", help="Path to the form JSON resource")
    reset.add_argument("--column", help="Only reset this column")

    return parser


def _run_command(args: argparse.Namespace, state: TableStateManager) -> None:
    actions: dict[str, Callable[[], None]] = {
        "columns": lambda: None,
        "toggle-visibility": lambda: state.toggle_column_visibility(args.column),
        "toggle-wrap": lambda: state.toggle_column_wrapping(args.column),
        "toggle-pin": lambda: state.toggle_column_pin(args.column),
        "move": lambda: state.set_column_order(args.column, args.index),
        "resize": lambda: state.handle_column_resize(args.column, args.width),
        "reset": lambda: (
            state.reset_column(args.column) if args.column else state.reset_preferences()
        ),
    }
    actions[args.command]()
    state.flush_pending_sizing()


def main(argv: list[str] | None = None, out: TextIO | None = None) -> int:
    """Run the command line tool.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    out = out or sys.stdout

    if args.config_dir:
        AppPaths.set_user_data_dir(args.config_dir)
    init_logging(APP_NAME, verbose=args.verbose)

    app = QCoreApplication.instance() or QCoreApplication([APP_NAME])  # noqa: F841

    try:
        form = load_form(args.form)
    except FormFileError as e:
        logger.error("[CLI] %s", e)
        print(e, file=sys.stderr)
        return EXIT_BAD_FORM

    config_manager = create_app_config_manager(config_dir=args.config_dir)
    store = ColumnPreferenceStore(form.table_key, config_manager)
    state = TableStateManager(form, store, with_actions=args.with_actions)

    try:
        _run_command(args, state)
        print_columns(state, out)
    finally:
        state.dispose()
        store.dispose()

    return EXIT_OK
