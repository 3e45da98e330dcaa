"""Command line helper for inspecting presets and month grids.

Examples::

    python -m rangepick presets
    python -m rangepick preset LAST_7_DAYS --today 2026-02-21
    python -m rangepick grid 2026-02 --week-start 1 --start 2026-02-10 --end 2026-02-14
    python -m rangepick check-config
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from collections.abc import Sequence
from datetime import datetime

import orjson
from rich.box import ROUNDED
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rangepick.services.config_validation import validate_settings
from rangepick.services.container import RangeCore
from rangepick.services.grid.types import DecoratedCell, DecoratedGrid
from rangepick.settings import settings

logger = logging.getLogger(__name__)

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$", re.ASCII)
_WEEKDAY_ABBR = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def _configure_logging() -> None:
    logging.basicConfig(
        level=settings.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _write_json(payload: object) -> None:
    sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode())
    sys.stdout.write("\n")


def _parse_month(raw: str) -> datetime:
    match = _MONTH_RE.match(raw.strip())
    if match is None:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {raw!r}")
    year, month = (int(part) for part in match.groups())
    if not 1 <= month <= 12:
        raise argparse.ArgumentTypeError(f"month out of range in {raw!r}")
    return datetime(year, month, 1)


def _parse_day(core: RangeCore, raw: str | None, flag: str) -> datetime | None:
    if raw is None:
        return None
    parsed = core.dates.parse_iso_date(raw)
    if parsed is None:
        raise SystemExit(f"{flag} expects an ISO date (YYYY-MM-DD), got {raw!r}")
    return parsed


def _cell_label(cell: DecoratedCell) -> str:
    if not cell.in_current_month:
        return f"[dim]{cell.day:>2}[/dim]"
    label = f"{cell.day:>2}"
    if cell.is_selected_start:
        label = f"[{label}"
    if cell.is_selected_end:
        label = f"{label}]"
    label = escape(label)
    if cell.is_disabled:
        return f"[strike]{label}[/strike]"
    if cell.is_in_range:
        return f"[reverse]{label}[/reverse]"
    if cell.is_in_hover_range:
        return f"[underline]{label}[/underline]"
    return label


def _grid_table(decorated: DecoratedGrid) -> Table:
    base = decorated.base
    title = f"{base.month_id.year}-{base.month_id.month + 1:02d}"
    table = Table(title=title, box=ROUNDED, show_header=True, padding=(0, 1))
    for offset in range(7):
        table.add_column(_WEEKDAY_ABBR[(base.week_start + offset) % 7], justify="right")
    for week in decorated.weeks:
        table.add_row(*(_cell_label(cell) for cell in week))
    return table


def _cmd_presets(core: RangeCore) -> int:
    _write_json(core.resolver.preset_keys())
    return 0


def _cmd_preset(core: RangeCore, key: str, today: str | None) -> int:
    now = _parse_day(core, today, "--today")
    resolved = core.resolver.resolve(key, now)
    if resolved is None:
        logger.error("Unknown preset %s", key)
        return 1
    _write_json({"key": key.upper(), **resolved.as_dict()})
    return 0


def _cmd_grid(core: RangeCore, args: argparse.Namespace) -> int:
    week_start = (
        args.week_start if args.week_start is not None else core.week_start(args.locale)
    )
    try:
        grid = core.grid_cache.get(args.month, week_start, args.locale)
    except ValueError as exc:
        logger.error("%s", exc)
        return 1
    decorated = core.highlighter_cache.get(
        grid,
        {
            "start": _parse_day(core, args.start, "--start"),
            "end": _parse_day(core, args.end, "--end"),
            "hover_date": _parse_day(core, args.hover, "--hover"),
        },
    )
    Console().print(_grid_table(decorated))
    return 0


def _cmd_check_config() -> int:
    errors = validate_settings(settings)
    if not errors:
        _write_json({"ok": True, "errors": []})
        return 0
    for message in errors:
        logger.error("Configuration error: %s", message)
    _write_json({"ok": False, "errors": errors})
    return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rangepick", description="Inspect date presets and calendar grids"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("presets", help="List registered preset keys")

    preset_parser = subparsers.add_parser("preset", help="Resolve a preset to ISO dates")
    preset_parser.add_argument("key", help="Preset key, e.g. LAST_7_DAYS")
    preset_parser.add_argument("--today", help="Pin 'now' to this ISO date")

    grid_parser = subparsers.add_parser("grid", help="Render a decorated month grid")
    grid_parser.add_argument("month", type=_parse_month, help="Month as YYYY-MM")
    grid_parser.add_argument(
        "--week-start", type=int, default=None, help="0 = Sunday ... 6 = Saturday"
    )
    grid_parser.add_argument("--locale", default=None, help="Locale tag, e.g. en-GB")
    grid_parser.add_argument("--start", help="Selected start date (YYYY-MM-DD)")
    grid_parser.add_argument("--end", help="Selected end date (YYYY-MM-DD)")
    grid_parser.add_argument("--hover", help="Hovered date (YYYY-MM-DD)")

    subparsers.add_parser("check-config", help="Validate the loaded settings")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    _configure_logging()
    args = _build_parser().parse_args(argv)

    if args.command == "check-config":
        return _cmd_check_config()

    core = RangeCore.create()
    if args.command == "presets":
        return _cmd_presets(core)
    if args.command == "preset":
        return _cmd_preset(core, args.key, args.today)
    if args.command == "grid":
        return _cmd_grid(core, args)
    return 2


if __name__ == "__main__":
    sys.exit(main())
