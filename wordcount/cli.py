"""Command-line interface for advanced_word_count.

Usage:
    advanced-word-count count NOTE.md [--preset ID] [--json]
    advanced-word-count presets
    advanced-word-count add [NAME]
    advanced-word-count remove ID
    advanced-word-count activate ID
    advanced-word-count cycle
    advanced-word-count set ID OPTION VALUE
    advanced-word-count watch NOTE.md [--interval SECONDS]
"""

import argparse
import json
import sys
from pathlib import Path

from .config import PresetValidationError, UnknownPresetError, get_config
from .locales import resolve_locale
from .manager import get_preset_manager
from .preset import INCLUSION_FLAGS, VISIBILITY_FLAGS
from .state import get_state
from .status import render_status


SETTABLE_OPTIONS = ["name", "words_per_page"] + VISIBILITY_FLAGS + INCLUSION_FLAGS


def describe_options(locale: dict | None = None) -> str:
    """One "option: label - hint" line per settable option."""
    locale = locale or resolve_locale()
    lines = ["settable options:"]
    for option in SETTABLE_OPTIONS:
        label, hint = locale["options"][option]
        lines.append(f"  {option}: {label} - {hint}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="advanced-word-count",
        description="Word, character, page and link metrics for Markdown notes.",
    )
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument("--state", type=Path, help="Path to state.json")

    sub = parser.add_subparsers(dest="command", required=True)

    count = sub.add_parser("count", help="Print metrics for one or more documents")
    count.add_argument("paths", nargs="+", type=Path)
    count.add_argument("--preset", help="Preset id (defaults to the active preset)")
    count.add_argument("--json", action="store_true", help="Print all metrics as JSON")

    sub.add_parser("presets", help="List presets and their commands")

    add = sub.add_parser("add", help="Add a preset with default settings")
    add.add_argument("name", nargs="?")

    remove = sub.add_parser("remove", help="Delete a preset")
    remove.add_argument("preset_id")

    activate = sub.add_parser("activate", help="Make a preset active")
    activate.add_argument("preset_id")

    sub.add_parser("cycle", help="Activate the next preset")

    set_cmd = sub.add_parser(
        "set",
        help="Change one preset option",
        epilog=describe_options(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    set_cmd.add_argument("preset_id")
    set_cmd.add_argument("option", choices=SETTABLE_OPTIONS, metavar="option")
    set_cmd.add_argument("value")

    watch = sub.add_parser("watch", help="Re-render the status line when a note changes")
    watch.add_argument("path", type=Path)
    watch.add_argument("--interval", type=float)

    return parser


def _cmd_count(manager, args) -> int:
    preset = manager.config.get_preset(args.preset) if args.preset else manager.get_active_preset()
    results = {}
    for path in args.paths:
        text = path.read_text(encoding="utf-8")
        metrics = manager.compute(text, preset.id)
        if args.json:
            results[str(path)] = metrics.as_dict()
        else:
            line = render_status(preset, metrics, len(manager.presets), manager.locale)
            prefix = f"{path}: " if len(args.paths) > 1 else ""
            print(prefix + line)

    if args.json:
        print(json.dumps(results, indent=2))
    return 0


def _cmd_presets(manager, args) -> int:
    active = manager.get_active_preset()
    for preset in manager.presets:
        marker = "*" if active and preset.id == active.id else " "
        print(f"{marker} {preset.id}  {preset.name}  ({preset.words_per_page} words/page)")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "watch":
        from .daemon import run_daemon

        run_daemon(args.path, args.config, args.state, args.interval)
        return 0

    try:
        manager = get_preset_manager(get_config(args.config), get_state(args.state))

        if args.command == "count":
            return _cmd_count(manager, args)
        if args.command == "presets":
            return _cmd_presets(manager, args)
        if args.command == "add":
            preset = manager.add_preset(args.name)
            print(f"Added preset {preset.name!r} ({preset.id})")
        elif args.command == "remove":
            preset = manager.remove_preset(args.preset_id)
            print(f"Removed preset {preset.name!r}")
        elif args.command == "activate":
            preset = manager.activate_preset(args.preset_id)
            print(f"Active preset: {preset.name}")
        elif args.command == "cycle":
            preset = manager.cycle_preset()
            print(f"Active preset: {preset.name}")
        elif args.command == "set":
            preset = manager.set_option(args.preset_id, args.option, args.value)
            print(f"{preset.name}: {args.option} = {getattr(preset, args.option)}")
        return 0

    except (PresetValidationError, UnknownPresetError, OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
