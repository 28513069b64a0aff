from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import load_config
from .errors import ConfigError, CorruptSaveError, SaveError
from .logging_config import configure_logging
from .store import FileStore, LoadStatus

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_CORRUPT = 2


def _build_store(args: argparse.Namespace) -> FileStore:
    config = load_config(args.config)
    root = Path(args.root) if args.root else None
    return FileStore(root_dir=root, config=config)


def _cmd_list(args: argparse.Namespace) -> int:
    store = _build_store(args)
    for profile_id in store.list_profiles():
        print(profile_id)
    return EXIT_OK


def _cmd_show(args: argparse.Namespace) -> int:
    store = _build_store(args)
    result = store.load(args.profile)
    if result.document is None:
        print(f"No save for profile '{args.profile}'", file=sys.stderr)
        return EXIT_NOT_FOUND
    data = result.document.to_dict()
    data["completion_percentage"] = result.document.completion_percentage(args.total)
    print(json.dumps(data, indent=2, sort_keys=True))
    return EXIT_OK


def _cmd_decode(args: argparse.Namespace) -> int:
    store = _build_store(args)
    raw = store.read_bytes(Path(args.file))
    sys.stdout.buffer.write(raw)
    sys.stdout.flush()
    return EXIT_OK


def _cmd_check(args: argparse.Namespace) -> int:
    store = _build_store(args)
    try:
        result = store.load(args.profile)
    except CorruptSaveError as e:
        print(f"CORRUPT: {args.profile}: {e}")
        return EXIT_CORRUPT
    print(f"{result.status.value}: {args.profile}")
    if result.status is LoadStatus.NOT_FOUND:
        return EXIT_NOT_FOUND
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="savekeep", description="Inspect savekeep profiles and save files")
    p.add_argument("--root", help="Save root directory (default: platform user data dir)", default=None)
    p.add_argument("--config", help="Path to a YAML persistence config", default=None)
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    ls = sub.add_parser("list", help="List profiles that have a save")
    ls.set_defaults(func=_cmd_list)

    show = sub.add_parser("show", help="Print a profile's document as JSON")
    show.add_argument("profile")
    show.add_argument("--total", type=int, default=None, help="Total collectibles for completion percentage")
    show.set_defaults(func=_cmd_show)

    dec = sub.add_parser("decode", help="Undo obfuscation of a raw save file and write it to stdout")
    dec.add_argument("file")
    dec.set_defaults(func=_cmd_decode)

    chk = sub.add_parser("check", help="Load a profile and report OK / RECOVERED / NOT_FOUND / CORRUPT")
    chk.add_argument("profile")
    chk.set_defaults(func=_cmd_check)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.debug else logging.WARNING)
    try:
        return args.func(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CORRUPT
    except SaveError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_CORRUPT


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
