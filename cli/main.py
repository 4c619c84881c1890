#!/usr/bin/env python3
"""
Celebrations site CLI

Small operational commands around the web app and its collection files.

1) serve
   - Run the web app with uvicorn (same as `uvicorn runtime.api.server:app`).

2) init
   - Create any missing collection files as empty JSON arrays:
       data/contact1.json, data/data.json, data/dashboard.json

3) list
   - Print a collection as JSON, optionally filtered the same way as
     GET /events, e.g.:
       site-cli list event --filter eventPurpose=wedding
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

# Ensure project root is on sys.path when running as a script
ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from configs.settings import Settings, settings
from exceptions.exceptions import SiteError
from runtime.models.record_models import Collection
from runtime.store.record_store import RecordStore, filter_exact


def _store_for(collection: Collection, cfg: Settings) -> RecordStore:
    paths = {
        Collection.CONTACT: cfg.contact_file,
        Collection.EVENT: cfg.event_file,
        Collection.DASHBOARD: cfg.dashboard_file,
    }
    return RecordStore(paths[collection], name=collection.value)


def _parse_filters(pairs: List[str]) -> Dict[str, str]:
    """Turn ["field=value", ...] into a criteria mapping."""
    criteria: Dict[str, str] = {}
    for pair in pairs:
        field, sep, value = pair.partition("=")
        if not sep or not field:
            raise ValueError(f"Invalid filter {pair!r}, expected field=value")
        criteria[field] = value
    return criteria


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_serve(host: str, port: int, reload: bool) -> None:
    import uvicorn

    print(f"[site] Server running on http://{host}:{port}")
    uvicorn.run("runtime.api.server:app", host=host, port=port, reload=reload)


def cmd_init(cfg: Settings) -> None:
    for collection in Collection:
        store = _store_for(collection, cfg)
        if store.ensure_exists():
            print(f"[site] Created {collection.value} collection: {store.path}")
        else:
            print(f"[site] {collection.value} collection exists: {store.path}")


def cmd_list(collection: Collection, filters: List[str], cfg: Settings) -> None:
    store = _store_for(collection, cfg)
    records = filter_exact(store.load(), _parse_filters(filters))
    print(json.dumps(records, indent=2, ensure_ascii=False))


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Celebrations site CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = subparsers.add_parser("serve", help="Run the web app")
    p_serve.add_argument(
        "--host", default=settings.host, help="Bind address (default: SITE_HOST or 0.0.0.0)"
    )
    p_serve.add_argument(
        "--port", type=int, default=settings.port, help="Port (default: SITE_PORT or 3000)"
    )
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    # init
    subparsers.add_parser("init", help="Create missing collection files")

    # list
    p_list = subparsers.add_parser("list", help="Print a collection as JSON")
    p_list.add_argument(
        "collection",
        choices=[c.value for c in Collection],
        help="Collection name",
    )
    p_list.add_argument(
        "--filter",
        action="append",
        default=[],
        metavar="FIELD=VALUE",
        help="Case-insensitive exact match; repeat to combine",
    )

    return parser


def main(argv: Optional[List[str]] = None, cfg: Optional[Settings] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = cfg or settings

    command: str = args.command

    try:
        if command == "serve":
            cmd_serve(host=args.host, port=args.port, reload=args.reload)
        elif command == "init":
            cmd_init(cfg)
        elif command == "list":
            cmd_list(Collection(args.collection), args.filter, cfg)
        else:
            parser.error(f"Unknown command: {command}")
    except SiteError as e:
        print(f"[site] {e.message}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"[site] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
