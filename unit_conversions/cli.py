#!/usr/bin/env python3
"""
Unit conversions store (SQLite)

Commands:
  init      Create the conversions_time table
  list      Print every stored conversion
  show      Print the conversion for a source/destination pair
  add       Insert a new conversion
  update    Replace the conversion for a source/destination pair
  delete    Remove the conversion for a source/destination pair

Timestamps are ISO-8601, e.g. 2024-01-01T00:00:00.
"""

import argparse
import asyncio
import json
import logging
import sqlite3
import sys
from datetime import datetime

from .db import open_query_connection
from .repository import ConversionTime


def _parse_bool(value: str) -> bool:
    v = value.strip().lower()
    if v in ("1", "true", "yes", "y"):
        return True
    if v in ("0", "false", "no", "n"):
        return False
    raise argparse.ArgumentTypeError(f"not a boolean: {value}")


def _record_from_args(args) -> ConversionTime:
    return ConversionTime(
        source_id=args.source,
        destination_id=args.destination,
        bidirectional=args.bidirectional,
        start_time=args.start_time,
        end_time=args.end_time,
        slope=args.slope,
        intercept=args.intercept,
        note=args.note,
    )


def _print_record(c: ConversionTime):
    print(json.dumps(c.model_dump(mode="json"), ensure_ascii=False))


async def cmd_init(args):
    with open_query_connection(args.db) as conn:
        await ConversionTime.create_table(conn)
    print("conversions_time table ready.")
    return 0


async def cmd_list(args):
    with open_query_connection(args.db) as conn:
        items = await ConversionTime.get_all(conn)
    if not items:
        print("(empty)")
    for c in items:
        _print_record(c)
    return 0


async def cmd_show(args):
    with open_query_connection(args.db) as conn:
        c = await ConversionTime.get_by_source_destination(args.source, args.destination, conn)
    if c is None:
        print(f"conversion {args.source}->{args.destination} not found", file=sys.stderr)
        return 1
    _print_record(c)
    return 0


async def cmd_add(args):
    c = _record_from_args(args)
    with open_query_connection(args.db) as conn:
        try:
            await c.insert(conn)
        except sqlite3.IntegrityError as e:
            print(f"conversion {c.source_id}->{c.destination_id} not added: {e}", file=sys.stderr)
            return 1
    print("Conversion added.")
    return 0


async def cmd_update(args):
    c = _record_from_args(args)
    with open_query_connection(args.db) as conn:
        if await ConversionTime.get_by_source_destination(c.source_id, c.destination_id, conn) is None:
            print(f"conversion {c.source_id}->{c.destination_id} not found", file=sys.stderr)
            return 1
        await c.update(conn)
    print("Conversion updated.")
    return 0


async def cmd_delete(args):
    with open_query_connection(args.db) as conn:
        if await ConversionTime.get_by_source_destination(args.source, args.destination, conn) is None:
            print(f"conversion {args.source}->{args.destination} not found", file=sys.stderr)
            return 1
        await ConversionTime.delete(args.source, args.destination, conn)
    print("Conversion deleted.")
    return 0


def _add_pair_args(p):
    p.add_argument("--source", required=True, type=int, help="source unit id")
    p.add_argument("--destination", required=True, type=int, help="destination unit id")


def _add_record_args(p):
    _add_pair_args(p)
    p.add_argument("--bidirectional", required=True, type=_parse_bool)
    p.add_argument("--start-time", required=True, type=datetime.fromisoformat)
    p.add_argument("--end-time", required=True, type=datetime.fromisoformat)
    p.add_argument("--slope", required=True, type=float)
    p.add_argument("--intercept", required=True, type=float)
    p.add_argument("--note", required=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Unit conversions store (SQLite)")
    parser.add_argument("--db", default=None, help="database path (default: config/env)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="create the conversions table")
    p_init.set_defaults(func=cmd_init)

    p_list = sub.add_parser("list", help="list all conversions")
    p_list.set_defaults(func=cmd_list)

    p_show = sub.add_parser("show", help="show one conversion")
    _add_pair_args(p_show)
    p_show.set_defaults(func=cmd_show)

    p_add = sub.add_parser("add", help="add a conversion")
    _add_record_args(p_add)
    p_add.set_defaults(func=cmd_add)

    p_upd = sub.add_parser("update", help="replace a conversion")
    _add_record_args(p_upd)
    p_upd.set_defaults(func=cmd_update)

    p_del = sub.add_parser("delete", help="delete a conversion")
    _add_pair_args(p_del)
    p_del.set_defaults(func=cmd_delete)
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    return asyncio.run(args.func(args))


if __name__ == "__main__":
    sys.exit(main())
