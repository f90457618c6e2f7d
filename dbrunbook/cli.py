"""Command line entry point."""

import argparse
import sys

import mysql.connector

from dbrunbook import __version__
from dbrunbook.bench import compare_import_methods, time_queries
from dbrunbook.config import DEFAULT_DUMMY_ROWS, DEFAULT_SEED, DEFAULT_TABLE, INSERT_BATCH_SIZE, get_mysql_config
from dbrunbook.db import get_connection
from dbrunbook.dummy_data import add_dummy_data, generate_seed_csv
from dbrunbook.dump import DumpError, dump_database, restore_dump
from dbrunbook.loader import export_query, export_table, insert_csv, load_csv
from dbrunbook.schema import ensure_table

KNOWN_ERRORS = (ValueError, FileNotFoundError, DumpError, mysql.connector.Error)


def _add_connection_args(parser):
    group = parser.add_argument_group("connection (defaults from MYSQL_* env vars)")
    group.add_argument("--host")
    group.add_argument("--port", type=int)
    group.add_argument("--user")
    group.add_argument("--password")
    group.add_argument("--database")


def _config_from_args(args) -> dict:
    return get_mysql_config(host=args.host, port=args.port, user=args.user,
                            password=args.password, database=args.database)


# ======================================================
# COMMANDS
# ======================================================
def cmd_seed(args):
    generate_seed_csv(args.output, args.rows, seed=args.seed)


def cmd_add_dummy(args):
    add_dummy_data(args.input, args.output, args.rows, seed=args.seed)


def cmd_load(args):
    conn = get_connection(_config_from_args(args))
    try:
        if args.create_table:
            ensure_table(conn, args.table, drop=args.drop)
        if args.method == 'insert':
            insert_csv(conn, args.csv, args.table, batch_size=args.batch_size)
        else:
            load_csv(conn, args.csv, args.table, local=not args.server_side)
    finally:
        conn.close()


def cmd_export(args):
    conn = get_connection(_config_from_args(args))
    try:
        if args.query:
            export_query(conn, args.query, args.output)
        else:
            export_table(conn, args.table, args.output)
    finally:
        conn.close()


def cmd_dump(args):
    config = _config_from_args(args)
    dump_database(config, config['database'], args.output, tables=args.tables,
                  no_data=args.no_data)


def cmd_restore(args):
    config = _config_from_args(args)
    restore_dump(config, config['database'], args.input)


def cmd_bench(args):
    conn = get_connection(_config_from_args(args))
    try:
        if args.csv:
            results = compare_import_methods(conn, args.csv, args.table)
        else:
            cursor = conn.cursor()
            try:
                results = time_queries(cursor, args.query, repeat=args.repeat)
            finally:
                cursor.close()
    finally:
        conn.close()
    print(results.to_string(index=False))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dbrunbook", description="MySQL sandbox toolkit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("seed", help="Write a random mock CSV")
    p.add_argument("output")
    p.add_argument("--rows", type=int, default=DEFAULT_DUMMY_ROWS)
    p.add_argument("--seed", type=int, default=DEFAULT_SEED)
    p.set_defaults(func=cmd_seed)

    p = sub.add_parser("add-dummy", help="Append resampled rows to a mock CSV")
    p.add_argument("input")
    p.add_argument("output")
    p.add_argument("--rows", type=int, default=DEFAULT_DUMMY_ROWS)
    p.add_argument("--seed", type=int, default=DEFAULT_SEED)
    p.set_defaults(func=cmd_add_dummy)

    p = sub.add_parser("load", help="Import a CSV into a table")
    p.add_argument("csv")
    p.add_argument("--table", default=DEFAULT_TABLE)
    p.add_argument("--method", choices=["load-data", "insert"], default="load-data")
    p.add_argument("--server-side", action="store_true",
                   help="LOAD DATA INFILE from the server's filesystem")
    p.add_argument("--batch-size", type=int, default=INSERT_BATCH_SIZE)
    p.add_argument("--create-table", action="store_true")
    p.add_argument("--drop", action="store_true", help="Drop the table before creating it")
    _add_connection_args(p)
    p.set_defaults(func=cmd_load)

    p = sub.add_parser("export", help="Export a table or query to CSV")
    p.add_argument("output")
    p.add_argument("--table", default=DEFAULT_TABLE)
    p.add_argument("--query")
    _add_connection_args(p)
    p.set_defaults(func=cmd_export)

    p = sub.add_parser("dump", help="Run mysqldump")
    p.add_argument("output")
    p.add_argument("--tables", nargs="*")
    p.add_argument("--no-data", action="store_true")
    _add_connection_args(p)
    p.set_defaults(func=cmd_dump)

    p = sub.add_parser("restore", help="Replay a dump with the mysql client")
    p.add_argument("input")
    _add_connection_args(p)
    p.set_defaults(func=cmd_restore)

    p = sub.add_parser("bench", help="Time queries, or compare import methods on a CSV")
    p.add_argument("--query", action="append", default=[])
    p.add_argument("--repeat", type=int, default=3)
    p.add_argument("--csv")
    p.add_argument("--table", default=DEFAULT_TABLE)
    _add_connection_args(p)
    p.set_defaults(func=cmd_bench)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "bench" and not args.csv and not args.query:
        parser.error("bench needs --csv or at least one --query")
    if args.command == "bench" and args.csv and args.query:
        parser.error("bench takes either --csv or --query, not both")
    if args.command == "load" and args.method == "insert" and args.server_side:
        parser.error("--server-side only applies to --method load-data")

    try:
        args.func(args)
    except KNOWN_ERRORS as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
