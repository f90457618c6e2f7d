"""
mysqldump / mysql wrappers
==========================
Runs the stock client binaries. The password travels through MYSQL_PWD in the
child environment, never on the command line.
"""

import os
import subprocess
import time
from dataclasses import dataclass


class DumpError(Exception):
    """A dump or restore command could not run or exited non-zero."""


@dataclass
class DumpResult:
    path: str
    seconds: float
    size_mb: float


def _connection_args(config) -> list:
    return [
        f"--host={config['host']}",
        f"--port={config['port']}",
        f"--user={config['user']}",
    ]


def command_env(config) -> dict:
    env = dict(os.environ)
    if config.get('password'):
        env['MYSQL_PWD'] = config['password']
    return env


def build_dump_command(config, database: str, tables=None, no_data: bool = False,
                       single_transaction: bool = True) -> list:
    cmd = ["mysqldump"] + _connection_args(config)
    if single_transaction:
        cmd.append("--single-transaction")
    if no_data:
        cmd.append("--no-data")
    cmd += ["--routines", "--triggers", database]
    if tables:
        cmd += list(tables)
    return cmd


def build_restore_command(config, database: str) -> list:
    return ["mysql"] + _connection_args(config) + [database]


def _run(cmd, env, stdin=None, stdout=None):
    try:
        result = subprocess.run(cmd, stdin=stdin, stdout=stdout, stderr=subprocess.PIPE,
                                env=env, text=True)
    except FileNotFoundError:
        raise DumpError(f"{cmd[0]} not found on PATH")
    if result.returncode != 0:
        raise DumpError(f"{cmd[0]} exited with {result.returncode}: {result.stderr.strip()}")
    return result


def dump_database(config, database: str, output_path, tables=None,
                  no_data: bool = False) -> DumpResult:
    """Dump a database (or some of its tables) into a .sql file."""
    output_path = str(output_path)
    cmd = build_dump_command(config, database, tables=tables, no_data=no_data)
    print(f"[*] Creating dump: {output_path}")

    start = time.time()
    try:
        with open(output_path, "w") as out:
            _run(cmd, command_env(config), stdout=out)
    except DumpError:
        if os.path.exists(output_path):
            os.remove(output_path)
        raise
    seconds = round(time.time() - start, 2)

    size_mb = round(os.path.getsize(output_path) / 1024 / 1024, 2)
    print(f"[OK] Dump completed in {seconds}s, size: {size_mb} MB")
    return DumpResult(path=output_path, seconds=seconds, size_mb=size_mb)


def restore_dump(config, database: str, dump_path) -> float:
    """Replay a .sql dump into a database. Returns elapsed seconds."""
    dump_path = str(dump_path)
    if not os.path.exists(dump_path):
        raise FileNotFoundError(dump_path)

    print(f"[*] Restoring {dump_path} into {database}...")
    start = time.time()
    with open(dump_path, "r") as dump_file:
        _run(build_restore_command(config, database), command_env(config), stdin=dump_file)
    seconds = round(time.time() - start, 2)

    print(f"[OK] Restore completed in {seconds}s")
    return seconds
