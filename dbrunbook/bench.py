"""Query and import timing."""

import time

import pandas as pd

from dbrunbook.db import fetch_all_results, quote_identifier
from dbrunbook.loader import insert_csv, load_csv


def time_queries(cursor, queries, repeat: int = 3) -> pd.DataFrame:
    """Run each query `repeat` times and summarise wall-clock timings."""
    if repeat < 1:
        raise ValueError(f"repeat must be >= 1, got {repeat}")

    rows = []
    for query in queries:
        timings = []
        error = None
        for _ in range(repeat):
            try:
                start = time.perf_counter()
                cursor.execute(query)
                fetch_all_results(cursor)
                timings.append(time.perf_counter() - start)
            except Exception as e:
                error = str(e)
                print(f"[ERROR] Query failed: {e}")
                break

        rows.append({
            'query': query,
            'runs': len(timings),
            'mean_s': sum(timings) / len(timings) if timings else None,
            'min_s': min(timings) if timings else None,
            'max_s': max(timings) if timings else None,
            'error': error,
        })

    return pd.DataFrame(rows, columns=['query', 'runs', 'mean_s', 'min_s', 'max_s', 'error'])


def _truncate(conn, table):
    cursor = conn.cursor()
    try:
        cursor.execute(f"TRUNCATE TABLE {quote_identifier(table)}")
        conn.commit()
    finally:
        cursor.close()


def compare_import_methods(conn, path, table: str) -> pd.DataFrame:
    """Time LOAD DATA LOCAL INFILE against batched INSERTs on the same file."""
    methods = [
        ('load_data', lambda: load_csv(conn, path, table, local=True)),
        ('insert', lambda: insert_csv(conn, path, table)),
    ]

    rows = []
    for name, run in methods:
        _truncate(conn, table)
        start = time.perf_counter()
        loaded = run()
        rows.append({
            'method': name,
            'rows': loaded,
            'seconds': round(time.perf_counter() - start, 4),
        })

    return pd.DataFrame(rows)
