"""
CSV import / export
===================
Import goes through LOAD DATA [LOCAL] INFILE, with a batched INSERT fallback
for servers where local_infile is disabled. Export reads through pandas.
"""

import os
import warnings

import pandas as pd

from dbrunbook.config import INSERT_BATCH_SIZE
from dbrunbook.db import get_variable, quote_identifier


def load_data_infile_sql(table: str, columns=None, local: bool = True) -> str:
    """LOAD DATA statement with the file name left as a %s parameter."""
    keyword = "LOAD DATA LOCAL INFILE" if local else "LOAD DATA INFILE"
    sql = (
        f"{keyword} %s INTO TABLE {quote_identifier(table)} "
        "FIELDS TERMINATED BY ',' OPTIONALLY ENCLOSED BY '\"' "
        "LINES TERMINATED BY '\\n' "
        "IGNORE 1 LINES"
    )
    if columns:
        sql += " (" + ", ".join(quote_identifier(c) for c in columns) + ")"
    return sql


def read_header(path) -> list:
    return list(pd.read_csv(path, nrows=0).columns)


def check_secure_file_priv(cursor, path):
    """Reject server-side paths the server is not allowed to read."""
    priv = get_variable(cursor, 'secure_file_priv')
    if priv is None or priv == 'NULL':
        raise ValueError("secure_file_priv is NULL: server-side LOAD DATA INFILE is disabled, "
                         "use a LOCAL load instead")
    if priv == '':
        return
    if not os.path.isabs(path):
        raise ValueError(f"{path} is not absolute; server-side loads need a path inside "
                         f"secure_file_priv ({priv})")
    allowed = os.path.normpath(priv)
    target = os.path.normpath(path)
    if os.path.commonpath([allowed, target]) != allowed:
        raise ValueError(f"{path} is outside secure_file_priv ({priv}); "
                         f"copy the file into {priv} first")


def load_csv(conn, path, table: str, local: bool = True, columns=None) -> int:
    """Import a CSV with a header row. Returns the number of loaded rows."""
    path = str(path)
    if local and not os.path.exists(path):
        raise FileNotFoundError(path)
    if columns is None and os.path.exists(path):
        columns = read_header(path)

    cursor = conn.cursor()
    try:
        if not local:
            check_secure_file_priv(cursor, path)
        cursor.execute(load_data_infile_sql(table, columns, local=local), (path,))
        loaded = cursor.rowcount
        conn.commit()
    finally:
        cursor.close()

    print(f"[OK] Loaded {loaded} rows from {path} into {table}")
    return loaded


def _to_python(value):
    if pd.isna(value):
        return None
    # numpy scalars are not accepted by the connector
    if hasattr(value, 'item'):
        return value.item()
    return value


def insert_csv(conn, path, table: str, batch_size: int = INSERT_BATCH_SIZE) -> int:
    """Import a CSV with batched INSERT statements."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")
    if not os.path.exists(path):
        raise FileNotFoundError(path)

    columns = read_header(path)
    sql = (
        f"INSERT INTO {quote_identifier(table)} "
        f"({', '.join(quote_identifier(c) for c in columns)}) "
        f"VALUES ({', '.join(['%s'] * len(columns))})"
    )

    inserted = 0
    cursor = conn.cursor()
    try:
        for chunk in pd.read_csv(path, chunksize=batch_size):
            rows = [tuple(_to_python(v) for v in row)
                    for row in chunk.itertuples(index=False, name=None)]
            cursor.executemany(sql, rows)
            inserted += len(rows)
        conn.commit()
    finally:
        cursor.close()

    print(f"[OK] Inserted {inserted} rows from {path} into {table}")
    return inserted


def export_query(conn, query: str, path) -> int:
    """Write the result of a query to CSV. Returns the row count."""
    with warnings.catch_warnings():
        # pandas warns about DBAPI connections other than sqlite3
        warnings.simplefilter('ignore', UserWarning)
        df = pd.read_sql(query, conn)

    df.to_csv(path, index=False)
    print(f"[SAVE] Exported {len(df)} rows to {path}")
    return len(df)


def export_table(conn, table: str, path) -> int:
    return export_query(conn, f"SELECT * FROM {quote_identifier(table)}", path)
