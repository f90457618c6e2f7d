"""
MySQL connection helpers
"""

import mysql.connector

from dbrunbook.config import get_mysql_config


def get_connection(config=None):
    """Open a connection, printing the target. Errors are re-raised."""
    config = config or get_mysql_config()
    try:
        conn = mysql.connector.connect(**config)
    except mysql.connector.Error as err:
        print(f"[ERROR] MySQL connection to {config['host']}:{config['port']} failed: {err}")
        print("   Check that the server is running and the credentials are correct")
        raise
    print(f"[OK] Connected to MySQL on {config['host']}:{config['port']}")
    return conn


def fetch_all_results(cursor):
    """Fetch all rows and drain any remaining result sets.

    Statements without a result set (INSERT, UPDATE, DDL) return [].
    """
    results = cursor.fetchall() if cursor.with_rows else []
    while cursor.nextset():
        if cursor.with_rows:
            cursor.fetchall()
    return results


def quote_identifier(name: str) -> str:
    if not name:
        raise ValueError("Identifier must not be empty")
    return "`" + name.replace("`", "``") + "`"


def get_variable(cursor, name):
    cursor.execute("SHOW VARIABLES LIKE %s", (name,))
    row = cursor.fetchone()
    return row[1] if row else None


def table_row_count(cursor, table) -> int:
    cursor.execute(f"SELECT COUNT(*) FROM {quote_identifier(table)}")
    return int(cursor.fetchone()[0])
