"""Table definition for the mock CSV."""

from dbrunbook.db import quote_identifier

MOCK_TABLE_COLUMNS = [
    ('id', 'INT NOT NULL'),
    ('firstname', 'VARCHAR(50)'),
    ('lastname', 'VARCHAR(50)'),
    ('email', 'VARCHAR(100)'),
    ('gender', 'VARCHAR(20)'),
    ('ipaddress', 'VARCHAR(20)'),
]


def create_table_sql(table: str) -> str:
    columns = ",\n".join(f"    {name} {sql_type}" for name, sql_type in MOCK_TABLE_COLUMNS)
    return (
        f"CREATE TABLE IF NOT EXISTS {quote_identifier(table)} (\n"
        f"{columns},\n"
        f"    PRIMARY KEY (id)\n"
        f") ENGINE=InnoDB DEFAULT CHARSET=utf8mb4"
    )


def ensure_table(conn, table: str, drop: bool = False):
    """Create the mock table, dropping it first when asked."""
    cursor = conn.cursor()
    try:
        if drop:
            print(f"  Dropping {table} if it exists...")
            cursor.execute(f"DROP TABLE IF EXISTS {quote_identifier(table)}")
        cursor.execute(create_table_sql(table))
        conn.commit()
    finally:
        cursor.close()
    print(f"  Table '{table}' ready.")
