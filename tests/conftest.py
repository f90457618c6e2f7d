import pandas as pd
import pytest


class FakeCursor:
    def __init__(self, variables=None, rowcount=0, fail_on=None, with_rows=True):
        self.executed = []
        self.executemany_calls = []
        self.variables = variables or {}
        self.rowcount = rowcount
        self.fail_on = fail_on
        self._last = None
        self.closed = False
        self.with_rows = with_rows

    def execute(self, sql, params=None):
        if self.fail_on and self.fail_on in sql:
            raise RuntimeError(f"boom: {sql}")
        self.executed.append((sql, params))
        self._last = (sql, params)

    def executemany(self, sql, rows):
        self.executemany_calls.append((sql, list(rows)))

    def fetchone(self):
        sql, params = self._last
        if sql.startswith("SHOW VARIABLES"):
            name = params[0]
            if name in self.variables:
                return (name, self.variables[name])
            return None
        if sql.startswith("SELECT COUNT(*)"):
            return (7,)
        return None

    def fetchall(self):
        if not self.with_rows:
            raise RuntimeError("No result set to fetch from")
        return [(1,)]

    def nextset(self):
        return None

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor=None):
        self.cursor_obj = cursor or FakeCursor()
        self.commits = 0

    def cursor(self):
        return self.cursor_obj

    def commit(self):
        self.commits += 1

    def close(self):
        pass


@pytest.fixture
def fake_cursor():
    return FakeCursor()


@pytest.fixture
def fake_conn(fake_cursor):
    return FakeConnection(fake_cursor)


@pytest.fixture
def mock_df():
    return pd.DataFrame({
        'id': [1, 2, 3, 4],
        'firstname': ['Anna', 'Ravi', 'Priya', 'John'],
        'lastname': ['Smith', 'Nair', 'Patel', 'Brown'],
        'email': ['anna@mail.test', 'ravi@mail.test', 'priya@mail.test', 'john@mail.test'],
        'gender': ['Female', 'Male', 'Female', 'Male'],
        'ipaddress': ['1.2.3.4', '5.6.7.8', '9.10.11.12', '13.14.15.16'],
    })


@pytest.fixture
def mock_csv(tmp_path, mock_df):
    path = tmp_path / "MOCK_DATA.csv"
    mock_df.to_csv(path, index=False)
    return path
