from unittest import mock

import mysql.connector
import pandas as pd
import pytest

from dbrunbook.cli import build_parser, main
from conftest import FakeConnection, FakeCursor


def test_seed_and_add_dummy(tmp_path):
    seed = tmp_path / "seed.csv"
    grown = tmp_path / "grown.csv"

    assert main(["seed", str(seed), "--rows", "20"]) == 0
    assert main(["add-dummy", str(seed), str(grown), "--rows", "30", "--seed", "5"]) == 0
    assert len(pd.read_csv(grown)) == 50


def test_add_dummy_missing_input(tmp_path, capsys):
    assert main(["add-dummy", str(tmp_path / "nope.csv"), str(tmp_path / "out.csv")]) == 1
    assert "[ERROR]" in capsys.readouterr().err


def test_connection_flags_override_env(monkeypatch):
    monkeypatch.setenv('MYSQL_HOST', 'envhost')
    args = build_parser().parse_args(["export", "out.csv", "--port", "3307", "--database", "employees"])
    from dbrunbook.cli import _config_from_args
    config = _config_from_args(args)
    assert config['host'] == 'envhost'
    assert config['port'] == 3307
    assert config['database'] == 'employees'


def test_load_uses_insert_method(mock_csv):
    cursor = FakeCursor()
    with mock.patch('dbrunbook.cli.get_connection', return_value=FakeConnection(cursor)):
        assert main(["load", str(mock_csv), "--method", "insert", "--create-table"]) == 0

    assert cursor.executed[0][0].startswith("CREATE TABLE IF NOT EXISTS `mock_data`")
    assert len(cursor.executemany_calls) == 1


def test_connection_error_exit_code(mock_csv):
    with mock.patch('dbrunbook.cli.get_connection', side_effect=mysql.connector.Error("refused")):
        assert main(["load", str(mock_csv)]) == 1


def test_dump_passes_database(tmp_path):
    with mock.patch('dbrunbook.cli.dump_database') as dump:
        assert main(["dump", str(tmp_path / "d.sql"), "--database", "employees",
                     "--tables", "salaries"]) == 0
    args, kwargs = dump.call_args
    assert args[1] == 'employees'
    assert kwargs['tables'] == ['salaries']


def test_bench_requires_work():
    with pytest.raises(SystemExit):
        main(["bench"])


def test_bad_port_env_does_not_break_seed(monkeypatch, tmp_path):
    monkeypatch.setenv('MYSQL_PORT', 'abc')
    assert main(["seed", str(tmp_path / "s.csv"), "--rows", "5"]) == 0


def test_bad_port_env_reported_for_db_commands(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv('MYSQL_PORT', 'abc')
    assert main(["export", str(tmp_path / "out.csv")]) == 1
    assert "[ERROR] MYSQL_PORT must be an integer" in capsys.readouterr().err


def test_bench_rejects_csv_and_query(mock_csv):
    with pytest.raises(SystemExit):
        main(["bench", "--csv", str(mock_csv), "--query", "SELECT 1"])


def test_load_rejects_server_side_insert(mock_csv):
    with pytest.raises(SystemExit):
        main(["load", str(mock_csv), "--method", "insert", "--server-side"])
