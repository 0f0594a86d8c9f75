from __future__ import annotations

from datetime import datetime
from pathlib import Path

import mysql.connector
import pytest

from institution_payroll.core.exceptions import ConflictError, DataSourceError
from institution_payroll.database.bootstrap import _strip_create_db_and_use, _strip_line_comments, iter_sql_statements
from institution_payroll.database.mysql_base import db_cursor, normalize_mysql_datetime

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


class FakeCursor:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class FakeConn:
    def __init__(self):
        self.committed = False
        self.rolled_back = False
        self.closed = False
        self.cur = FakeCursor()

    def cursor(self, dictionary=True):
        return self.cur

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn=None, error=None):
        self.conn = conn
        self.error = error

    def connect(self):
        if self.error:
            raise self.error
        return self.conn


def test_commits_and_closes_on_success():
    conn = FakeConn()
    with db_cursor(FakeFactory(conn)) as (_, cur):
        assert cur is conn.cur
    assert conn.committed and conn.closed and conn.cur.closed
    assert not conn.rolled_back


def test_integrity_error_becomes_conflict():
    conn = FakeConn()
    with pytest.raises(ConflictError):
        with db_cursor(FakeFactory(conn)):
            raise mysql.connector.IntegrityError(msg="Duplicate entry 'x' for key 'uq'")
    assert conn.rolled_back and conn.closed
    assert not conn.committed


def test_driver_error_becomes_data_source_error():
    conn = FakeConn()
    with pytest.raises(DataSourceError):
        with db_cursor(FakeFactory(conn)):
            raise mysql.connector.ProgrammingError(msg="Unknown column")
    assert conn.rolled_back


def test_connect_failure_becomes_data_source_error():
    with pytest.raises(DataSourceError):
        with db_cursor(FakeFactory(error=mysql.connector.InterfaceError(msg="Can't connect"))):
            pass


def test_other_errors_roll_back_and_propagate():
    conn = FakeConn()
    with pytest.raises(KeyError):
        with db_cursor(FakeFactory(conn)):
            raise KeyError("x")
    assert conn.rolled_back and conn.closed


def test_datetime_normalisation():
    assert normalize_mysql_datetime("2024-01-02T09:15:00Z") == datetime(2024, 1, 2, 9, 15)
    assert normalize_mysql_datetime(None) is None
    assert normalize_mysql_datetime("") is None


def test_statement_splitter_respects_quotes():
    sql = "INSERT INTO t VALUES('a;b');\nINSERT INTO t VALUES(\"c;d\");  ;\nSELECT 1"
    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES('a;b')",
        'INSERT INTO t VALUES("c;d")',
        "SELECT 1",
    ]


def test_schema_creates_every_table():
    sql = _strip_line_comments(_strip_create_db_and_use(SCHEMA.read_text(encoding="utf-8")))
    creates = [s for s in iter_sql_statements(sql) if s.upper().startswith("CREATE TABLE")]
    names = {s.split()[5] for s in creates}
    assert {
        "calendar_day_types",
        "company_holidays",
        "institution_holidays",
        "officer_attendance",
        "staff_attendance",
        "leave_applications",
        "overtime_requests",
        "payroll_records",
    } <= names
