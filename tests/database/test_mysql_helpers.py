from datetime import datetime

import pytest
import pytz

from conftest import jst
from src.storeops.storeops.database.bootstrap import iter_sql_statements
from src.storeops.storeops.database.mysql_base import normalize_mysql_datetime, to_mysql_datetime


def test_split_sql_respects_quotes():
    sql = "CREATE TABLE a (x INT);\nINSERT INTO a VALUES ('semi;colon');\n  SELECT \"q;\" ;  "

    assert list(iter_sql_statements(sql)) == [
        "CREATE TABLE a (x INT)",
        "INSERT INTO a VALUES ('semi;colon')",
        'SELECT "q;"',
    ]


def test_normalize_mysql_datetime_reads_naive_as_utc():
    value = normalize_mysql_datetime(datetime(2026, 1, 9, 13, 0))

    assert value == jst(2026, 1, 9, 22, 0)
    assert normalize_mysql_datetime("2026-01-09 13:00:00") == value
    assert normalize_mysql_datetime(None) is None


def test_normalize_mysql_datetime_rejects_other_types():
    with pytest.raises(TypeError):
        normalize_mysql_datetime(12345)


def test_to_mysql_datetime_is_naive_utc():
    assert to_mysql_datetime(jst(2026, 1, 9, 22, 0)) == datetime(2026, 1, 9, 13, 0)
    assert to_mysql_datetime(pytz.utc.localize(datetime(2026, 1, 9, 13, 0))).tzinfo is None
