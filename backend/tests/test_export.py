import csv
import datetime as dt
import io

from conftest import make_txn
from expensepro.db import models
from expensepro.services.export import LOG_COLUMNS, TRANSACTION_COLUMNS, logs_to_csv, transactions_to_csv


def test_transactions_csv_quotes_awkward_values():
    rows = [
        make_txn("t1", dt.date(2024, 5, 1), "1500", description='Taxi, airport "late"', category="Travel"),
        make_txn("t2", dt.date(2024, 5, 2), "3.5", description="line one\nline two"),
    ]
    text = transactions_to_csv(rows)

    lines = text.split("\n")
    assert lines[0] == ",".join(TRANSACTION_COLUMNS)
    assert lines[1].startswith('2024-05-01,Expense,Travel,"Taxi, airport ""late""",1500.00,Pending,')

    parsed = list(csv.reader(io.StringIO(text)))
    assert len(parsed) == 3
    assert parsed[1][3] == 'Taxi, airport "late"'
    assert parsed[2][3] == "line one\nline two"
    assert parsed[2][4] == "3.50"
    assert parsed[2][8] == "2024-01-01 12:00:00"


def test_empty_transactions_csv_is_header_only():
    assert transactions_to_csv([]) == ",".join(TRANSACTION_COLUMNS) + "\n"


def test_logs_csv():
    entry = models.LogEntry(
        id=1,
        user_id="admin",
        action=models.LogAction.transaction_status,
        details="Approved transaction: txn-1, with note",
        timestamp=dt.datetime(2024, 5, 3, 9, 30, 0),
    )
    assert logs_to_csv([entry]) == (
        ",".join(LOG_COLUMNS) + "\n"
        + '2024-05-03 09:30:00,admin,transaction_status,"Approved transaction: txn-1, with note"\n'
    )
