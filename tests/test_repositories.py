import uuid
from datetime import date, datetime
from decimal import Decimal

import pytest

from models.inventory import Component
from repositories import base
from repositories.base import is_record_id, require_columns
from repositories.inventory_repo import ComponentRepository
from repositories.loan_repo import LoanRepository
from repositories.transaction_repo import TransactionRepository
from utils.errors import RecordShapeError

ROW_ID = uuid.uuid4()


def _transaction_row(**overrides):
    row = {
        "id": ROW_ID,
        "user_id": 42,
        "type": "income",
        "category": "courses",
        "amount": Decimal("1500.50"),
        "description": None,
        "date": date(2025, 3, 5),
        "created_at": datetime(2025, 3, 5, 10, 0),
    }
    row.update(overrides)
    return row


class _Cursor:
    def __init__(self, row, rowcount=1):
        self.row = row
        self.rowcount = rowcount
        self.executed = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, query, params):
        self.executed.append(params)

    def fetchone(self):
        return self.row

    def fetchall(self):
        return [self.row]


class _Connection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False

    def cursor(self):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True


@pytest.fixture
def fake_db(monkeypatch):
    def install(row, rowcount=1):
        conn = _Connection(_Cursor(row, rowcount))
        monkeypatch.setattr(base, "get_connection", lambda: conn)
        monkeypatch.setattr(base, "release_connection", lambda c: None)
        monkeypatch.setattr(base, "dict_cursor", lambda c: c.cursor())
        return conn
    return install


def test_is_record_id():
    assert is_record_id(str(uuid.uuid4()))
    assert is_record_id(uuid.uuid4())
    assert not is_record_id("5")
    assert not is_record_id("")


def test_require_columns_reports_missing():
    with pytest.raises(RecordShapeError) as info:
        require_columns({"id": 1, "name": "x"}, ("id", "name", "quantity", "unit_price"), "components")
    assert info.value.missing == ["quantity", "unit_price"]
    assert "components" in str(info.value)


def test_map_converts_store_types():
    tx = TransactionRepository()._map(_transaction_row())
    assert tx.id == str(ROW_ID)
    assert tx.amount == 1500.5
    assert isinstance(tx.amount, float)
    assert tx.description == ""


def test_map_rejects_wrong_shape():
    row = _transaction_row()
    del row["category"]
    with pytest.raises(RecordShapeError):
        TransactionRepository()._map(row)


def test_rows_are_not_validated_on_read():
    # negative amounts entered elsewhere are taken as given
    tx = TransactionRepository()._map(_transaction_row(amount=Decimal("-20")))
    assert tx.amount == -20


def test_update_rejects_fields_outside_whitelist():
    with pytest.raises(ValueError):
        LoanRepository().update(str(uuid.uuid4()), 42, principal_amount=1)
    with pytest.raises(ValueError):
        LoanRepository().update(str(uuid.uuid4()), 42)


def test_non_uuid_ids_short_circuit(fake_db):
    conn = fake_db(None)
    repo = ComponentRepository()
    assert repo.update("abc", 42, quantity=1) is None
    assert repo.delete("abc", 42) is False
    assert repo.get_by_id("abc", 42) is None
    assert conn._cursor.executed == []


def test_add_inserts_and_maps_returned_row(fake_db):
    conn = fake_db({
        "id": ROW_ID, "user_id": 42, "name": "LED", "quantity": 10,
        "unit_price": Decimal("1.25"), "min_stock": 5, "category": "General",
    })
    stored = ComponentRepository().add(Component("LED", 10, 1.25), 42)

    assert stored.id == str(ROW_ID)
    assert stored.unit_price == 1.25
    assert conn.committed
    assert conn._cursor.executed == [[42, "LED", 10, 1.25, 5, "General"]]


def test_update_passes_only_given_fields(fake_db):
    record_id = str(uuid.uuid4())
    conn = fake_db({
        "id": record_id, "user_id": 42, "name": "LED", "quantity": 3,
        "unit_price": Decimal("1.25"), "min_stock": 5, "category": "General",
    })
    updated = ComponentRepository().update(record_id, 42, quantity=3)
    assert updated.quantity == 3
    assert conn._cursor.executed == [[3, record_id, 42]]


def test_update_with_no_matching_row(fake_db):
    fake_db(None)
    assert ComponentRepository().update(str(uuid.uuid4()), 42, quantity=3) is None


def test_delete_reports_rowcount(fake_db):
    fake_db(None, rowcount=0)
    assert ComponentRepository().delete(str(uuid.uuid4()), 42) is False


def test_failed_write_rolls_back(fake_db):
    conn = fake_db({"id": ROW_ID})  # missing columns
    with pytest.raises(RecordShapeError):
        ComponentRepository().add(Component("LED", 10, 1.25), 42)
    assert conn.rolled_back


def test_list_all(fake_db):
    fake_db(_transaction_row())
    [tx] = TransactionRepository().list_all(42)
    assert tx.category == "courses"
