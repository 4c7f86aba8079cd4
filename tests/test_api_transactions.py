"""HTTP surface of /api/transactions and /api/inventory."""

from __future__ import annotations

from datetime import date

import pytest

from extensions import db
from modules.transactions.models import Transaction, TransactionItem, TransactionStatus, TransactionType
from modules.warehouse.models import StockMovement


def _payload(product, **overrides):
    payload = {
        "type": "PO",
        "number": "PO-1001",
        "date": "2024-02-01",
        "status": "DRAFT",
        "total_amount": 50.0,
        "items": [{"product_id": product.id, "qty": 5, "price": 10.0, "subtotal": 50.0}],
    }
    payload.update(overrides)
    return payload


# ----------------------------- POST -----------------------------

def test_create_returns_id_and_number(client, make_product, supplier):
    product = make_product()

    resp = client.post("/api/transactions", json=_payload(product, partner_id=supplier.id))

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["number"] == "PO-1001"
    tx = db.session.get(Transaction, body["id"])
    assert tx.type == TransactionType.PO
    assert tx.partner_id == supplier.id
    assert [it.qty for it in tx.items] == [5]


def test_create_defaults_subtotal_to_qty_times_price(client, make_product):
    product = make_product()
    payload = _payload(product, items=[{"product_id": product.id, "qty": 3, "price": 2.5}])

    resp = client.post("/api/transactions", json=payload)

    assert resp.status_code == 201
    assert TransactionItem.query.one().subtotal == pytest.approx(7.5)


def test_create_as_completed_posts_stock(client, make_product, stock_of):
    product = make_product(stock_qty=1)

    resp = client.post("/api/transactions", json=_payload(product, status="COMPLETED"))

    assert resp.status_code == 201
    assert stock_of(product.id) == 6
    assert StockMovement.query.count() == 1


def test_duplicate_number_is_a_conflict(client, make_product):
    product = make_product()
    assert client.post("/api/transactions", json=_payload(product)).status_code == 201

    resp = client.post("/api/transactions", json=_payload(product))

    assert resp.status_code == 409
    assert resp.get_json()["kind"] == "constraint_violation"
    assert Transaction.query.count() == 1


def test_unknown_product_in_items_is_rejected(client, make_product):
    product = make_product()
    payload = _payload(product, items=[{"product_id": 9999, "qty": 1, "price": 1.0}])

    resp = client.post("/api/transactions", json=payload)

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["kind"] == "validation_error"
    assert "items" in body["details"]
    assert Transaction.query.count() == 0


@pytest.mark.parametrize(
    "item",
    [
        {"qty": 0, "price": 1.0},
        {"qty": -2, "price": 1.0},
        {"qty": 1, "price": -1.0},
        {"price": 1.0},
    ],
)
def test_bad_item_lines_are_rejected(client, make_product, item):
    product = make_product()
    payload = _payload(product, items=[dict(item, product_id=product.id)])

    resp = client.post("/api/transactions", json=payload)

    assert resp.status_code == 400
    assert Transaction.query.count() == 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"type": "GIFT"},
        {"status": "ARCHIVED"},
        {"date": "01.02.2024"},
        {"number": "  "},
    ],
)
def test_bad_header_fields_are_rejected(client, make_product, overrides):
    product = make_product()
    resp = client.post("/api/transactions", json=_payload(product, **overrides))
    assert resp.status_code == 400


def test_non_json_body_is_rejected(client):
    resp = client.post("/api/transactions", data="type=PO", content_type="text/plain")

    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "validation_error"


# ----------------------------- PUT -----------------------------

def test_put_completed_posts_stock(client, make_product, make_transaction, stock_of):
    product = make_product(stock_qty=20)
    tx = make_transaction(TransactionType.SO, [(product, 4, 15.0)])

    resp = client.put(f"/api/transactions/{tx.id}", json={"status": "COMPLETED"})

    assert resp.status_code == 200
    assert resp.get_json() == {"success": True}
    assert stock_of(product.id) == 16

    # повторне збереження того самого статусу нічого не проводить
    resp = client.put(f"/api/transactions/{tx.id}", json={"status": "COMPLETED"})
    assert resp.status_code == 200
    assert stock_of(product.id) == 16
    assert StockMovement.query.count() == 1


def test_put_replaces_items_and_total(client, make_product, make_transaction):
    a = make_product()
    b = make_product()
    tx = make_transaction(TransactionType.QUOTATION, [(a, 1, 1.0), (a, 2, 1.0)])

    resp = client.put(
        f"/api/transactions/{tx.id}",
        json={"total_amount": 99.0, "items": [{"product_id": b.id, "qty": 3, "price": 33.0}]},
    )

    assert resp.status_code == 200
    rows = client.get(f"/api/transactions/{tx.id}/items").get_json()
    assert [(r["product_id"], r["qty"], r["subtotal"]) for r in rows] == [(b.id, 3, 99.0)]
    assert client.get(f"/api/transactions/{tx.id}").get_json()["total_amount"] == 99.0


def test_put_with_empty_items_clears_lines(client, make_product, make_transaction):
    product = make_product()
    tx = make_transaction(TransactionType.QUOTATION, [(product, 1, 1.0)])

    resp = client.put(f"/api/transactions/{tx.id}", json={"items": []})

    assert resp.status_code == 200
    assert client.get(f"/api/transactions/{tx.id}/items").get_json() == []


def test_put_without_items_keeps_lines(client, make_product, make_transaction):
    product = make_product()
    tx = make_transaction(TransactionType.QUOTATION, [(product, 1, 1.0)])

    resp = client.put(f"/api/transactions/{tx.id}", json={"status": "APPROVED"})

    assert resp.status_code == 200
    assert len(client.get(f"/api/transactions/{tx.id}/items").get_json()) == 1


def test_put_unknown_transaction_is_404(client):
    resp = client.put("/api/transactions/424242", json={"status": "APPROVED"})

    assert resp.status_code == 404
    assert resp.get_json()["kind"] == "not_found"


def test_put_cannot_reopen_completed(client, make_product, make_transaction):
    product = make_product()
    tx = make_transaction(TransactionType.PO, [(product, 1, 1.0)], status=TransactionStatus.COMPLETED)

    resp = client.put(f"/api/transactions/{tx.id}", json={"status": "DRAFT"})

    assert resp.status_code == 409


def test_put_cannot_change_type(client, make_product, make_transaction):
    product = make_product()
    tx = make_transaction(TransactionType.PO, [(product, 1, 1.0)])

    resp = client.put(f"/api/transactions/{tx.id}", json={"type": "SO"})

    assert resp.status_code == 409


# ----------------------------- DELETE -----------------------------

def test_delete_removes_header_and_items(client, make_product, make_transaction):
    product = make_product()
    tx = make_transaction(TransactionType.SO, [(product, 1, 1.0)])
    tx_id = tx.id

    resp = client.delete(f"/api/transactions/{tx_id}")

    assert resp.status_code == 200
    assert resp.get_json() == {"success": True}
    assert Transaction.query.count() == 0
    assert TransactionItem.query.count() == 0
    assert client.get(f"/api/transactions/{tx_id}").status_code == 404


def test_delete_unknown_transaction_is_404(client):
    assert client.delete("/api/transactions/31337").status_code == 404


# ----------------------------- GET -----------------------------

def test_list_is_newest_first_with_names(client, make_product, make_transaction, partner, employee):
    product = make_product()
    make_transaction(TransactionType.SO, [(product, 1, 1.0)], number="SO-OLD", tx_date=date(2024, 1, 1))
    make_transaction(
        TransactionType.SO, [(product, 1, 1.0)], number="SO-NEW", tx_date=date(2024, 3, 1),
        partner_id=partner.id, employee_id=employee.id,
    )
    make_transaction(TransactionType.PO, [(product, 1, 1.0)], number="PO-MID", tx_date=date(2024, 2, 1))

    rows = client.get("/api/transactions").get_json()
    assert [r["number"] for r in rows] == ["SO-NEW", "PO-MID", "SO-OLD"]
    assert rows[0]["partner_name"] == "John Doe Corp"
    assert rows[0]["employee_name"] == "Emma Wilson"
    assert rows[1]["partner_name"] is None

    only_so = client.get("/api/transactions?type=SO").get_json()
    assert [r["number"] for r in only_so] == ["SO-NEW", "SO-OLD"]


def test_list_with_unknown_type_is_rejected(client):
    assert client.get("/api/transactions?type=GIFT").status_code == 400


def test_detail_includes_items(client, make_product, make_transaction):
    product = make_product(code="P777", name="Dock")
    tx = make_transaction(TransactionType.SO, [(product, 2, 5.0)], number="SO-5")

    body = client.get(f"/api/transactions/{tx.id}").get_json()

    assert body["number"] == "SO-5"
    assert body["status"] == "DRAFT"
    assert body["items"][0]["product_code"] == "P777"
    assert body["items"][0]["subtotal"] == 10.0


def test_items_of_unknown_transaction_is_404(client):
    assert client.get("/api/transactions/555/items").status_code == 404


# ----------------------------- inventory -----------------------------

def test_adjustment_endpoint(client, make_product, stock_of):
    product = make_product(stock_qty=5)

    resp = client.post(
        "/api/inventory/adjustments",
        json={"product_id": product.id, "type": "OUT", "qty": 2, "reference": "Damaged"},
    )

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["success"] is True
    assert db.session.get(StockMovement, body["movement_id"]).reference == "Damaged"
    assert stock_of(product.id) == 3


def test_adjustment_of_unknown_product_is_409(client):
    resp = client.post("/api/inventory/adjustments", json={"product_id": 404, "type": "IN", "qty": 1})

    assert resp.status_code == 409
    assert StockMovement.query.count() == 0


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "LOST", "qty": 1},
        {"type": "IN", "qty": 0},
        {"type": "IN"},
        {"qty": 1},
    ],
)
def test_adjustment_validation(client, make_product, payload):
    product = make_product()

    resp = client.post("/api/inventory/adjustments", json=dict(payload, product_id=product.id))

    assert resp.status_code == 400
    assert StockMovement.query.count() == 0


def test_movements_and_low_stock_endpoints(client, make_product):
    product = make_product(code="P010", stock_qty=10)
    other = make_product(code="P020", stock_qty=100)
    client.post("/api/inventory/adjustments", json={"product_id": product.id, "type": "OUT", "qty": 7})
    client.post("/api/inventory/adjustments", json={"product_id": other.id, "type": "IN", "qty": 1})

    movements = client.get("/api/inventory/movements").get_json()
    assert [m["product_code"] for m in movements] == ["P020", "P010"]
    assert movements[1]["reference"] == "Manual Adjustment"

    filtered = client.get(f"/api/inventory/movements?product_id={product.id}").get_json()
    assert [m["product_code"] for m in filtered] == ["P010"]

    low = client.get("/api/inventory/low-stock").get_json()
    assert [p["code"] for p in low] == ["P010"]
    assert client.get("/api/inventory/low-stock?threshold=2").get_json() == []
