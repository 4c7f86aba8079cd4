# modules/transactions/services.py
# -*- coding: utf-8 -*-
"""
Життєвий цикл документів продажу/закупівлі.

Кожна операція запису — одна атомарна одиниця роботи (atomic()):
шапка, рядки, журнал руху складу і залишки або записуються всі, або жоден.

Проведення складу відбувається лише при переході документа у COMPLETED
з будь-якого іншого статусу. Перехід захищений compare-and-swap по колонці
status, тож два одночасні «завершити» проведуть рух рівно один раз.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from flask import current_app
from sqlalchemy.orm import joinedload

from extensions import db
from modules.common.errors import ConstraintViolation, NotFound, ValidationError
from modules.common.unit_of_work import atomic
from modules.reference.employees.models import Employee
from modules.reference.partners.models import Partner
from modules.reference.products.models import Product
from modules.warehouse.models import MovementType
from modules.warehouse.services import post_movement
from .models import Transaction, TransactionItem, TransactionStatus, TransactionType


# ----------------------------- команди -----------------------------

@dataclass(frozen=True)
class ItemLine:
    product_id: int
    qty: float
    price: float
    subtotal: float


@dataclass(frozen=True)
class CreateTransactionCommand:
    type: TransactionType
    number: str
    date: date
    total_amount: float = 0.0
    items: Tuple[ItemLine, ...] = field(default_factory=tuple)
    partner_id: Optional[int] = None
    employee_id: Optional[int] = None
    status: TransactionStatus = TransactionStatus.DRAFT


@dataclass(frozen=True)
class UpdateTransactionCommand:
    """None у полі = поле не передане і не змінюється (items=() очищає рядки)."""

    status: Optional[TransactionStatus] = None
    total_amount: Optional[float] = None
    items: Optional[Tuple[ItemLine, ...]] = None
    # Тип незмінний: якщо переданий, має збігатися з поточним
    type: Optional[TransactionType] = None


# Напрям руху складу для документів, що виконуються фізично.
# QUOTATION і PR рух не проводять.
STOCK_DIRECTION: Dict[TransactionType, MovementType] = {
    TransactionType.PO: MovementType.IN,
    TransactionType.INVOICE_IN: MovementType.IN,
    TransactionType.SO: MovementType.OUT,
    TransactionType.INVOICE_OUT: MovementType.OUT,
}


# ----------------------------- хелпери -----------------------------

def _coerce(enum_cls, value, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Невідомий {label}: {value!r}.") from None


def _get_or_404(tx_id: int, *, lock: bool = False) -> Transaction:
    q = Transaction.query.filter(Transaction.id == tx_id)
    if lock:
        # SELECT ... FOR UPDATE там, де бекенд це підтримує (Postgres)
        q = q.with_for_update()
    tx = q.first()
    if tx is None:
        raise NotFound(f"Документ #{tx_id} не знайдено.")
    return tx


def _check_references(items: Sequence[ItemLine], partner_id=None, employee_id=None) -> None:
    product_ids = {it.product_id for it in items}
    if product_ids:
        found = {
            pid for (pid,) in db.session.query(Product.id).filter(Product.id.in_(list(product_ids))).all()
        }
        missing = sorted(product_ids - found)
        if missing:
            raise ValidationError(
                f"Продукти не існують: {', '.join(f'#{pid}' for pid in missing)}.",
                details={"product_id": missing},
            )
    if partner_id is not None and db.session.get(Partner, partner_id) is None:
        raise ValidationError(f"Контрагент #{partner_id} не існує.")
    if employee_id is not None and db.session.get(Employee, employee_id) is None:
        raise ValidationError(f"Співробітник #{employee_id} не існує.")


def _check_lines(items: Sequence[ItemLine]) -> None:
    for idx, it in enumerate(items, start=1):
        if it.qty is None or it.qty <= 0:
            raise ValidationError(f"Кількість має бути більшою за нуль (рядок #{idx}).")
        if it.price is None or it.price < 0:
            raise ValidationError(f"Ціна не може бути від'ємною (рядок #{idx}).")


def _build_items(items: Sequence[ItemLine]) -> List[TransactionItem]:
    return [
        TransactionItem(product_id=it.product_id, qty=it.qty, price=it.price, subtotal=it.subtotal)
        for it in items
    ]


def _claim_completion(tx_id: int) -> bool:
    """
    Compare-and-swap: переводить документ у COMPLETED лише якщо він ще не COMPLETED.
    True — цей виклик «виграв» перехід і має провести рух складу.
    """
    claimed = (
        Transaction.query
        .filter(Transaction.id == tx_id, Transaction.status != TransactionStatus.COMPLETED)
        .update({Transaction.status: TransactionStatus.COMPLETED}, synchronize_session=False)
    )
    return claimed == 1


def _post_stock(tx: Transaction) -> int:
    direction = STOCK_DIRECTION.get(tx.type)
    if direction is None:
        return 0

    posted = 0
    for item in tx.items:
        post_movement(item.product_id, direction, item.qty, tx.number)
        posted += 1
    return posted


# ----------------------------- публічні API -----------------------------

def list_transactions(tx_type: Optional[str] = None) -> List[dict]:
    q = Transaction.query.options(joinedload(Transaction.partner), joinedload(Transaction.employee))
    if tx_type:
        q = q.filter(Transaction.type == _coerce(TransactionType, tx_type, "тип документа"))

    rows = q.order_by(Transaction.date.desc(), Transaction.id.desc()).all()
    return [tx.as_dict() for tx in rows]


def get_transaction(tx_id: int) -> dict:
    tx = _get_or_404(tx_id)
    d = tx.as_dict()
    d["items"] = list_items(tx_id)
    return d


def list_items(tx_id: int) -> List[dict]:
    if db.session.get(Transaction, tx_id) is None:
        raise NotFound(f"Документ #{tx_id} не знайдено.")

    rows = (
        db.session.query(TransactionItem, Product)
        .join(Product, Product.id == TransactionItem.product_id)
        .filter(TransactionItem.transaction_id == tx_id)
        .order_by(TransactionItem.id.asc())
        .all()
    )
    return [
        {
            "id": it.id,
            "transaction_id": it.transaction_id,
            "product_id": it.product_id,
            "product_name": p.name,
            "product_code": p.code,
            "qty": it.qty,
            "price": it.price,
            "subtotal": it.subtotal,
        }
        for it, p in rows
    ]


def create_transaction(cmd: CreateTransactionCommand) -> Transaction:
    tx_type = _coerce(TransactionType, cmd.type, "тип документа")
    status = _coerce(TransactionStatus, cmd.status or TransactionStatus.DRAFT, "статус")
    _check_lines(cmd.items)

    with atomic():
        _check_references(cmd.items, cmd.partner_id, cmd.employee_id)

        if Transaction.query.filter(Transaction.number == cmd.number).first() is not None:
            raise ConstraintViolation(f"Документ з номером {cmd.number!r} вже існує.")

        tx = Transaction(
            type=tx_type,
            number=cmd.number,
            date=cmd.date,
            partner_id=cmd.partner_id,
            employee_id=cmd.employee_id,
            # Документ створюється без проведення; COMPLETED виставляється нижче через complete
            status=TransactionStatus.DRAFT if status == TransactionStatus.COMPLETED else status,
            total_amount=cmd.total_amount or 0.0,
            items=_build_items(cmd.items),
        )
        db.session.add(tx)
        db.session.flush()

        posted = 0
        if status == TransactionStatus.COMPLETED:
            posted = _complete(tx)

    current_app.logger.info(
        "Transaction created: #%s %s %s (%d items, %d movements posted)",
        tx.id, tx.type.value, tx.number, len(cmd.items), posted,
    )
    return tx


def _complete(tx: Transaction) -> int:
    """Переводить документ у COMPLETED і проводить рух складу. Повертає к-сть проведених рухів."""
    if not _claim_completion(tx.id):
        current_app.logger.warning(
            "Transaction %s is already COMPLETED, stock is not posted again", tx.number
        )
        db.session.expire(tx, ["status"])
        return 0

    db.session.expire(tx, ["status"])
    posted = _post_stock(tx)
    current_app.logger.info("Transaction %s completed: %d stock movements posted", tx.number, posted)
    return posted


def complete_transaction(tx_id: int) -> int:
    """Guarded-перехід у COMPLETED. Повторний виклик для вже завершеного документа — no-op (0)."""
    with atomic():
        tx = _get_or_404(tx_id, lock=True)
        if tx.status == TransactionStatus.COMPLETED:
            current_app.logger.warning(
                "Transaction %s is already COMPLETED, stock is not posted again", tx.number
            )
            return 0
        return _complete(tx)


def update_transaction(tx_id: int, cmd: UpdateTransactionCommand) -> Transaction:
    if cmd.items is not None:
        _check_lines(cmd.items)

    with atomic():
        tx = _get_or_404(tx_id, lock=True)
        before = tx.status

        if cmd.type is not None and _coerce(TransactionType, cmd.type, "тип документа") != tx.type:
            raise ConstraintViolation(f"Тип документа {tx.number} змінювати не можна.")

        if cmd.status is not None:
            new_status = _coerce(TransactionStatus, cmd.status, "статус")
            if before == TransactionStatus.COMPLETED and new_status != TransactionStatus.COMPLETED:
                raise ConstraintViolation(
                    f"Документ {tx.number} вже завершено; статус {new_status.value} недопустимий."
                )
        else:
            new_status = None

        if cmd.total_amount is not None:
            tx.total_amount = cmd.total_amount

        if cmd.items is not None:
            _check_references(cmd.items)
            # delete-orphan: старі рядки видаляються, нові вставляються в тій самій транзакції
            tx.items = _build_items(cmd.items)

        posted = 0
        if new_status == TransactionStatus.COMPLETED:
            if before != TransactionStatus.COMPLETED:
                db.session.flush()
                posted = _complete(tx)
            else:
                current_app.logger.info("Transaction %s re-saved as COMPLETED, nothing to post", tx.number)
        elif new_status is not None:
            tx.status = new_status

    current_app.logger.info(
        "Transaction updated: #%s %s status %s -> %s (%d movements posted)",
        tx.id, tx.number, before.value, tx.status.value, posted,
    )
    return tx


def delete_transaction(tx_id: int) -> None:
    """
    Видаляє рядки і шапку. Проведений рух складу НЕ сторнується:
    журнал і залишки лишаються як були.
    """
    with atomic():
        tx = _get_or_404(tx_id, lock=True)
        number = tx.number
        # cascade="all, delete-orphan": DELETE рядків виконується перед DELETE шапки
        db.session.delete(tx)

    current_app.logger.info("Transaction deleted: #%s %s", tx_id, number)
