# modules/warehouse/services.py
# -*- coding: utf-8 -*-
"""
Сервіси складу: проведення руху (StockMovement + дельта залишку),
ручні коригування та звіти по журналу/залишках.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from flask import current_app

from extensions import db
from modules.common.errors import ConstraintViolation, ValidationError
from modules.common.unit_of_work import atomic
from modules.reference.products.models import Product
from .models import MovementType, StockMovement

DEFAULT_ADJUSTMENT_REFERENCE = "Manual Adjustment"


@dataclass(frozen=True)
class AdjustmentCommand:
    """Ручне коригування залишку поза життєвим циклом документа."""

    product_id: int
    type: MovementType
    qty: float
    reference: Optional[str] = None


def post_movement(product_id: int, movement_type: MovementType, qty: float, reference: Optional[str]) -> StockMovement:
    """
    Додає один запис у журнал і застосовує дельту до Product.stock_qty.
    Не комітить: викликається всередині atomic() того, хто проводить.
    """
    movement = StockMovement(
        product_id=product_id,
        type=movement_type,
        qty=qty,
        reference=reference,
    )
    db.session.add(movement)

    # Інкремент на боці БД, без read-modify-write у Python
    updated = (
        Product.query
        .filter(Product.id == product_id)
        .update({Product.stock_qty: Product.stock_qty + movement.delta}, synchronize_session=False)
    )
    if not updated:
        raise ConstraintViolation(f"Продукт #{product_id} не існує.")

    stock_after = db.session.query(Product.stock_qty).filter(Product.id == product_id).scalar()
    if stock_after is not None and stock_after < 0:
        current_app.logger.warning(
            "Stock for product #%s went negative (%s) after %s %s [%s]",
            product_id, stock_after, movement_type.value, qty, reference,
        )
    return movement


def adjust_stock(cmd: AdjustmentCommand) -> StockMovement:
    if cmd.qty is None or cmd.qty <= 0:
        raise ValidationError("Кількість має бути більшою за нуль.")

    try:
        movement_type = MovementType(cmd.type)
    except ValueError:
        raise ValidationError(f"Невідомий тип руху: {cmd.type!r}.") from None

    reference = (cmd.reference or "").strip() or DEFAULT_ADJUSTMENT_REFERENCE
    with atomic():
        if db.session.get(Product, cmd.product_id) is None:
            raise ConstraintViolation(f"Продукт #{cmd.product_id} не існує.")
        movement = post_movement(cmd.product_id, movement_type, float(cmd.qty), reference)

    current_app.logger.info(
        "Stock adjustment: product #%s %s %s [%s]",
        cmd.product_id, movement.type.value, movement.qty, reference,
    )
    return movement


def list_movements(product_id: Optional[int] = None) -> List[dict]:
    q = (
        db.session.query(StockMovement, Product)
        .join(Product, Product.id == StockMovement.product_id)
    )
    if product_id:
        q = q.filter(StockMovement.product_id == product_id)

    rows = q.order_by(StockMovement.date.desc(), StockMovement.id.desc()).all()
    return [
        {
            "id": m.id,
            "product_id": m.product_id,
            "product_name": p.name,
            "product_code": p.code,
            "type": m.type.value,
            "qty": m.qty,
            "reference": m.reference,
            "date": m.date.isoformat() if m.date else None,
        }
        for m, p in rows
    ]


def low_stock(threshold: Optional[float] = None) -> List[dict]:
    """Продукти з залишком <= порогу (за замовчуванням LOW_STOCK_THRESHOLD з конфігу)."""
    if threshold is None:
        threshold = current_app.config.get("LOW_STOCK_THRESHOLD", 5)
    rows = (
        Product.query
        .filter(Product.stock_qty <= threshold)
        .order_by(Product.stock_qty.asc(), Product.name.asc())
        .all()
    )
    return [p.as_dict() for p in rows]
