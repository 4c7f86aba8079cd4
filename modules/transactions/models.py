# modules/transactions/models.py
# -*- coding: utf-8 -*-
"""
Документи продажу/закупівлі (шапка + рядки).

Тип документа фіксується при створенні. Статус — закритий перелік;
перехід у COMPLETED проводить рух складу (див. services.complete_transaction).
"""

from __future__ import annotations

from enum import Enum

from extensions import db


class TransactionType(str, Enum):
    QUOTATION = "QUOTATION"
    SO = "SO"
    PO = "PO"
    PR = "PR"
    INVOICE_IN = "INVOICE_IN"
    INVOICE_OUT = "INVOICE_OUT"


class TransactionStatus(str, Enum):
    DRAFT = "DRAFT"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"


class Transaction(db.Model):
    __tablename__ = "transactions"

    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.Enum(TransactionType, native_enum=False, length=16), nullable=False, index=True)
    number = db.Column(db.String(64), unique=True, nullable=False)
    date = db.Column(db.Date, nullable=False)

    partner_id = db.Column(db.Integer, db.ForeignKey("partners.id"), nullable=True, index=True)
    employee_id = db.Column(db.Integer, db.ForeignKey("employees.id"), nullable=True, index=True)

    status = db.Column(
        db.Enum(TransactionStatus, native_enum=False, length=16),
        nullable=False,
        default=TransactionStatus.DRAFT,
    )
    # Сума приходить від клієнта, на сервері не перераховується
    total_amount = db.Column(db.Float, nullable=False, default=0.0)

    partner = db.relationship("Partner")
    employee = db.relationship("Employee")
    items = db.relationship(
        "TransactionItem",
        backref="transaction",
        cascade="all, delete-orphan",
        order_by="TransactionItem.id",
    )

    def __repr__(self) -> str:
        return f"<Transaction id={self.id} {self.type.value} {self.number} status={self.status.value}>"

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "number": self.number,
            "date": self.date.isoformat() if self.date else None,
            "partner_id": self.partner_id,
            "partner_name": self.partner.name if self.partner else None,
            "employee_id": self.employee_id,
            "employee_name": self.employee.name if self.employee else None,
            "status": self.status.value,
            "total_amount": self.total_amount,
        }


class TransactionItem(db.Model):
    __tablename__ = "transaction_items"

    id = db.Column(db.Integer, primary_key=True)
    transaction_id = db.Column(db.Integer, db.ForeignKey("transactions.id"), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False, index=True)

    qty = db.Column(db.Float, nullable=False)
    # Ціна — знімок на момент створення рядка, не посилання на Product.sales_price
    price = db.Column(db.Float, nullable=False, default=0.0)
    subtotal = db.Column(db.Float, nullable=False, default=0.0)

    product = db.relationship("Product")

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "transaction_id": self.transaction_id,
            "product_id": self.product_id,
            "product_name": self.product.name if self.product else None,
            "product_code": self.product.code if self.product else None,
            "qty": self.qty,
            "price": self.price,
            "subtotal": self.subtotal,
        }
