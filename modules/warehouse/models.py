from datetime import datetime
from enum import Enum

from extensions import db


class MovementType(str, Enum):
    IN = "IN"
    OUT = "OUT"
    ADJUSTMENT = "ADJUSTMENT"


class StockMovement(db.Model):
    """Журнал руху складу: лише додавання, записи не змінюються і не видаляються."""
    __tablename__ = "stock_movements"

    id = db.Column(db.Integer, primary_key=True)

    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False, index=True)
    type = db.Column(db.Enum(MovementType, native_enum=False, length=16), nullable=False)
    qty = db.Column(db.Float, nullable=False)          # завжди > 0, знак лише у дельті залишку
    reference = db.Column(db.String(255))              # номер документа або мітка коригування
    date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    product = db.relationship("Product")

    @property
    def delta(self) -> float:
        """Зміна Product.stock_qty: OUT = -qty, IN/ADJUSTMENT = +qty."""
        return -self.qty if self.type == MovementType.OUT else self.qty

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "product_id": self.product_id,
            "product_name": self.product.name if self.product else None,
            "product_code": self.product.code if self.product else None,
            "type": self.type.value,
            "qty": self.qty,
            "reference": self.reference,
            "date": self.date.isoformat() if self.date else None,
        }
