# modules/reference/products/models.py

from extensions import db


class Product(db.Model):
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(64), unique=True, nullable=False)
    name = db.Column(db.String(255), nullable=False)

    category = db.Column(db.String(100))
    unit = db.Column(db.String(32))

    purchase_price = db.Column(db.Float, nullable=False, default=0.0)
    sales_price = db.Column(db.Float, nullable=False, default=0.0)

    # Змінюється лише рухами складу (StockMovement) або прямим редагуванням
    stock_qty = db.Column(db.Float, nullable=False, default=0.0)

    def __repr__(self):
        return f'<Product {self.code} {self.name}>'

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "category": self.category,
            "unit": self.unit,
            "purchase_price": self.purchase_price,
            "sales_price": self.sales_price,
            "stock_qty": self.stock_qty,
        }
