from enum import Enum

from extensions import db


class PartnerType(str, Enum):
    CUSTOMER = "Customer"
    SUPPLIER = "Supplier"


class Partner(db.Model):
    __tablename__ = 'partners'

    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.String(16), nullable=False)  # Customer | Supplier
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255))
    phone = db.Column(db.String(64))
    address = db.Column(db.String(255))

    def __repr__(self):
        return f'<Partner {self.type} {self.name}>'

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
        }
