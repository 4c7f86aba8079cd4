from flask import Blueprint, current_app, jsonify

from extensions import db
from modules.common.forms import json_payload, validate_form
from modules.common.unit_of_work import atomic
from modules.reference.products.models import Product
from modules.reference.products.forms import ProductForm

products_bp = Blueprint('products', __name__, url_prefix='/api/products')


# 🗂️ Список продуктів
@products_bp.get('')
def index():
    products = Product.query.order_by(Product.id).all()
    return jsonify([p.as_dict() for p in products])


# ➕ Створення продукту
@products_bp.post('')
def create():
    form = validate_form(ProductForm, json_payload())
    product = Product(
        code=form.code.data,
        name=form.name.data,
        category=form.category.data or None,
        unit=form.unit.data or None,
        purchase_price=form.purchase_price.data or 0.0,
        sales_price=form.sales_price.data or 0.0,
        stock_qty=form.stock_qty.data or 0.0,
    )
    with atomic():
        db.session.add(product)
    current_app.logger.info("Product created: %s %s", product.code, product.name)
    return jsonify(product.as_dict()), 201
