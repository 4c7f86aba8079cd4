from flask import Blueprint, jsonify
from sqlalchemy import func

from extensions import db
from modules.reference.employees.models import Employee
from modules.reference.products.models import Product
from modules.transactions.models import Transaction, TransactionType

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/api/dashboard')


def _total_amount(tx_type: TransactionType) -> float:
    total = (
        db.session.query(func.coalesce(func.sum(Transaction.total_amount), 0.0))
        .filter(Transaction.type == tx_type)
        .scalar()
    )
    return float(total or 0.0)


@dashboard_bp.get('/stats')
def stats():
    """Виручка = сума INVOICE_OUT, витрати = сума INVOICE_IN, кількість продуктів і співробітників."""
    return jsonify({
        "revenue": _total_amount(TransactionType.INVOICE_OUT),
        "expenses": _total_amount(TransactionType.INVOICE_IN),
        "product_count": Product.query.count(),
        "employee_count": Employee.query.count(),
    })
