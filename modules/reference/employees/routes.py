from flask import Blueprint, jsonify

from modules.reference.employees.models import Employee

employees_bp = Blueprint('employees', __name__, url_prefix='/api/employees')


@employees_bp.get('')
def index():
    employees = Employee.query.order_by(Employee.name).all()
    return jsonify([e.as_dict() for e in employees])
