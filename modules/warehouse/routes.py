from flask import jsonify, request

from . import warehouse_bp
from .forms import AdjustmentForm
from .services import adjust_stock, list_movements, low_stock
from modules.common.forms import json_payload, validate_form


@warehouse_bp.get("/movements", endpoint="movements")
def movements():
    """Журнал руху складу з назвою/кодом продукту, нові першими. Фільтр: ?product_id=."""
    product_id = request.args.get("product_id", type=int)
    return jsonify(list_movements(product_id))


@warehouse_bp.post("/adjustments", endpoint="adjustments")
def adjustments():
    form = validate_form(AdjustmentForm, json_payload())
    movement = adjust_stock(form.to_command())
    return jsonify({"success": True, "movement_id": movement.id}), 201


@warehouse_bp.get("/low-stock", endpoint="low_stock")
def low_stock_index():
    threshold = request.args.get("threshold", type=float)
    return jsonify(low_stock(threshold))
