from flask import jsonify, request

from . import transactions_bp
from .forms import TransactionCreateForm, TransactionUpdateForm
from . import services
from modules.common.forms import json_payload, validate_form


@transactions_bp.get("")
def index():
    """Шапки документів (+ імена контрагента/відповідального), нові дати першими. Фільтр: ?type=."""
    tx_type = (request.args.get("type") or "").strip() or None
    return jsonify(services.list_transactions(tx_type))


@transactions_bp.get("/<int:tx_id>")
def detail(tx_id: int):
    return jsonify(services.get_transaction(tx_id))


@transactions_bp.get("/<int:tx_id>/items")
def items(tx_id: int):
    return jsonify(services.list_items(tx_id))


@transactions_bp.post("")
def create():
    form = validate_form(TransactionCreateForm, json_payload())
    tx = services.create_transaction(form.to_command())
    return jsonify({"id": tx.id, "number": tx.number}), 201


@transactions_bp.put("/<int:tx_id>")
def update(tx_id: int):
    payload = json_payload()
    form = validate_form(
        TransactionUpdateForm,
        payload,
        items_supplied=payload.get("items") is not None,
    )
    services.update_transaction(tx_id, form.to_command())
    return jsonify({"success": True})


@transactions_bp.delete("/<int:tx_id>")
def delete(tx_id: int):
    services.delete_transaction(tx_id)
    return jsonify({"success": True})
