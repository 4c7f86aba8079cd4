from flask import Blueprint, jsonify, request

from modules.reference.partners.models import Partner

partners_bp = Blueprint('partners', __name__, url_prefix='/api/partners')


@partners_bp.get('')
def index():
    """Контрагенти, фільтр ?type=Customer|Supplier."""
    query = Partner.query
    partner_type = (request.args.get('type') or '').strip()
    if partner_type:
        query = query.filter(Partner.type == partner_type)
    return jsonify([p.as_dict() for p in query.order_by(Partner.name).all()])
