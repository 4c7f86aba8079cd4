from flask import Blueprint, jsonify

from modules.crm.models import Lead

leads_bp = Blueprint('leads', __name__, url_prefix='/api/leads')


@leads_bp.get('')
def index():
    leads = Lead.query.order_by(Lead.id).all()
    return jsonify([lead.as_dict() for lead in leads])
