import sys, os
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from flask import Flask, jsonify, request
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException
from config import Config
from extensions import db
from register_blueprints import register_blueprints
from modules.common.errors import ServiceError, from_integrity_error


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    os.makedirs(app.instance_path, exist_ok=True)

    db.init_app(app)
    register_blueprints(app)

    # Імпорт моделей, які не використовуються в blueprint'ах (лише схема)
    from modules.reference.companies.models import Company, Branch  # noqa: F401
    from modules.accounting.models import Account, Journal, JournalEntry  # noqa: F401
    from modules.audit.models import AuditLog  # noqa: F401

    with app.app_context():
        db.create_all()
        if app.config.get("SEED_DEMO_DATA"):
            from modules.common.seed import seed_demo_data
            seed_demo_data()

    @app.get('/')
    def index():
        return jsonify({"name": "erp", "status": "ok"})

    # ── помилки сервісного шару: різні коди для validation / not found / conflict
    def _service_error_handler(e: ServiceError):
        app.logger.warning(f"{e.kind} on {request.method} {request.path}: {e.message}")
        return jsonify(e.as_dict()), e.status_code

    # ── IntegrityError, що вискочив поза atomic()
    def _integrity_error_handler(e):
        db.session.rollback()
        app.logger.warning(f"IntegrityError caught: {getattr(e, 'orig', e)}")
        err = from_integrity_error(e)
        return jsonify(err.as_dict()), err.status_code

    def _http_error_handler(e: HTTPException):
        if not request.path.startswith('/api/'):
            return e
        return jsonify({"error": e.description, "kind": e.name.lower().replace(' ', '_')}), e.code

    # ✅ ЯВНО реєструємо (працює для всіх blueprint’ів)
    app.register_error_handler(ServiceError, _service_error_handler)
    app.register_error_handler(IntegrityError, _integrity_error_handler)
    app.register_error_handler(HTTPException, _http_error_handler)

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 3000)), debug=True)
