from flask import Blueprint

warehouse_bp = Blueprint(
    "warehouse",
    __name__,
    url_prefix="/api/inventory"
)

from . import routes  # noqa: F401
