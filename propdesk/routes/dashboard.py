from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import jwt_required

from ..security import current_user_id
from ..services.metrics import dashboard_stats

bp = Blueprint("dashboard", __name__)


@bp.get("/dashboard/stats")
@jwt_required()
def stats():
    """Dashboard counters, recomputed from the full property set"""
    window = current_app.config["LEASE_EXPIRY_WINDOW_DAYS"]
    return jsonify(dashboard_stats(current_user_id(), window)), 200
