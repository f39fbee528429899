from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from ..security import current_user_id
from ..services import store

bp = Blueprint("storage", __name__)


@bp.get("/store")
@jwt_required()
def export_all():
    """All three collections of the caller, for backup"""
    user_id = current_user_id()
    return jsonify({name: store.get_all(user_id, name) for name in store.COLLECTIONS}), 200


@bp.get("/store/<collection>")
@jwt_required()
def get_collection(collection):
    rows = store.get_all(current_user_id(), collection)
    return jsonify({collection: rows, "count": len(rows)}), 200


@bp.put("/store/<collection>")
@jwt_required()
def replace_collection(collection):
    """Whole-collection replace; body is a list or {<collection>: [...]}"""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        data = data.get(collection)
    rows = store.put_all(current_user_id(), collection, data)
    return jsonify({collection: rows, "count": len(rows)}), 200
