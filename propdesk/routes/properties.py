from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required

from ..security import current_user_id
from ..services import properties as property_service

bp = Blueprint("properties", __name__)


@bp.get("/properties")
@jwt_required()
def list_properties():
    """Get the caller's properties with optional search and filters"""
    total, items = property_service.list_properties(
        current_user_id(),
        q=request.args.get("q"),
        status=request.args.get("status"),
        payment_status=request.args.get("payment_status"),
    )
    window = current_app.config["LEASE_EXPIRY_WINDOW_DAYS"]
    return jsonify({
        "total": total,
        "count": len(items),
        "properties": [p.serialize(window) for p in items],
    }), 200


@bp.post("/properties")
@jwt_required()
def create_property():
    """Create a new property"""
    data = request.get_json(silent=True) or {}
    prop = property_service.add_property(current_user_id(), data)
    return jsonify(prop.serialize()), 201


@bp.get("/properties/<int:property_id>")
@jwt_required()
def get_property(property_id):
    prop = property_service.get_property(current_user_id(), property_id)
    return jsonify(prop.serialize()), 200


@bp.route("/properties/<int:property_id>", methods=["PUT", "PATCH"])
@jwt_required()
def update_property(property_id):
    """Replace property details; payment_status only changes when given"""
    data = request.get_json(silent=True) or {}
    prop = property_service.edit_property(current_user_id(), property_id, data)
    return jsonify(prop.serialize()), 200


@bp.delete("/properties/<int:property_id>")
@jwt_required()
def delete_property(property_id):
    property_service.delete_property(current_user_id(), property_id)
    return jsonify({"message": "Property deleted successfully", "id": property_id}), 200
