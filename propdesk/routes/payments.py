from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from ..security import current_user_id
from ..services import payments as payment_service

bp = Blueprint("payments", __name__)


@bp.get("/payments")
@jwt_required()
def list_payments():
    """Payment history, newest payment first"""
    payments = payment_service.payment_history(
        current_user_id(), property_id=request.args.get("property_id", type=int)
    )
    return jsonify({
        "payments": [p.serialize() for p in payments],
        "count": len(payments),
        "total_amount": float(sum(p.amount for p in payments)),
    }), 200


@bp.post("/properties/<int:property_id>/payments")
@jwt_required()
def record_payment(property_id):
    """Record a rent payment and mark the property paid"""
    data = request.get_json(silent=True) or {}
    payment = payment_service.record_payment(current_user_id(), property_id, data)
    return jsonify(payment.serialize()), 201
