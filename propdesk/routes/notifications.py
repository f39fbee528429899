from datetime import datetime

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from ..errors import ValidationError
from ..security import current_user_id
from ..services import notifications as notification_service
from ..utils.mailer import send_notification_email

bp = Blueprint("notifications", __name__)


@bp.get("/notifications")
@jwt_required()
def list_notifications():
    notifications = notification_service.notification_history(
        current_user_id(), property_id=request.args.get("property_id", type=int)
    )
    return jsonify({
        "notifications": [n.serialize() for n in notifications],
        "count": len(notifications),
    }), 200


@bp.post("/properties/<int:property_id>/notifications")
@jwt_required()
def send_notification(property_id):
    """Record a notification for the occupant, then try to email it"""
    data = request.get_json(silent=True) or {}
    notification, email = notification_service.send_notification(current_user_id(), property_id, data)
    return jsonify({"notification": notification.serialize(), "email": email}), 201


@bp.post("/send-notification")
@jwt_required()
def send_notification_email_endpoint():
    """Email dispatch endpoint: {to, subject, message, propertyName, occupantName}"""
    data = request.get_json(silent=True) or {}
    to = data.get("to")
    subject = data.get("subject")
    message = data.get("message")
    if not to or not subject or not message:
        raise ValidationError("Missing required fields")
    if not all(isinstance(value, str) for value in (to, subject, message)):
        raise ValidationError("to, subject and message must be strings")

    # DeliveryError propagates as 502
    send_notification_email(
        to=to,
        subject=subject,
        message=message,
        property_name=data.get("propertyName") or data.get("property_name"),
        occupant_name=data.get("occupantName") or data.get("occupant_name"),
    )
    return jsonify({
        "success": True,
        "message": "Email notification sent successfully",
        "timestamp": datetime.utcnow().isoformat() + "Z",
    }), 200
