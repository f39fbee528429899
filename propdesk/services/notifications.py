"""
Resident notifications.

The notification row is committed before any email is attempted, so history is
kept even when delivery fails. The stored status tracks the delivery outcome:

  sent     the email was handed to the mail server
  failed   the mail call raised; the reason is kept in `error`
  pending  no recipient email, recorded only
"""
import logging
from datetime import datetime

from ..errors import DeliveryError, ValidationError, require_text
from ..extensions import db
from ..models import NOTIFICATION_TYPES, Notification, Property
from ..security import get_owned_or_404
from ..utils.mailer import send_notification_email
from .properties import check_choice, clean_str

log = logging.getLogger(__name__)


def send_notification(user_id: int, property_id: int, data: dict):
    """Record a notification for the property's occupant and try to email it.

    Returns (notification, email_result) where email_result has a `status` of
    sent, failed or skipped and a human readable `message`.
    """
    prop = get_owned_or_404(Property, property_id, user_id)
    if not prop.has_occupant:
        raise ValidationError("This property has no occupant to send notification to.")
    subject = require_text(data, "subject", max_length=255)
    message = require_text(data, "message")
    kind = check_choice(data.get("type") or "general", "type", NOTIFICATION_TYPES)

    if "recipient_email" in data:
        recipient_email = clean_str(data.get("recipient_email"))
    else:
        recipient_email = prop.occupant_email

    notification = Notification(
        user_id=user_id,
        property_id=prop.id,
        property_name=prop.name,
        recipient_name=prop.occupant,
        recipient_email=recipient_email,
        subject=subject,
        message=message,
        type=kind,
        status="pending",
    )
    db.session.add(notification)
    db.session.commit()
    log.info("User %s recorded notification %s for property %s", user_id, notification.id, prop.id)

    if not recipient_email:
        return notification, {"status": "skipped", "message": "No recipient email; notification recorded only"}

    try:
        send_notification_email(
            to=recipient_email,
            subject=notification.subject,
            message=notification.message,
            property_name=prop.name,
            occupant_name=prop.occupant,
        )
    except DeliveryError as e:
        notification.status = "failed"
        notification.error = e.message[:512]
        db.session.commit()
        log.warning("Notification %s recorded but email to %s failed: %s", notification.id, recipient_email, e.message)
        return notification, {"status": "failed", "message": e.message}

    notification.status = "sent"
    notification.sent_at = datetime.utcnow()
    db.session.commit()
    return notification, {"status": "sent", "message": "Notification sent via email"}


def notification_history(user_id: int, property_id: int = None) -> list:
    query = Notification.query.filter(Notification.user_id == user_id)
    if property_id is not None:
        query = query.filter(Notification.property_id == property_id)
    return query.order_by(Notification.created_at.desc(), Notification.id.desc()).all()
