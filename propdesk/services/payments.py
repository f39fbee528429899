import logging

from ..errors import require_fields
from ..extensions import db
from ..models import PAYMENT_METHODS, PAYMENT_RECORD_STATUSES, Payment, Property
from ..security import get_owned_or_404
from ..utils.dates import one_month_after, parse_date
from .properties import check_choice, clean_str, parse_decimal

log = logging.getLogger(__name__)


def record_payment(user_id: int, property_id: int, data: dict) -> Payment:
    """
    Append a payment for a property and mark the property paid.

    The next due date is one calendar month after the payment date. The amount
    is not reconciled against the rent.
    """
    prop = get_owned_or_404(Property, property_id, user_id)
    require_fields(data, "amount", "payment_date")

    amount = parse_decimal(data["amount"], "amount")
    payment_date = parse_date(data["payment_date"], "payment_date")
    method = check_choice(data.get("payment_method") or "bank_transfer", "payment_method", PAYMENT_METHODS)
    status = check_choice(data.get("status") or "completed", "status", PAYMENT_RECORD_STATUSES)

    payment = Payment(
        user_id=user_id,
        property_id=prop.id,
        property_name=prop.name,
        occupant_name=prop.occupant or "Unknown",
        amount=amount,
        payment_date=payment_date,
        payment_method=method,
        status=status,
        receipt_number=clean_str(data.get("receipt_number"), 100),
        notes=clean_str(data.get("notes"), 5000),
    )
    db.session.add(payment)

    prop.payment_status = "paid"
    prop.last_payment_date = payment_date
    prop.next_payment_due = one_month_after(payment_date)

    db.session.commit()
    log.info("User %s recorded payment %s of %s for property %s", user_id, payment.id, amount, prop.id)
    return payment


def payment_history(user_id: int, property_id: int = None) -> list:
    """Payments for one user, newest payment date first."""
    query = Payment.query.filter(Payment.user_id == user_id)
    if property_id is not None:
        query = query.filter(Payment.property_id == property_id)
    return query.order_by(Payment.payment_date.desc(), Payment.created_at.desc(), Payment.id.desc()).all()
