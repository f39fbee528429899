import logging
from datetime import date
from decimal import Decimal, InvalidOperation

from sqlalchemy import or_

from ..errors import ValidationError, require_fields
from ..extensions import db
from ..models import PAYMENT_STATUSES, PROPERTY_STATUSES, PROPERTY_TYPES, Property
from ..security import get_owned_or_404
from ..utils.dates import first_day_of_next_month, parse_date

log = logging.getLogger(__name__)


def clean_str(value, max_length=255):
    """Blank strings become None; everything else is stripped text."""
    if value is None:
        return None
    value = str(value).strip()
    return value[:max_length] if value else None


def parse_decimal(value, field, minimum=0):
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not number.is_finite():
        raise ValidationError(f"{field} must be a number")
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field} must be at least {minimum}")
    return number


def parse_int(value, field):
    number = parse_decimal(value, field)
    if number is None:
        return None
    if number != number.to_integral_value():
        raise ValidationError(f"{field} must be a whole number")
    return int(number)


def check_choice(value, field, choices):
    if value not in choices:
        raise ValidationError(f"{field} must be one of: {', '.join(choices)}")
    return value


def _assign(prop: Property, data: dict, property_type):
    """Copy the user-editable fields from `data` onto `prop` (full replace)."""
    prop.name = clean_str(data.get("name"))
    prop.rent = parse_decimal(data.get("rent"), "rent")
    prop.status = check_choice(data.get("status") or "vacant", "status", PROPERTY_STATUSES)
    if property_type is not None:
        check_choice(property_type, "property_type", PROPERTY_TYPES)
    prop.property_type = property_type

    prop.address = clean_str(data.get("address"), 512)
    prop.bedrooms = parse_int(data.get("bedrooms"), "bedrooms")
    prop.bathrooms = parse_decimal(data.get("bathrooms"), "bathrooms")
    prop.square_feet = parse_int(data.get("square_feet"), "square_feet")
    if prop.property_type == "land":
        prop.bedrooms = None
        prop.bathrooms = None

    prop.occupant = clean_str(data.get("occupant"))
    prop.occupant_email = clean_str(data.get("occupant_email"))
    prop.occupant_phone = clean_str(data.get("occupant_phone"), 50)
    prop.stay_period = clean_str(data.get("stay_period"), 100)
    prop.lease_start_date = parse_date(data.get("lease_start_date"), "lease_start_date")
    prop.lease_end_date = parse_date(data.get("lease_end_date"), "lease_end_date")
    if prop.lease_start_date and prop.lease_end_date and prop.lease_end_date < prop.lease_start_date:
        raise ValidationError("lease_end_date must not be before lease_start_date")


def add_property(user_id: int, data: dict) -> Property:
    """Create a property owned by `user_id` and derive its initial payment state."""
    require_fields(data, "name", "rent", "property_type")

    prop = Property(user_id=user_id)
    _assign(prop, data, data.get("property_type"))

    if prop.has_occupant:
        prop.payment_status = "pending"
        prop.next_payment_due = first_day_of_next_month()
    else:
        prop.payment_status = "paid"
        prop.next_payment_due = None

    db.session.add(prop)
    db.session.commit()
    log.info("User %s added property %s (%s)", user_id, prop.id, prop.name)
    return prop


def edit_property(user_id: int, property_id: int, data: dict) -> Property:
    """
    Replace the editable fields of a property.

    Payment status only changes when the request sets it explicitly; the
    payment dates are never touched here.
    """
    prop = get_owned_or_404(Property, property_id, user_id)
    require_fields(data, "name", "rent")

    _assign(prop, data, data.get("property_type") or prop.property_type)

    payment_status = data.get("payment_status")
    if payment_status:
        prop.payment_status = check_choice(payment_status, "payment_status", PAYMENT_STATUSES)

    db.session.commit()
    log.info("User %s edited property %s", user_id, prop.id)
    return prop


def delete_property(user_id: int, property_id: int) -> None:
    # Payments and notifications keep their snapshot of this property
    prop = get_owned_or_404(Property, property_id, user_id)
    db.session.delete(prop)
    db.session.commit()
    log.info("User %s deleted property %s", user_id, property_id)


def get_property(user_id: int, property_id: int) -> Property:
    return get_owned_or_404(Property, property_id, user_id)


def list_properties(user_id: int, q=None, status=None, payment_status=None):
    """Return (total, filtered properties) for one user."""
    base = Property.query.filter(Property.user_id == user_id)
    total = base.count()

    query = base
    q = (q or "").strip()
    if q:
        like = f"%{q}%"
        query = query.filter(or_(
            Property.name.ilike(like),
            Property.occupant.ilike(like),
            Property.address.ilike(like),
        ))
    if status and status != "all":
        query = query.filter(Property.status == status)
    if payment_status and payment_status != "all":
        query = query.filter(Property.payment_status == payment_status)

    return total, query.order_by(Property.created_at, Property.id).all()


def mark_overdue(today: date = None) -> list:
    """Move occupied properties whose rent due date has passed from pending to overdue."""
    today = today or date.today()
    overdue = Property.query.filter(
        Property.occupant.isnot(None),
        Property.payment_status == "pending",
        Property.next_payment_due < today,
    ).all()

    for prop in overdue:
        log.warning("Property %s (user %s) is overdue since %s", prop.id, prop.user_id, prop.next_payment_due)
        prop.payment_status = "overdue"

    db.session.commit()
    return overdue
