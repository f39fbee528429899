"""
Per-user persistence boundary.

Each user owns three collections. Callers only ever read a whole collection
or replace it; the replace never touches another user's rows.
"""
import logging
from datetime import datetime

from ..errors import ValidationError
from ..extensions import db
from ..models import (
    NOTIFICATION_STATUSES, NOTIFICATION_TYPES, PAYMENT_METHODS, PAYMENT_RECORD_STATUSES,
    PAYMENT_STATUSES, PROPERTY_STATUSES, PROPERTY_TYPES, Notification, Payment, Property,
)
from ..utils.dates import parse_date
from .properties import check_choice, parse_decimal, parse_int

log = logging.getLogger(__name__)

COLLECTIONS = {
    "properties": Property,
    "payments": Payment,
    "notifications": Notification,
}

CHOICES = {
    "properties": {
        "status": PROPERTY_STATUSES,
        "property_type": PROPERTY_TYPES,
        "payment_status": PAYMENT_STATUSES,
    },
    "payments": {
        "payment_method": PAYMENT_METHODS,
        "status": PAYMENT_RECORD_STATUSES,
    },
    "notifications": {
        "type": NOTIFICATION_TYPES,
        "status": NOTIFICATION_STATUSES,
    },
}

# Never taken from the incoming rows
_OWNED_COLUMNS = ("user_id",)


def _model_for(collection: str):
    model = COLLECTIONS.get(collection)
    if model is None:
        raise ValidationError(f"unknown collection '{collection}'; expected one of: {', '.join(COLLECTIONS)}")
    return model


def _coerce(column, value, field):
    if value is None or value == "":
        return None
    if isinstance(column.type, db.DateTime):
        try:
            return datetime.fromisoformat(str(value).replace("Z", "+00:00")).replace(tzinfo=None)
        except ValueError:
            raise ValidationError(f"{field} must be an ISO timestamp")
    if isinstance(column.type, db.Date):
        return parse_date(value, field)
    if isinstance(column.type, db.Numeric):
        return parse_decimal(value, field)
    if isinstance(column.type, db.Integer):
        return parse_int(value, field)
    text = str(value)
    length = getattr(column.type, "length", None)
    if length and len(text) > length:
        raise ValidationError(f"{field} must be at most {length} characters")
    return text


def _build_row(model, collection: str, user_id: int, index: int, row: dict):
    if not isinstance(row, dict):
        raise ValidationError(f"{collection}[{index}] must be an object")

    record = model(user_id=user_id)
    choices = CHOICES[collection]
    for column in model.__table__.columns:
        name = column.name
        if name in _OWNED_COLUMNS or name not in row:
            continue
        field = f"{collection}[{index}].{name}"
        value = _coerce(column, row[name], field)
        if value is not None and name in choices:
            check_choice(value, field, choices[name])
        setattr(record, name, value)

    for column in model.__table__.columns:
        if column.name in _OWNED_COLUMNS or column.primary_key:
            continue
        if (not column.nullable and column.default is None
                and getattr(record, column.name) is None):
            raise ValidationError(f"{collection}[{index}].{column.name} is required")
    return record


def get_all(user_id: int, collection: str) -> list:
    model = _model_for(collection)
    rows = model.query.filter(model.user_id == user_id).order_by(model.id).all()
    return [row.serialize() for row in rows]


def put_all(user_id: int, collection: str, rows) -> list:
    """Replace the user's whole collection with `rows`, re-owned by the user."""
    model = _model_for(collection)
    if not isinstance(rows, list):
        raise ValidationError(f"{collection} must be a list")

    records = [_build_row(model, collection, user_id, i, row) for i, row in enumerate(rows)]

    wanted_ids = [r.id for r in records if r.id is not None]
    if len(wanted_ids) != len(set(wanted_ids)):
        raise ValidationError(f"{collection} contains duplicate ids")
    if wanted_ids:
        taken = db.session.query(model.id).filter(
            model.id.in_(wanted_ids), model.user_id != user_id
        ).first()
        if taken is not None:
            raise ValidationError(f"{collection} id {taken[0]} belongs to another account")

    model.query.filter(model.user_id == user_id).delete()
    db.session.add_all(records)
    db.session.commit()
    log.info("User %s replaced %s with %d rows", user_id, collection, len(records))
    return [r.serialize() for r in records]
