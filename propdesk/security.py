# propdesk/security.py
from flask import jsonify
from flask_jwt_extended import get_jwt_identity

from .errors import NotFound
from .extensions import db, jwt
from .models import RevokedToken


def current_user_id() -> int:
    """User id of the verified JWT; call only behind @jwt_required()."""
    return int(get_jwt_identity())


def get_owned_or_404(model, record_id, user_id):
    """Row-level lookup: a record owned by someone else is reported as missing."""
    record = db.session.query(model).filter_by(id=record_id, user_id=user_id).first()
    if record is None:
        raise NotFound(f"{model.__name__} {record_id} not found")
    return record


@jwt.token_in_blocklist_loader
def _token_revoked(jwt_header, jwt_payload):
    jti = jwt_payload.get("jti")
    return db.session.query(RevokedToken.id).filter_by(jti=jti).first() is not None


@jwt.unauthorized_loader
def _missing_token(reason):
    return jsonify(error="unauthorized", message=reason), 401


@jwt.invalid_token_loader
def _invalid_token(reason):
    return jsonify(error="unauthorized", message=reason), 401


@jwt.expired_token_loader
def _expired_token(jwt_header, jwt_payload):
    return jsonify(error="unauthorized", message="Token has expired"), 401


@jwt.revoked_token_loader
def _revoked_token(jwt_header, jwt_payload):
    return jsonify(error="unauthorized", message="Token has been revoked"), 401
