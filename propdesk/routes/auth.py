# propdesk/routes/auth.py
from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt, jwt_required

from ..errors import NotFound, ValidationError
from ..extensions import db
from ..models import User
from ..security import current_user_id
from ..services import accounts

bp = Blueprint("auth", __name__)


@bp.post("/auth/signup")
def signup():
    data = request.get_json(silent=True) or {}
    user = accounts.signup(data.get("email"), data.get("password"), data.get("name"))
    return jsonify(accounts.issue_session(user, is_new_user=True)), 201


@bp.post("/auth/login")
def login():
    data = request.get_json(silent=True) or {}
    email = data.get("email") or data.get("username")
    password = data.get("password") or ""
    if not email or not password:
        raise ValidationError("email and password required")

    user = accounts.authenticate(email, password)
    return jsonify(accounts.issue_session(user, is_new_user=False)), 200


@bp.post("/auth/logout")
@jwt_required()
def logout():
    accounts.revoke_token(get_jwt()["jti"], current_user_id())
    return jsonify(message="Logged out"), 200


@bp.get("/auth/me")
@jwt_required()
def me():
    user = db.session.get(User, current_user_id())
    if not user:
        raise NotFound("user not found")
    return jsonify(user.serialize(is_new_user=bool(get_jwt().get("is_new_user")))), 200
