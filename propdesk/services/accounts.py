"""Account and session handling: signup, login (including the demo account), logout."""
import logging
import re

from flask import current_app
from flask_jwt_extended import create_access_token

from ..errors import DuplicateEmail, InvalidCredentials, ValidationError, require_text
from ..extensions import db
from ..models import RevokedToken, User

log = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


def normalize_email(email) -> str:
    if email is not None and not isinstance(email, str):
        raise ValidationError("email must be a string")
    return (email or "").strip().lower()


def validate_email(email: str) -> bool:
    """Validate email format"""
    return bool(EMAIL_PATTERN.match(email))


def _demo_email() -> str:
    return normalize_email(current_app.config.get("DEMO_EMAIL"))


def signup(email, password, name) -> User:
    """Create an account; the email must not be registered yet."""
    fields = {"email": email, "password": password, "name": name}
    email = normalize_email(require_text(fields, "email", max_length=255))
    require_text(fields, "password")
    name = require_text(fields, "name", max_length=255)
    if not validate_email(email):
        raise ValidationError("email is not a valid address")

    if email == _demo_email() or User.query.filter_by(email=email).first():
        log.info("Signup rejected for %s: email already registered", email)
        raise DuplicateEmail()

    user = User(email=email, name=name)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    log.info("Created user %s (%s)", user.id, email)
    return user


def _demo_user() -> User:
    email = _demo_email()
    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(email=email, name="Admin", is_demo=True)
        user.set_password(current_app.config["DEMO_PASSWORD"])
        db.session.add(user)
        db.session.commit()
        log.info("Materialized demo user %s", user.id)
    return user


def authenticate(email, password) -> User:
    """Return the user matching the credentials or raise InvalidCredentials."""
    email = normalize_email(email)
    if password is not None and not isinstance(password, str):
        raise ValidationError("password must be a string")
    password = password or ""
    demo_enabled = current_app.config.get("DEMO_ENABLED", False)

    user = User.query.filter_by(email=email).first() if email else None
    if user is not None and user.check_password(password) and (demo_enabled or not user.is_demo):
        return user

    if (demo_enabled and email == _demo_email()
            and password == current_app.config.get("DEMO_PASSWORD")):
        return _demo_user()

    log.warning("Failed login for %s", email or "<blank>")
    raise InvalidCredentials()


def issue_session(user: User, is_new_user: bool = False) -> dict:
    claims = {"email": user.email, "name": user.name, "is_new_user": is_new_user}
    access = create_access_token(identity=str(user.id), additional_claims=claims)
    return {"access_token": access, "user": user.serialize(is_new_user=is_new_user)}


def revoke_token(jti: str, user_id: int) -> None:
    db.session.add(RevokedToken(jti=jti, user_id=user_id))
    db.session.commit()
    log.info("Revoked token for user %s", user_id)
