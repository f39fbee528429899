from .auth import bp as auth_bp
from .dashboard import bp as dashboard_bp
from .notifications import bp as notifications_bp
from .payments import bp as payments_bp
from .properties import bp as properties_bp
from .storage import bp as storage_bp

BLUEPRINTS = (auth_bp, properties_bp, payments_bp, notifications_bp, dashboard_bp, storage_bp)

__all__ = [
    "BLUEPRINTS", "auth_bp", "dashboard_bp", "notifications_bp",
    "payments_bp", "properties_bp", "storage_bp",
]
