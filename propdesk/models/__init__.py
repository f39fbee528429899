from ..extensions import db

from .user import User, RevokedToken
from .property import Property, PROPERTY_STATUSES, PROPERTY_TYPES, PAYMENT_STATUSES
from .payment import Payment, PAYMENT_METHODS, PAYMENT_RECORD_STATUSES
from .notification import Notification, NOTIFICATION_TYPES, NOTIFICATION_STATUSES
