from datetime import datetime

from flask import current_app

from ..extensions import db
from ..utils.dates import days_until_expiry, is_lease_expiring_soon, iso

PROPERTY_STATUSES = ('vacant', 'occupied', 'maintenance')
PROPERTY_TYPES = ('apartment', 'house', 'commercial', 'land')
PAYMENT_STATUSES = ('paid', 'pending', 'overdue')


class Property(db.Model):
    __tablename__ = 'properties'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    rent = db.Column(db.Numeric(12, 2), nullable=False)
    status = db.Column(db.String(20), default='vacant', nullable=False)  # vacant, occupied, maintenance
    property_type = db.Column(db.String(20), nullable=True)  # apartment, house, commercial, land

    # Property details
    address = db.Column(db.String(512), nullable=True)
    bedrooms = db.Column(db.Integer, nullable=True)
    bathrooms = db.Column(db.Numeric(3, 1), nullable=True)
    square_feet = db.Column(db.Integer, nullable=True)

    # Occupant
    occupant = db.Column(db.String(255), nullable=True)
    occupant_email = db.Column(db.String(255), nullable=True)
    occupant_phone = db.Column(db.String(50), nullable=True)
    stay_period = db.Column(db.String(100), nullable=True)
    lease_start_date = db.Column(db.Date, nullable=True)
    lease_end_date = db.Column(db.Date, nullable=True)

    # Derived payment state
    payment_status = db.Column(db.String(20), default='pending', nullable=False, index=True)
    last_payment_date = db.Column(db.Date, nullable=True)
    next_payment_due = db.Column(db.Date, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<Property {self.id}: {self.name}>'

    @property
    def has_occupant(self):
        return bool(self.occupant)

    def serialize(self, window_days=None):
        if window_days is None:
            window_days = current_app.config.get('LEASE_EXPIRY_WINDOW_DAYS', 30)
        return {
            'id': self.id,
            'user_id': str(self.user_id),
            'name': self.name,
            'rent': float(self.rent) if self.rent is not None else None,
            'status': self.status,
            'property_type': self.property_type,
            'address': self.address,
            'bedrooms': self.bedrooms,
            'bathrooms': float(self.bathrooms) if self.bathrooms is not None else None,
            'square_feet': self.square_feet,
            'occupant': self.occupant,
            'occupant_email': self.occupant_email,
            'occupant_phone': self.occupant_phone,
            'stay_period': self.stay_period,
            'lease_start_date': iso(self.lease_start_date),
            'lease_end_date': iso(self.lease_end_date),
            'payment_status': self.payment_status,
            'last_payment_date': iso(self.last_payment_date),
            'next_payment_due': iso(self.next_payment_due),
            'days_until_lease_expiry': days_until_expiry(self.lease_end_date),
            'lease_expiring_soon': is_lease_expiring_soon(self.lease_end_date, window_days),
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
