from datetime import datetime

from ..extensions import db
from ..utils.dates import iso

PAYMENT_METHODS = ('cash', 'bank_transfer', 'card', 'check')
PAYMENT_RECORD_STATUSES = ('completed', 'pending', 'failed')


class Payment(db.Model):
    __tablename__ = 'payments'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    # Not a foreign key: history outlives the property
    property_id = db.Column(db.Integer, nullable=False, index=True)

    # Snapshot at creation time
    property_name = db.Column(db.String(255), nullable=False)
    occupant_name = db.Column(db.String(255), nullable=False)

    # Payment details
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    payment_date = db.Column(db.Date, nullable=False, index=True)
    payment_method = db.Column(db.String(20), nullable=False, default='bank_transfer')
    status = db.Column(db.String(20), nullable=False, default='completed')  # completed, pending, failed
    receipt_number = db.Column(db.String(100), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<Payment {self.id}: {self.amount} - {self.status}>'

    def serialize(self):
        return {
            "id": self.id,
            "user_id": str(self.user_id),
            "property_id": self.property_id,
            "property_name": self.property_name,
            "occupant_name": self.occupant_name,
            "amount": float(self.amount),
            "payment_date": iso(self.payment_date),
            "payment_method": self.payment_method,
            "status": self.status,
            "receipt_number": self.receipt_number,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
