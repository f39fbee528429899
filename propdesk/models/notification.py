from datetime import datetime

from ..extensions import db

NOTIFICATION_TYPES = ('general', 'reminder', 'maintenance', 'payment', 'announcement')
NOTIFICATION_STATUSES = ('sent', 'pending', 'failed')


class Notification(db.Model):
    __tablename__ = 'notifications'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    property_id = db.Column(db.Integer, nullable=False, index=True)
    property_name = db.Column(db.String(255), nullable=False)

    # Recipient snapshot
    recipient_name = db.Column(db.String(255), nullable=False)
    recipient_email = db.Column(db.String(255), nullable=True)

    subject = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=False)
    type = db.Column(db.String(20), nullable=False, default='general')

    # sent: delivered by email, pending: recorded only, failed: email error
    status = db.Column(db.String(20), nullable=False, default='pending')
    error = db.Column(db.String(512), nullable=True)
    sent_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<Notification {self.id}: {self.subject} ({self.status})>'

    def serialize(self):
        return {
            'id': self.id,
            'user_id': str(self.user_id),
            'property_id': self.property_id,
            'property_name': self.property_name,
            'recipient_name': self.recipient_name,
            'recipient_email': self.recipient_email,
            'subject': self.subject,
            'message': self.message,
            'type': self.type,
            'status': self.status,
            'error': self.error,
            'sent_at': self.sent_at.isoformat() if self.sent_at else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
