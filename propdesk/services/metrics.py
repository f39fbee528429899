from ..models import Notification, Payment, Property
from ..utils.dates import is_lease_expiring_soon


def compute_property_stats(properties, window_days=30, now=None) -> dict:
    """Dashboard counters over a full property set; recomputed on every call."""
    total = len(properties)
    occupied = sum(1 for p in properties if p.occupant)
    return {
        'total_properties': total,
        'occupied': occupied,
        'vacant': total - occupied,
        'total_rent': float(sum((p.rent or 0) for p in properties)),
        'overdue': sum(1 for p in properties if p.payment_status == 'overdue'),
        'expiring_soon': sum(
            1 for p in properties if is_lease_expiring_soon(p.lease_end_date, window_days, now=now)
        ),
    }


def dashboard_stats(user_id: int, window_days=30) -> dict:
    properties = Property.query.filter_by(user_id=user_id).all()
    stats = compute_property_stats(properties, window_days)

    payments = Payment.query.filter_by(user_id=user_id, status='completed').all()
    stats['total_collected'] = float(sum(p.amount for p in payments))
    stats['notifications_sent'] = Notification.query.filter_by(user_id=user_id, status='sent').count()
    return stats
