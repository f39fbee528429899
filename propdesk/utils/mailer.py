import logging
import smtplib

from flask import current_app, render_template
from flask_mail import BadHeaderError, Message

from ..errors import DeliveryError

log = logging.getLogger(__name__)


def send_email(to_email: str, subject: str, body: str, html: str = None):
    """
    Send email using Flask-Mail configuration.
    Raises DeliveryError if mail is not configured, the headers are rejected
    or the transport fails.
    """
    mail = current_app.extensions.get('mail')
    if mail is None:
        log.warning("[EMAIL - NOT CONFIGURED] To: %s | Subject: %s", to_email, subject)
        raise DeliveryError("Email delivery is not configured")

    msg = Message(
        subject=subject,
        recipients=[to_email],
        body=body,
        html=html,
        sender=current_app.config.get('MAIL_DEFAULT_SENDER'),
    )

    try:
        mail.send(msg)
    except (BadHeaderError, smtplib.SMTPException, OSError) as e:
        reason = str(e) or e.__class__.__name__
        log.warning("[EMAIL - ERROR] Failed to send to %s: %s", to_email, reason)
        raise DeliveryError(f"Failed to send email notification: {reason}") from e

    log.info("[EMAIL - SENT] To: %s | Subject: %s", to_email, subject)


def send_notification_email(to: str, subject: str, message: str,
                            property_name: str = None, occupant_name: str = None):
    """Render the resident notification templates and send them to `to`."""
    context = {
        'subject': subject,
        'message': message,
        'property_name': property_name or '',
        'occupant_name': occupant_name or 'Resident',
    }
    body = render_template('email/notification.txt', **context)
    html = render_template('email/notification.html', **context)
    send_email(to, subject, body, html=html)
