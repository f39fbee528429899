import smtplib
from unittest.mock import patch

import pytest


def _notify(client, headers, property_id, **fields):
    payload = {"subject": "Water shutoff", "message": "Water is off Tuesday 9-11am.", "type": "maintenance"}
    payload.update(fields)
    return client.post(f"/api/properties/{property_id}/notifications", json=payload, headers=headers)


def _history(client, headers):
    return client.get("/api/notifications", headers=headers).get_json()


def test_sent_notification_is_emailed(app, client, auth_headers, create_property):
    prop = create_property(name="Unit 7", occupant="Jane Doe", occupant_email="jane@example.com")

    with app.extensions["mail"].record_messages() as outbox:
        resp = _notify(client, auth_headers, prop["id"])

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["email"]["status"] == "sent"
    notification = body["notification"]
    assert notification["status"] == "sent"
    assert notification["sent_at"] is not None
    assert notification["recipient_name"] == "Jane Doe"
    assert notification["recipient_email"] == "jane@example.com"
    assert notification["property_name"] == "Unit 7"
    assert notification["type"] == "maintenance"

    assert len(outbox) == 1
    msg = outbox[0]
    assert msg.recipients == ["jane@example.com"]
    assert msg.subject == "Water shutoff"
    assert "Dear Jane Doe" in msg.body
    assert "Property: Unit 7" in msg.body
    assert "Water is off Tuesday 9-11am." in msg.html


def test_failed_delivery_is_still_recorded(app, client, auth_headers, create_property):
    prop = create_property(occupant="Jane", occupant_email="jane@example.com")

    with patch.object(app.extensions["mail"], "send", side_effect=smtplib.SMTPException("connection refused")):
        resp = _notify(client, auth_headers, prop["id"])

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["email"]["status"] == "failed"
    assert body["notification"]["status"] == "failed"
    assert "connection refused" in body["notification"]["error"]
    assert body["notification"]["sent_at"] is None

    history = _history(client, auth_headers)
    assert history["count"] == 1
    assert history["notifications"][0]["status"] == "failed"


def test_header_injection_is_a_failed_delivery(app, client, auth_headers, create_property):
    prop = create_property(occupant="Jane", occupant_email="jane@example.com")

    with app.extensions["mail"].record_messages() as outbox:
        resp = _notify(client, auth_headers, prop["id"], subject="Water\nshutoff")

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["email"]["status"] == "failed"
    assert body["notification"]["status"] == "failed"
    assert body["notification"]["error"].startswith("Failed to send email notification")
    assert outbox == []


def test_no_recipient_email_is_pending(app, client, auth_headers, create_property):
    prop = create_property(occupant="Jane")

    with app.extensions["mail"].record_messages() as outbox:
        resp = _notify(client, auth_headers, prop["id"])

    body = resp.get_json()
    assert body["email"]["status"] == "skipped"
    assert body["notification"]["status"] == "pending"
    assert body["notification"]["recipient_email"] is None
    assert outbox == []


def test_recipient_email_override(app, client, auth_headers, create_property):
    prop = create_property(occupant="Jane", occupant_email="jane@example.com")

    with app.extensions["mail"].record_messages() as outbox:
        _notify(client, auth_headers, prop["id"], recipient_email="landlord-copy@example.com")

    assert outbox[0].recipients == ["landlord-copy@example.com"]


def test_no_occupant_creates_nothing(app, client, auth_headers, create_property):
    prop = create_property()

    with app.extensions["mail"].record_messages() as outbox:
        resp = _notify(client, auth_headers, prop["id"])

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "This property has no occupant to send notification to."
    assert _history(client, auth_headers)["count"] == 0
    assert outbox == []


@pytest.mark.parametrize("fields, message", [
    ({"subject": "  "}, "subject is required"),
    ({"message": ""}, "message is required"),
    ({"subject": 5}, "subject must be a string"),
    ({"message": ["not", "text"]}, "message must be a string"),
    ({"subject": "x" * 256}, "subject must be at most 255 characters"),
    ({"type": "spam"}, "type must be one of: general, reminder, maintenance, payment, announcement"),
])
def test_notification_validation(client, auth_headers, create_property, fields, message):
    prop = create_property(occupant="Jane", occupant_email="jane@example.com")
    resp = _notify(client, auth_headers, prop["id"], **fields)
    assert resp.status_code == 400
    assert resp.get_json()["message"] == message
    assert _history(client, auth_headers)["count"] == 0


def test_type_defaults_to_general(client, auth_headers, create_property):
    prop = create_property(occupant="Jane")
    resp = client.post(f"/api/properties/{prop['id']}/notifications",
                       json={"subject": "Hello", "message": "Welcome"}, headers=auth_headers)
    assert resp.get_json()["notification"]["type"] == "general"


def test_history_newest_first_and_kept_after_delete(client, auth_headers, create_property):
    prop = create_property(occupant="Jane")
    _notify(client, auth_headers, prop["id"], subject="First")
    _notify(client, auth_headers, prop["id"], subject="Second")
    client.delete(f"/api/properties/{prop['id']}", headers=auth_headers)

    history = _history(client, auth_headers)
    assert [n["subject"] for n in history["notifications"]] == ["Second", "First"]


def test_notifications_are_per_user(client, auth_headers, other_headers, create_property):
    mine = create_property(occupant="Jane")
    _notify(client, auth_headers, mine["id"])

    assert _history(client, other_headers)["count"] == 0
    assert _notify(client, other_headers, mine["id"]).status_code == 404


class TestDispatchEndpoint:
    def test_requires_auth(self, client):
        resp = client.post("/api/send-notification", json={"to": "a@example.com", "subject": "s", "message": "m"})
        assert resp.status_code == 401

    @pytest.mark.parametrize("missing", ["to", "subject", "message"])
    def test_missing_fields(self, client, auth_headers, missing):
        payload = {"to": "a@example.com", "subject": "s", "message": "m"}
        del payload[missing]
        resp = client.post("/api/send-notification", json=payload, headers=auth_headers)
        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Missing required fields"

    def test_sends_email(self, app, client, auth_headers):
        with app.extensions["mail"].record_messages() as outbox:
            resp = client.post("/api/send-notification", json={
                "to": "tenant@example.com",
                "subject": "Rent reminder",
                "message": "Rent is due on the 1st.",
                "propertyName": "Unit 3",
            }, headers=auth_headers)

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["success"] is True
        assert body["message"] == "Email notification sent successfully"
        assert body["timestamp"].endswith("Z")

        assert len(outbox) == 1
        assert outbox[0].recipients == ["tenant@example.com"]
        assert "Dear Resident" in outbox[0].body
        assert "Property: Unit 3" in outbox[0].body

    def test_transport_failure(self, app, client, auth_headers):
        with patch.object(app.extensions["mail"], "send", side_effect=OSError("network unreachable")):
            resp = client.post("/api/send-notification", json={
                "to": "tenant@example.com", "subject": "s", "message": "m",
            }, headers=auth_headers)

        assert resp.status_code == 502
        body = resp.get_json()
        assert body["error"] == "delivery_failed"
        assert body["message"].startswith("Failed to send email notification")

    def test_rejected_header_is_bad_gateway(self, client, auth_headers):
        resp = client.post("/api/send-notification", json={
            "to": "tenant@example.com", "subject": "a\nb", "message": "m",
        }, headers=auth_headers)
        assert resp.status_code == 502
        assert resp.get_json()["error"] == "delivery_failed"

    def test_non_string_fields(self, client, auth_headers):
        resp = client.post("/api/send-notification", json={
            "to": "tenant@example.com", "subject": 42, "message": "m",
        }, headers=auth_headers)
        assert resp.status_code == 400
        assert resp.get_json()["message"] == "to, subject and message must be strings"
