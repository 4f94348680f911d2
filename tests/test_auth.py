import smtplib

import pytest

from sandwich_api.api.deps import get_notification_service
from sandwich_api.core.config import Settings
from sandwich_api.core.exceptions import ConflictError
from sandwich_api.core.security import user_id_from_token, verify_password
from sandwich_api.main import app
from sandwich_api.models.user import User
from sandwich_api.services.auth import AuthService
from sandwich_api.services.notifications import NotificationService


class RecordingNotifications:
    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    def send_welcome(self, to_email, display_name=None):
        if self.fail:
            raise RuntimeError("smtp exploded")
        self.sent.append(to_email)
        return True


@pytest.fixture
def notifications():
    recorder = RecordingNotifications()
    app.dependency_overrides[get_notification_service] = lambda: recorder
    return recorder


def register(client, email="sam@example.com", password="hunter22"):
    return client.post("/api/auth/register", json={"email": email, "password": password})


def test_register_sends_welcome(client, notifications, db_session):
    response = register(client)
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert notifications.sent == ["sam@example.com"]
    user = db_session.query(User).one()
    assert user.password_hash != "hunter22"
    assert verify_password("hunter22", user.password_hash)


def test_register_survives_email_failure(client, db_session):
    app.dependency_overrides[get_notification_service] = lambda: RecordingNotifications(fail=True)
    assert register(client).status_code == 200
    assert db_session.query(User).count() == 1


def test_register_duplicate_email_conflicts(client, notifications):
    register(client)
    response = register(client, email="SAM@example.com")
    assert response.status_code == 409
    assert response.json() == {"detail": "email already registered"}


def test_register_race_on_unique_email_conflicts(db_session, monkeypatch):
    service = AuthService(db_session, RecordingNotifications())
    service.register("sam@example.com", "hunter22")
    # a second request that checked for the email before the first committed
    monkeypatch.setattr(service, "_find_by_email", lambda email: None)
    with pytest.raises(ConflictError):
        service.register("sam@example.com", "hunter22")
    assert db_session.query(User).count() == 1


@pytest.mark.parametrize(
    "body",
    (
        {"email": "sam@example.com"},
        {"password": "hunter22"},
        {"email": "sam@example.com", "password": ""},
        {"email": "not-an-email", "password": "hunter22"},
    ),
)
def test_register_rejects_incomplete(client, notifications, body):
    assert client.post("/api/auth/register", json=body).status_code == 400
    assert notifications.sent == []


def test_email_exists(client, notifications):
    register(client)
    assert client.get("/api/auth/exists", params={"email": "Sam@Example.com"}).json() == {"exists": True}
    assert client.get("/api/auth/exists", params={"email": "kim@example.com"}).json() == {"exists": False}
    assert client.get("/api/auth/exists").status_code == 400


def test_login_returns_usable_token(client, notifications):
    register(client)
    response = client.post("/api/auth/login", json={"email": "sam@example.com", "password": "hunter22"})
    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"token"}
    assert user_id_from_token(body["token"]) is not None

    headers = {"Authorization": f"Bearer {body['token']}"}
    created = client.post("/api/builder", json={"meatIds": [30]}, headers=headers).json()
    assert created["isPrivate"] is True
    assert [s["id"] for s in client.get("/api/sandwiches/mine", headers=headers).json()] == [created["id"]]


@pytest.mark.parametrize(
    "email,password",
    (("sam@example.com", "wrong"), ("nobody@example.com", "hunter22")),
)
def test_login_rejects_bad_credentials(client, notifications, email, password):
    register(client)
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid credentials"}


def test_login_requires_both_fields(client):
    assert client.post("/api/auth/login", json={"email": "sam@example.com"}).status_code == 400


def test_login_with_mfa_returns_challenge(client, notifications, db_session):
    register(client)
    user = db_session.query(User).one()
    user.mfa_secret = "protected-secret"
    db_session.commit()

    response = client.post("/api/auth/login", json={"email": "sam@example.com", "password": "hunter22"})
    body = response.json()
    assert body["requiresMfa"] is True
    assert body["mfaToken"]
    assert "token" not in body

    # the challenge token is not a bearer credential
    headers = {"Authorization": f"Bearer {body['mfaToken']}"}
    assert client.get("/api/sandwiches/mine", headers=headers).status_code == 401


# Notification service

def smtp_settings(**overrides):
    values = {"SMTP_HOST": "smtp.example.com", "SMTP_USERNAME": "mailer", "SMTP_PASSWORD": "pw"}
    values.update(overrides)
    return Settings(**values)


def test_welcome_skipped_without_smtp_host():
    assert NotificationService(Settings(SMTP_HOST=None)).send_welcome("sam@example.com") is False


def test_welcome_sent_over_smtp(monkeypatch):
    calls = []

    class FakeSMTP:
        def __init__(self, host, port):
            calls.append(("connect", host, port))

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def starttls(self):
            calls.append(("starttls",))

        def login(self, username, password):
            calls.append(("login", username, password))

        def sendmail(self, from_addr, to_addr, message):
            calls.append(("sendmail", from_addr, to_addr))
            assert "Welcome" in message

    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    assert NotificationService(smtp_settings()).send_welcome("sam@example.com", "Sam") is True
    assert calls == [
        ("connect", "smtp.example.com", 587),
        ("starttls",),
        ("login", "mailer", "pw"),
        ("sendmail", "no-reply@example.com", "sam@example.com"),
    ]


def test_welcome_failure_reported_not_raised(monkeypatch):
    def refuse(host, port):
        raise ConnectionRefusedError("no smtp here")

    monkeypatch.setattr(smtplib, "SMTP", refuse)
    assert NotificationService(smtp_settings()).send_welcome("sam@example.com") is False
