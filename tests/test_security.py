import smtplib

import pytest
from jose import JWTError

from tastetab.core import security
from tastetab.core.config import settings
from tastetab.core.errors import APIError
from tastetab.utils import mailer


def test_password_hash_roundtrip():
    hashed = security.hash_password("Secret@123")
    assert hashed != "Secret@123"
    assert security.verify_password("Secret@123", hashed)
    assert not security.verify_password("Secret@124", hashed)
    assert not security.verify_password("Secret@123", None)


@pytest.mark.parametrize(
    "password, strong",
    [
        ("Fresh@2024", True),
        ("Abcdefg1!", True),
        ("Abc1@", False),
        ("abcdefg1@", False),
        ("ABCDEFGH@", False),
        ("Abcdefgh1", False),
        ("Abcdefg1@#", False),
        ("", False),
    ],
)
def test_password_strength(password, strong):
    assert security.is_strong_password(password) is strong


def test_otp_is_six_digits():
    codes = {security.generate_otp() for _ in range(50)}
    for code in codes:
        assert len(code) == 6 and code.isdigit() and code[0] != "0"
    assert len(codes) > 1


def test_token_carries_id_and_role():
    claims = security.decode_access_token(security.create_access_token("abc", "admin"))
    assert claims["id"] == "abc"
    assert claims["role"] == "admin"
    assert claims["exp"] > 0


def test_tampered_token_fails():
    token = security.create_access_token("abc", "user")
    header, payload, signature = token.split(".")
    with pytest.raises(JWTError):
        security.decode_access_token(f"{header}.{payload}.{signature[::-1]}")


def test_missing_signing_key_is_503(monkeypatch):
    monkeypatch.setattr(settings, "JWT_SECRET_KEY", None)
    with pytest.raises(APIError) as info:
        security.create_access_token("abc", "user")
    assert info.value.status_code == 503


# --- Mail ---

class FakeSMTP:
    sent = []

    def __init__(self, host, port):
        self.host = host
        self.port = port

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def login(self, user, password):
        if password == "wrong":
            raise smtplib.SMTPAuthenticationError(535, b"bad credentials")

    def sendmail(self, sender, to, message):
        FakeSMTP.sent.append((sender, to, message))


@pytest.fixture
def smtp(monkeypatch):
    FakeSMTP.sent = []
    monkeypatch.setattr(mailer.smtplib, "SMTP_SSL", FakeSMTP)
    monkeypatch.setattr(settings, "SMTP_USER", "till@tastetab.app")
    monkeypatch.setattr(settings, "SMTP_PASSWORD", "app-password")
    return FakeSMTP


def test_send_otp_email(smtp):
    assert mailer.send_otp_email("guest@tastetab.app", "482913")
    sender, to, message = smtp.sent[0]
    assert sender == "till@tastetab.app"
    assert to == "guest@tastetab.app"
    assert "Subject: TasteTab OTP for Password Reset" in message
    assert "Your OTP is: 482913" in message


def test_send_mail_failures_return_false(smtp, monkeypatch):
    monkeypatch.setattr(settings, "SMTP_PASSWORD", "wrong")
    assert mailer.send_mail("guest@tastetab.app", "s", "t") is False

    monkeypatch.setattr(settings, "SMTP_PASSWORD", None)
    assert mailer.send_mail("guest@tastetab.app", "s", "t") is False
    assert smtp.sent == []
