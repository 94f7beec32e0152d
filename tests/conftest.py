import os

os.environ["JWT_SECRET_KEY"] = "test-signing-key"
os.environ.setdefault("MONGO_URI", "mongodb://127.0.0.1:27017")

import mongomock
import pytest
from fastapi.testclient import TestClient

from tastetab.database import get_db
from tastetab.main import app
from tastetab.services.payment_gateway import GatewayError, get_gateway
from tastetab.utils import mailer

ADMIN = {
    "username": "admin1",
    "email": "admin@tastetab.app",
    "password": "Admin@123",
    "confirmPassword": "Admin@123",
    "role": "admin",
}

CASHIER = {
    "username": "cashier1",
    "email": "cashier@tastetab.app",
    "phone": "9876543210",
    "password": "Cashier@123",
    "confirmPassword": "Cashier@123",
    "role": "user",
}


class FakeGateway:
    def __init__(self):
        self.fail = False
        self.orders = []
        self.qr = {
            "id": "qr_test",
            "status": "active",
            "image_url": "https://rzp.io/qr_test.png",
            "fixed_amount": True,
            "payment_amount": 25000,
        }
        self.payment = {"id": "pay_test", "method": "upi"}

    async def create_order(self, amount):
        if self.fail:
            raise GatewayError("boom")
        order = {"id": f"order_{len(self.orders) + 1}", "amount": int(round(amount * 100)), "currency": "INR"}
        self.orders.append(order)
        return order

    async def fetch_qr_code(self, qr_id):
        if self.fail:
            raise GatewayError("boom")
        return dict(self.qr, id=qr_id)

    async def fetch_payment(self, payment_id):
        if self.fail:
            raise GatewayError("boom")
        return dict(self.payment, id=payment_id)


@pytest.fixture
def db():
    return mongomock.MongoClient()["tastetab_test"]


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def outbox(monkeypatch):
    sent = []

    def fake_send_otp_email(email, otp):
        sent.append({"email": email, "otp": otp})
        return True

    monkeypatch.setattr(mailer, "send_otp_email", fake_send_otp_email)
    return sent


@pytest.fixture
def client(db, gateway, outbox):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


def register(client, **overrides):
    body = dict(CASHIER)
    body.update(overrides)
    return client.post("/api/auth/register", json=body)


def login(client, email, password):
    res = client.post("/api/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return res.json()["token"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    assert client.post("/api/auth/register", json=ADMIN).status_code == 201
    return bearer(login(client, ADMIN["email"], ADMIN["password"]))


@pytest.fixture
def cashier_headers(client):
    assert client.post("/api/auth/register", json=CASHIER).status_code == 201
    return bearer(login(client, CASHIER["email"], CASHIER["password"]))
