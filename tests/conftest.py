# tests/conftest.py
import os

# must be set before farmconnect reads its settings
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from farmconnect.api.deps import get_notification_service, get_rate_limiter, get_token_verifier
from farmconnect.data.database import Base, engine
from farmconnect.domain.enums import Role
from farmconnect.main import create_app
from tests.helpers import FakeNotifications, FakeVerifier, make_product, make_user


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def notifications():
    return FakeNotifications()


@pytest.fixture
def app(notifications):
    app = create_app()
    app.dependency_overrides[get_token_verifier] = lambda: FakeVerifier()
    app.dependency_overrides[get_notification_service] = lambda: notifications
    app.dependency_overrides[get_rate_limiter] = lambda: None
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def market():
    """Two farmers with one product each and a buyer."""
    farmer1 = make_user("farmer-one", Role.farmer, "Abebe")
    farmer2 = make_user("farmer-two", Role.farmer, "Almaz")
    buyer = make_user("buyer", Role.buyer, "Kebede")
    return {
        "farmer1": farmer1,
        "farmer2": farmer2,
        "buyer": buyer,
        "a": make_product(farmer1, price="10.00", quantity=20, title="Teff"),
        "b": make_product(farmer2, price="20.00", quantity=8, title="Coffee", category="coffee"),
    }
