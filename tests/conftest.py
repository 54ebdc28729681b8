import httpx
import pytest

from mock_store.database import reset_all
from mock_store.main import app as store_app
from storefront.core.session import CheckoutSession, SessionManager
from storefront.models.checkout import ShippingAddress
from storefront.services.checkout import CheckoutService
from storefront.services.store_client import StoreClient

STORE_URL = "http://store.test/api"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def store_data():
    """Every test starts from the seeded catalog and coupons"""
    reset_all()
    yield
    reset_all()


@pytest.fixture
def store_client() -> StoreClient:
    return StoreClient(
        store_base_url=STORE_URL,
        api_token="shopper-1",
        transport=httpx.ASGITransport(app=store_app),
    )


@pytest.fixture
def service(store_client) -> CheckoutService:
    return CheckoutService(store_client=store_client)


@pytest.fixture
def manager() -> SessionManager:
    return SessionManager()


@pytest.fixture
def session(manager) -> CheckoutSession:
    return manager.create_session()


@pytest.fixture
def address() -> ShippingAddress:
    return ShippingAddress(
        label="Home",
        line1="12 Orchard Lane",
        city="Portland",
        state="OR",
        zip="97205",
    )
