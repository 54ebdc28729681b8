# Services

from .store_client import StoreClient
from .checkout import CheckoutService

__all__ = ["StoreClient", "CheckoutService"]
