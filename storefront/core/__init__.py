# Core modules

from .config import settings, get_settings
from .session import SessionManager, CheckoutSession

__all__ = ["settings", "get_settings", "SessionManager", "CheckoutSession"]
