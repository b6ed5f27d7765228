"""
Gateways deciding, per operation, between the cache and a SUDS round trip.
"""

from .base import BaseGateway
from .livefyre import LivefyreGateway
from .models import InitRequest
from .user import UserGateway

__all__ = ["BaseGateway", "LivefyreGateway", "InitRequest", "UserGateway"]
