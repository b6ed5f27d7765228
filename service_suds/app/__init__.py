"""
SUDS access layer.

Talks to the session user data service ("SUDS") on behalf of comment
widgets:
- Widget init and user auth, behind an optional read-through cache
- Single and bulk comment counts, the latter split into URL-sized batches
- User settings updates

Structure:
- app.client: SudsClient, wiring everything from settings.
- app.gateway: cache/remote decisions per operation.
- app.batching: bulk lookup planning and fan-out.
- app.caching: init/auth cache and its stores.
- app.adapters: transport and session providers.
"""

from .client import SudsClient
from .gateway import InitRequest, LivefyreGateway, UserGateway

__all__ = ["SudsClient", "InitRequest", "LivefyreGateway", "UserGateway"]
