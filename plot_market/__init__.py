"""
Top‑level package for the plot marketplace client.

The package wraps the marketplace REST backend (projects, plots, visit
requests, feedback, cameras and owned lands) in a typed client and
exposes the small pieces of data logic the mobile screens relied on
(search filters, price formatting, role routing) as services.

The most commonly used names are re‑exported here::

    from plot_market import PlotMarketAPI, MarketplaceError
"""

from .client import PlotMarketAPI
from .core.errors import ApiError, MarketplaceError, NetworkError, ValidationError

__all__ = [
    "PlotMarketAPI",
    "MarketplaceError",
    "ApiError",
    "NetworkError",
    "ValidationError",
]
