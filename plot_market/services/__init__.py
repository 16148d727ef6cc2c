"""
Service layer.

Each service bundles the data logic one group of screens needs on top
of :class:`plot_market.client.PlotMarketAPI`: searching the catalogue,
booking visits, managing owned land and routing users by role.  Pure
helpers take plain model lists; flows that talk to the backend take the
client as their first argument.
"""
