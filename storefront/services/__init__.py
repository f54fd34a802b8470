"""Business logic services.

Services contain all business logic and are called by routes.
Pricing, cart and formatting are pure; only the catalog client does I/O.
"""
