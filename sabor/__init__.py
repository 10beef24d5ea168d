"""
                Sabor & Cia

Backend for a small marmita restaurant: menu catalog, order intake
with server-side pricing, order status tracking and a lightweight
financial ledger with analytics.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
