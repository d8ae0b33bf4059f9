"""
Local library modules shared by the services and the UI.

Modules:
    logs: Logging utilities
    cookies: Service Layer cookie parsing and header composition
    cycles: Cycle identifiers and cancellable pauses
"""

from b1_invoices.lib import cookies, cycles, logs

__all__ = ["cookies", "cycles", "logs"]
