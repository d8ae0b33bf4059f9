"""
Reflex UI components for the B1 invoices page.

- customer_panel: Customer code input with a load button
- results: Loading, error, empty and table states

Components only read DocumentState; they never call the backend.
"""

from b1_invoices.components.customer_panel import customer_panel
from b1_invoices.components.results import document_results

__all__ = ["customer_panel", "document_results"]
