"""
B1 Invoices: a Reflex page listing a customer's SAP Business One invoices.

The package logs into the Service Layer, carries the session cookie into an
Invoices query and renders the result as a table with formatted dates,
currency and an aggregate total.

Subpackages:
- lib: Logging, cookie parsing and cycle tracking
- models: Session, Document, RetrievalResult and the display view model
- services: Authenticators, the document fetcher and the RetrievalClient
- components: Reflex UI components
- data: Static demo fixtures

Main entry points:
- app.main(): Start the development server
- app.app: The Reflex application instance
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
