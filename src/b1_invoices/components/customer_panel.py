"""
Customer panel component for the B1 invoices page.

Shows the customer code being loaded and lets the user load another one.
"""

import reflex as rx

from b1_invoices.state import DocumentState


def customer_panel() -> rx.Component:
    """
    Build the customer input with its load button.

    Returns:
        The customer panel component.
    """
    return rx.box(
        rx.hstack(
            rx.text("Customer Code", weight="bold"),
            rx.input(
                value=DocumentState.customer_id,
                on_change=DocumentState.set_customer_id,
                placeholder="CardCode, e.g. C20000",
                debounce_timeout=300,
            ),
            rx.button(
                rx.icon("refresh-cw", size=16),
                "Load",
                on_click=DocumentState.on_load,
                loading=DocumentState.is_loading,
            ),
            align="center",
            spacing="3",
        ),
        class_name="card customer-card",
    )
