"""Reflex configuration for the B1 invoices application."""

import os

import reflex as rx

# Get port from environment
APP_PORT = int(os.getenv("B1_INVOICES_PORT", "8000"))

config = rx.Config(
    app_name="b1_invoices",
    # Use the src directory structure
    app_module_import="b1_invoices.app",
    frontend_port=APP_PORT,
)
