"""Flask blueprints for the dashboard.

Blueprints are defined in the sibling modules (e.g., ``invoice_routes``) and
registered in :func:`dashboard.create_app`. Form submissions are handed to
the handlers in :mod:`dashboard.actions`.
"""
