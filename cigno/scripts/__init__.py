"""Maintenance scripts run with python -m cigno.scripts.<name>."""
