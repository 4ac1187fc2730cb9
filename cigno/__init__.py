"""Cigno platform: CRM and project delivery API."""
