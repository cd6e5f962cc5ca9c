"""Adapters – framework integrations (install the ``webhook`` extra)."""
