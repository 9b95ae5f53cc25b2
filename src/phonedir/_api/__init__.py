"""Endpoint functions for the person collection (internal)."""
