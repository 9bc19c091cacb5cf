"""Presentation layers: HTTP service and console client."""
