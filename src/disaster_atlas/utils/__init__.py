"""Shared helpers: joins and aggregation, projection, colors and figures."""
