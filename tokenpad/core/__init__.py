"""Placement engine, curves, cache and reporting."""
