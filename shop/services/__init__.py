"""Shared services: money arithmetic and currency display."""
