"""Catalog helpers, validators and pagination."""
