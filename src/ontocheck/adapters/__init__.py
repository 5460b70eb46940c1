"""Adapters to external formats and services."""
