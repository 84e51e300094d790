"""Utility modules for account-search."""
