"""Ledger engine: entries, categories, accounts and aggregations."""
