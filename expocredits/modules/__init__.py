"""Wallet domain modules: accounts, ledger, transfers and read-side queries."""
