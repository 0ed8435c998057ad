"""Execution contract, registry and batch execution."""
