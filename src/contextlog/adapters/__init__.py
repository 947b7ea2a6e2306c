"""Adapters connecting contextlog to frameworks and other libraries."""
