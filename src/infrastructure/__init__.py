"""Adapters behind the core store interfaces."""
