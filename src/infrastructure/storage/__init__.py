"""Persistence for billing documents."""
