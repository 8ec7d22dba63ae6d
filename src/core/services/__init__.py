"""
Core billing logic.

Layer-pure functions that depend only on:
- src/core/entities/*
- src/core/money.py
- src/core/exceptions.py

NO infrastructure imports. Import the submodules directly; this package does
not re-export them because the entities import from it.
"""
