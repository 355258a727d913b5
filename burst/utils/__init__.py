"""Shared helpers used across the engine."""
#
# KEY MODULES:
# - **observer.py**: Signal implementation (pub/sub for execution outcomes)
#
