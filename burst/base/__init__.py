"""Foundational pieces the rest of the engine depends on."""
#
# WHAT'S IN THIS MODULE:
# - config.py: environment driven settings and logging setup
#
