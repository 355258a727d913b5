# ============================================================================
# burst/__init__.py
# Package Marker for the Burst Engine
# ============================================================================
#
# PURPOSE:
# The request-dispatch and result-aggregation engine behind the burstforge
# command line tool.
#
# LAYOUT:
# - base/: configuration and logging setup
# - executor/: template building, dispatch, classification, aggregation
# - reporting/: the append-only run log file
# - utils/: small shared helpers (signals)
#
# ============================================================================

__version__ = "0.3.0"
