# tracker/__init__.py
"""
Contractor productivity tracker.

Subpackages:
    ingest   - CSV parsing and record validation
    ranking  - thresholds, rankings and dashboard aggregates
    storage  - persistence backends
    export   - CSV reports
    auth     - admin password, rate limiting, tokens
    common   - settings, logging, exceptions
"""

__version__ = "1.0.0"
