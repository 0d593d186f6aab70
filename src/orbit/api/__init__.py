"""API module for Orbit.

API layer:
- Validates query parameters, opens a DB session per request
- Returns analytics payloads for the dashboard UI
- Forbidden: aggregation logic, migrations
"""
