"""API module for K-9 Smart Fetch.

API layer:
- Validates inputs, reads/writes DB
- Returns payloads for UI
- Forbidden: statistics logic beyond calling aggregation
"""
