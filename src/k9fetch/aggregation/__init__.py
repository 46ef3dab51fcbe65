"""Aggregation module for training session statistics.

Pure functions over already-fetched session lists:
- records: success classification and condition parsing
- numeric: mean / median / mode
- histogram: aligned success/failure bins for one condition
- sessions: one-pass aggregate across all dogs, rankings
- detail: per-dog record view derivations
Forbidden: database access, HTTP concerns.
"""
