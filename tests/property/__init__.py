# tests/property/__init__.py
"""Property-based tests for dynamodb-etl.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of: pass-through of untouched
records, field round-trips, and per-line error isolation.
"""
