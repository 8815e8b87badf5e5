"""
Test suite for family-agenda.

This package contains:
- Unit tests for occurrence resolution and the view filters
- Tests for the JSON reminder store and the retrying manager
- Command and CLI tests run against a temporary store
"""
