"""
Test suite for the Tank Relay server.

This package contains tests organized by type:
- Unit tests for individual components
- Integration tests against a live server
- Shared fixtures in conftest.py
"""
