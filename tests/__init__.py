"""
tests

Test suite for the iab-consent-api project.

This package contains unit and integration tests for the consent decoder,
the shared models and the consent API service.

Subpackages:
    - consent_daemon: Tests for the FastAPI service
    - integration: End-to-end API tests
"""
