"""
Tests for the consent_daemon package: configuration, metrics, middleware and API routers.
"""
