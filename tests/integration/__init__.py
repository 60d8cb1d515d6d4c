"""
tests.integration

Integration tests that exercise the consent API application end to end:
routers, middleware, error handlers and the metrics endpoint together.
"""
