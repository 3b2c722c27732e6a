"""
Test suite for the TaskFlow web frontend.

This package contains:
- unit/: controllers, models and validation in isolation
- integration/: Flask routes driven through the test client
- contracts/: consumer checks against the OpenAPI document
- e2e/: Playwright browser flows against live servers
"""
