"""
Routes package for the TaskFlow frontend.

This package contains route blueprints:
- views: HTML page routes for authentication, dashboard and tasks
"""
