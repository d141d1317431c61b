"""
Routes package for the Task Store application.

This package contains route blueprints:
- api: REST endpoints over the in-memory task mapping
"""
