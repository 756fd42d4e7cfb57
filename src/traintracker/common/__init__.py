"""
Common Layer - Shared Utilities
===============================

Helpers used across the engine and the HTTP layer.

Structure:
    common/
    └── utils/          # Utility functions
"""
