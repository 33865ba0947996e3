"""
Shared Utilities

Responsibility:
    Cross-cutting concerns and utilities used across all layers.
    Generic helpers that don't belong to any specific layer.

Contains:
    - Utility functions
    - Common helpers
    - Generic decorators

Does NOT contain:
    - Layer-specific code
    - Business logic
    - Infrastructure implementations
"""
