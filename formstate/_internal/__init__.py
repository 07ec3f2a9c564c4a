"""Internal modules for formstate.

These are not intended for direct use in application code.

Modules:
    dispatch - Method-name-driven request dispatch
    http - Default httpx transport and client configuration
"""
