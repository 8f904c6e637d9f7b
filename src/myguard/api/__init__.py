"""
HTTP API for MyGuard.
"""
