"""
API package containing versioned routes and the HTTP error mapping.

A version subpackage exposes a top-level ``router`` which includes all
of its domain-specific endpoints.
"""
