"""
Service layer.

Each service encapsulates the operations of one domain (presets,
sessions, intervals).  Every operation takes the caller's identity as
its first argument and runs the authorization guard before touching
the database, so the API handlers stay thin.
"""
