"""
Pydantic schema definitions for operation inputs and results.

Each domain (presets, sessions, intervals) defines its own models for
inputs and results.  Fields are snake_case in Python and camelCase on
the wire; both spellings are accepted on input.
"""
