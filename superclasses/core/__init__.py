"""
Core value types and the contracts they are validated against.

Pure computation only: no I/O, no persistence, no shared state.
"""
