"""
API Relay
Token issuance and browser-facing proxy for third-party HTTP APIs
"""

__version__ = "1.0.0"
