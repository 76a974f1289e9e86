"""API contract and browser end-to-end test suite for ServeRest and GE."""

__version__ = "0.1.0"
