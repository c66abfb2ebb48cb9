"""Core functionality for huelink.

This package contains:
- bridge: Bridge session (queries, chainable commands, outcome tracking)
- codec: URL building, JSON marshaling and the HTTP transport
- config: User configuration and environment overrides
- discovery: Optional bridge discovery
- errors: Exceptions for transport, decode and encode failures
"""
