"""Utility module for the file depot client.

This module provides cross-cutting utilities:
- Logging: Configured logging with PII redaction
- Validators: Input validation for depot URIs, hosts, ports and paths
- Escaping: Allow-list percent-encoding of remote paths
"""
