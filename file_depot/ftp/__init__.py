"""FTP operations module for the file depot client.

This module handles all FTP-related functionality:
- FileDepotFtp: Idempotent log file uploads beneath a depot URI
- FTPConnectionConfig: Connection settings derived from the depot URI
- store_file: Block-wise binary transfer with progress reporting
- Exceptions: Depot-specific error types
"""
