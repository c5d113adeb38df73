"""Depot exceptions for the file depot client.

Exception hierarchy for FTP depot operations, carrying the failing
host, path or user alongside the underlying ftplib/socket error.
"""


class FileDepotError(Exception):
    """Base exception for all file depot errors."""

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class DepotConnectionError(FileDepotError):
    """Failed to reach the depot's FTP server."""

    def __init__(self, host: str, port: int, original_error: Exception = None):
        self.host = host
        self.port = port
        message = f"Failed to connect to {host}:{port}"
        super().__init__(message, original_error)


class DepotAuthenticationError(FileDepotError):
    """Login to the depot was rejected."""

    def __init__(self, username: str, original_error: Exception = None):
        self.username = username
        message = f"Login failed for user '{username}' due to a bad username or password"
        super().__init__(message, original_error)


class DepotTimeoutError(FileDepotError):
    """Depot operation timed out."""

    def __init__(self, operation: str = "Operation", timeout: int = 30):
        self.timeout = timeout
        message = f"{operation} timed out after {timeout} seconds"
        super().__init__(message)


class DepotUploadError(FileDepotError):
    """Failed to transfer a file to the depot."""

    def __init__(
        self,
        file_name: str,
        remote_path: str,
        original_error: Exception = None
    ):
        self.file_name = file_name
        self.remote_path = remote_path
        message = f"Failed to upload '{file_name}' to '{remote_path}'"
        super().__init__(message, original_error)


class DepotPathError(FileDepotError):
    """Remote path operation failed (create directory, delete, etc.)."""

    def __init__(self, path: str, operation: str, original_error: Exception = None):
        self.path = path
        self.operation = operation
        message = f"Failed to {operation} '{path}'"
        super().__init__(message, original_error)


class DepotValidationError(FileDepotError):
    """Depot settings could not be validated against the server."""

    def __init__(self, message: str = "Depot settings validation failed",
                 original_error: Exception = None):
        super().__init__(message, original_error)
