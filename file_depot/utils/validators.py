"""Input validators for the file depot client.

Provides validation functions for depot URIs, hosts, ports,
timeouts and local file paths.
"""

import re
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import urlsplit


# IPv4 address pattern
IPV4_PATTERN = re.compile(
    r'^(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}'
    r'(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)$'
)

# Hostname pattern (simplified)
HOSTNAME_PATTERN = re.compile(
    r'^(?=.{1,253}$)(?!-)[A-Za-z0-9-]{1,63}(?<!-)(\.[A-Za-z0-9-]{1,63})*$'
)

DEPOT_SCHEMES = ("ftp",)


def validate_host(host: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a host (IPv4 address or hostname).

    Args:
        host: Host string to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not host or not host.strip():
        return False, "Host is required"

    host = host.strip()

    if IPV4_PATTERN.match(host) or HOSTNAME_PATTERN.match(host):
        return True, None

    return False, f"Invalid host: {host}. Must be a valid IP address or hostname."


def validate_port(port: int) -> Tuple[bool, Optional[str]]:
    """
    Validate a port number.

    Args:
        port: Port number to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(port, int):
        try:
            port = int(port)
        except (ValueError, TypeError):
            return False, "Port must be a number"

    if port < 1 or port > 65535:
        return False, f"Port must be between 1 and 65535, got {port}"

    return True, None


def validate_timeout(timeout: int) -> Tuple[bool, Optional[str]]:
    """
    Validate a timeout value in seconds.

    Args:
        timeout: Timeout in seconds

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(timeout, int):
        try:
            timeout = int(timeout)
        except (ValueError, TypeError):
            return False, "Timeout must be a number"

    if timeout < 5 or timeout > 300:
        return False, f"Timeout must be between 5 and 300 seconds, got {timeout}"

    return True, None


def validate_depot_uri(uri: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a depot URI such as ``ftp://host/base/path``.

    Only the scheme and host are checked; the path may hold any
    characters since it is percent-encoded before use.

    Args:
        uri: Depot URI to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not uri or not uri.strip():
        return False, "Depot URI is required"

    parts = urlsplit(uri.strip())

    if parts.scheme.lower() not in DEPOT_SCHEMES:
        return False, f"Unsupported depot scheme '{parts.scheme}', expected ftp"

    is_valid, error = validate_host(parts.hostname or "")
    if not is_valid:
        return False, error

    try:
        port = parts.port
    except ValueError:
        return False, f"Invalid port in depot URI: {uri}"

    if port is not None:
        return validate_port(port)

    return True, None


def validate_file_path(path: Path, must_exist: bool = True) -> Tuple[bool, Optional[str]]:
    """
    Validate a file path.

    Args:
        path: Path to validate
        must_exist: If True, file must exist

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not path:
        return False, "File path is required"

    if isinstance(path, str):
        path = Path(path)

    if must_exist:
        if not path.exists():
            return False, f"File does not exist: {path}"
        if not path.is_file():
            return False, f"Path is not a file: {path}"

    return True, None
