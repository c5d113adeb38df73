"""FTP connection handling for the file depot client.

Provides FTPConnectionConfig, built from a depot URI, and helpers
for opening and closing a single ftplib session.
"""

from dataclasses import dataclass
from ftplib import FTP, error_perm
from typing import Optional
from urllib.parse import urlsplit
import logging
import socket

from file_depot.ftp.exceptions import (
    DepotAuthenticationError,
    DepotConnectionError,
    DepotTimeoutError,
)
from file_depot.utils.validators import validate_host, validate_port, validate_timeout

logger = logging.getLogger("file_depot.connection")

DEFAULT_FTP_PORT = 21


@dataclass
class FTPConnectionConfig:
    """FTP connection configuration."""
    host: str
    port: int = DEFAULT_FTP_PORT
    username: str = "anonymous"
    passive_mode: bool = True
    timeout: int = 30

    def __post_init__(self):
        """Validate configuration after initialization."""
        for is_valid, error in (
            validate_host(self.host),
            validate_port(self.port),
            validate_timeout(self.timeout),
        ):
            if not is_valid:
                raise ValueError(error)

    @classmethod
    def from_uri(
        cls,
        uri: str,
        username: Optional[str] = None,
        passive_mode: bool = True,
        timeout: int = 30
    ) -> "FTPConnectionConfig":
        """
        Build a configuration from a depot URI.

        Args:
            uri: Depot URI, e.g. ``ftp://user@host:2121/uploads``
            username: Login name, overrides any user in the URI
            passive_mode: Use passive data connections
            timeout: Socket timeout in seconds

        Returns:
            FTPConnectionConfig for the URI's host and port
        """
        parts = urlsplit(uri)
        return cls(
            host=parts.hostname or "",
            port=parts.port or DEFAULT_FTP_PORT,
            username=username or parts.username or "anonymous",
            passive_mode=passive_mode,
            timeout=timeout,
        )


def open_connection(config: FTPConnectionConfig, password: str = "") -> FTP:
    """
    Establish an FTP session.

    Args:
        config: Connection configuration
        password: FTP password

    Returns:
        Logged-in FTP session

    Raises:
        DepotConnectionError: If the server cannot be reached
        DepotAuthenticationError: If login fails
        DepotTimeoutError: If the connection times out
    """
    ftp = FTP()
    ftp.set_debuglevel(0)

    try:
        try:
            ftp.connect(
                host=config.host,
                port=config.port,
                timeout=config.timeout
            )
        except socket.timeout:
            raise DepotTimeoutError("Connection", config.timeout)
        except (socket.error, OSError) as e:
            raise DepotConnectionError(config.host, config.port, e)

        try:
            ftp.login(user=config.username, passwd=password)
        except error_perm as e:
            raise DepotAuthenticationError(config.username, e)

        # Passive mode avoids firewall issues with active data connections
        ftp.set_pasv(config.passive_mode)

    except (DepotConnectionError, DepotAuthenticationError, DepotTimeoutError) as e:
        logger.error(f"Failed to connect to {config.host}: {e}")
        close_connection(ftp)
        raise
    except Exception as e:
        logger.error(f"Failed to connect to {config.host}: {e}")
        close_connection(ftp)
        raise DepotConnectionError(config.host, config.port, e)

    return ftp


def close_connection(ftp) -> None:
    """Close an FTP session, logging rather than raising on failure."""
    if ftp is None:
        return
    try:
        ftp.close()
    except Exception as e:
        logger.warning(f"Error closing FTP connection: {e}")
