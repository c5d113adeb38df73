"""Secure credential storage for the file depot client.

Uses the system keyring (Windows Credential Manager, macOS Keychain,
Linux Secret Service) to store depot FTP passwords.
"""

import logging
from typing import Optional

import keyring
from keyring.errors import KeyringError

logger = logging.getLogger("file_depot.credentials")


class CredentialManager:
    """Depot credential storage using the system keyring."""

    SERVICE_NAME = "file-depot"

    def _make_key(self, host: str, username: str) -> str:
        """Key a credential by depot host and username."""
        return f"{host}:{username}"

    def save_password(self, host: str, username: str, password: str) -> bool:
        """
        Save a depot password.

        Args:
            host: Depot FTP host
            username: Depot FTP username
            password: Password to save

        Returns:
            True if saved successfully, False otherwise
        """
        try:
            keyring.set_password(self.SERVICE_NAME, self._make_key(host, username), password)
            return True
        except KeyringError as e:
            logger.warning(f"Could not save password for {username} on {host}: {e}")
            return False

    def get_password(self, host: str, username: str) -> Optional[str]:
        """
        Retrieve a saved depot password.

        Args:
            host: Depot FTP host
            username: Depot FTP username

        Returns:
            Password string or None if not found
        """
        try:
            return keyring.get_password(self.SERVICE_NAME, self._make_key(host, username))
        except KeyringError as e:
            logger.warning(f"Could not read password for {username} on {host}: {e}")
            return None

    def delete_password(self, host: str, username: str) -> bool:
        """
        Remove a saved depot password.

        Returns:
            True if deleted successfully, False otherwise
        """
        try:
            keyring.delete_password(self.SERVICE_NAME, self._make_key(host, username))
            return True
        except KeyringError:
            return False

    def has_password(self, host: str, username: str) -> bool:
        """True if a password is saved for ``username`` on ``host``."""
        return self.get_password(host, username) is not None
