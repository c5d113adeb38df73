"""FTP file depot.

FileDepotFtp uploads log files beneath the path of an ``ftp://`` URI,
one connection per operation:

    depot = FileDepotFtp("ftp://ftp.example.com/uploads", username="evm")
    depot.upload_file(log_file)

Files land in ``<base path>/<zone>_<id>/<server>_<id>/<region key name>``.
An upload whose destination already exists is skipped.
"""

import ftplib
import logging
import posixpath
from contextlib import contextmanager
from ftplib import FTP, error_perm
from typing import Iterator, List, Optional, Tuple
from urllib.parse import urlsplit, urlunsplit

from file_depot.config.credentials import CredentialManager
from file_depot.config.settings import DepotSettings
from file_depot.ftp.connection import FTPConnectionConfig, close_connection, open_connection
from file_depot.ftp.exceptions import (
    DepotPathError,
    DepotUploadError,
    DepotValidationError,
    FileDepotError,
)
from file_depot.ftp.uploader import ProgressCallback, store_file
from file_depot.models.log_file import LogFile
from file_depot.utils.escaping import escape_path
from file_depot.utils.logging import redact
from file_depot.utils.validators import validate_depot_uri

logger = logging.getLogger("file_depot.depot")


class FileDepotFtp:
    """Depot storing uploaded log files on an FTP server."""

    URI_PREFIX = "ftp"

    def __init__(
        self,
        uri: str,
        name: str = "",
        username: Optional[str] = None,
        password: Optional[str] = None,
        passive_mode: bool = True,
        timeout: int = 30,
        credential_manager: Optional[CredentialManager] = None
    ):
        """
        Initialize the depot.

        Args:
            uri: Depot URI, e.g. ``ftp://ftp.example.com/uploads``
            name: Display name used in log messages
            username: Login name, defaults to the URI user or anonymous
            password: Login password, looked up in the keyring if omitted
            passive_mode: Use passive data connections
            timeout: Socket timeout in seconds
            credential_manager: Keyring access for saved passwords
        """
        self.uri = uri
        self.name = name or self.host
        self._username = username
        self._password = password
        self.passive_mode = passive_mode
        self.timeout = timeout
        self._credential_manager = credential_manager
        self.ftp: Optional[FTP] = None

    @classmethod
    def from_settings(
        cls,
        settings: DepotSettings,
        credential_manager: Optional[CredentialManager] = None
    ) -> "FileDepotFtp":
        """Create a depot from persisted settings."""
        return cls(
            uri=settings.uri,
            name=settings.name,
            username=settings.username,
            passive_mode=settings.passive_mode,
            timeout=settings.timeout,
            credential_manager=credential_manager or CredentialManager(),
        )

    @classmethod
    def display_name(cls, number: int = 1) -> str:
        return "FTP" if number == 1 else "FTPs"

    @classmethod
    def validate_settings(cls, settings: dict) -> str:
        """
        Check that a depot can be logged into with the given settings.

        Args:
            settings: Mapping with ``uri`` and optional ``username``/``password``

        Returns:
            The server's response code to the login

        Raises:
            DepotValidationError: If the URI is invalid or the server gave no response
            DepotConnectionError: If the server cannot be reached
            DepotAuthenticationError: If the credentials are rejected
        """
        try:
            depot = cls(uri=settings.get("uri", ""))
        except ValueError as e:
            raise DepotValidationError(original_error=e)
        return depot.verify_credentials(settings.get("username"), settings.get("password"))

    @property
    def uri(self) -> str:
        return self._uri

    @uri.setter
    def uri(self, value: str) -> None:
        is_valid, error = validate_depot_uri(value)
        if not is_valid:
            raise ValueError(error)
        self._uri = value.strip()

    @property
    def host(self) -> str:
        return urlsplit(self._uri).hostname or ""

    @property
    def username(self) -> str:
        return self._username or urlsplit(self._uri).username or "anonymous"

    @property
    def base_path(self) -> str:
        """
        The URI path, percent-encoded, without leading separators.

        ``ftp://ftp.example.com/logs/evm 1`` gives ``logs/evm%201``.
        """
        return escape_path(urlsplit(self._uri).path).lstrip("/")

    def merged_uri(
        self,
        scheme_override: Optional[str] = None,
        path_override: Optional[str] = None
    ) -> Optional[str]:
        """
        Combine explicit overrides with the depot URI.

        Returns None when no override is given; the depot's own URI is
        not used as a fallback.
        """
        if scheme_override is None and path_override is None:
            return None

        parts = urlsplit(self._uri)
        if scheme_override is not None:
            parts = parts._replace(scheme=scheme_override)
        if path_override is not None:
            parts = parts._replace(path="/" + path_override.lstrip("/"))
        return urlunsplit(parts)

    def destination_file(self, log_file: LogFile) -> str:
        """Remote path of ``log_file``, relative to the login directory."""
        return posixpath.join(self.base_path, log_file.relative_path_for_upload())

    def login_credentials(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None
    ) -> Tuple[str, str]:
        """
        Resolve the credentials for a connection.

        Explicit arguments win over the configured ones; a missing
        password is looked up in the keyring.
        """
        if username is None:
            username = self.username
            if password is None:
                password = self._password

        if password is None and self._credential_manager is not None:
            password = self._credential_manager.get_password(self.host, username)

        return username, password or ""

    def connect(self, username: Optional[str] = None, password: Optional[str] = None) -> FTP:
        """
        Open a logged-in FTP session to the depot.

        Raises:
            DepotConnectionError: If the server cannot be reached
            DepotAuthenticationError: If login fails
            DepotTimeoutError: If the connection times out
        """
        username, password = self.login_credentials(username, password)
        config = FTPConnectionConfig.from_uri(
            self._uri,
            username=username,
            passive_mode=self.passive_mode,
            timeout=self.timeout,
        )

        logger.info(f"Connecting to {self.display_name()} depot: {self.name} host: {config.host}...")
        ftp = open_connection(config, password)
        logger.info(f"Connected to {self.display_name()} depot: {self.name} host: {config.host}")
        return ftp

    @contextmanager
    def with_connection(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None
    ) -> Iterator[FTP]:
        """Yield a connection for one operation and always close it."""
        logger.info(f"Connecting through {type(self).__name__}: [{self.name}]")
        connection = self.connect(username, password)
        try:
            yield connection
        finally:
            close_connection(connection)

    def file_exists(self, remote_name: str, ftp: Optional[FTP] = None) -> bool:
        """
        True if ``remote_name`` is listed in its directory.

        ``ftp`` defaults to the ``ftp`` attribute. A listing refused by
        the server (missing directory, no permission) counts as the file
        not existing.
        """
        ftp = ftp or self.ftp
        directory, name = posixpath.split(str(remote_name).rstrip("/"))
        try:
            return name in self._list_names(ftp, directory)
        except error_perm:
            return False

    def upload_file(self, log_file: LogFile, on_progress: Optional[ProgressCallback] = None) -> None:
        """
        Upload ``log_file`` unless its destination already exists.

        Missing directories are created first. On success the log file
        is marked available and its post-upload tasks run.

        Raises:
            DepotConnectionError: If the server cannot be reached
            DepotUploadError: If the transfer fails
            DepotPathError: If a directory cannot be created
        """
        with self.with_connection() as ftp:
            destination = self.destination_file(log_file)
            if self.file_exists(destination, ftp):
                logger.info(f"Skipping upload, {destination} already exists in depot {self.name}")
                return

            try:
                self._upload(ftp, log_file.local_file, destination, on_progress)
            except FileDepotError as e:
                self._log_write_error(e)
                raise
            except ftplib.all_errors as e:
                self._log_write_error(e)
                raise DepotUploadError(posixpath.basename(destination), destination, e)

            log_file.mark_available(destination)
            log_file.post_upload_tasks()

    def remove_file(self, log_file: LogFile) -> None:
        """
        Delete ``log_file`` from the depot.

        Raises:
            DepotPathError: If the server refuses the deletion
        """
        destination = self.destination_file(log_file)
        with self.with_connection() as ftp:
            logger.info(f"Removing file: {destination} from depot {self.name}")
            try:
                ftp.delete(destination)
            except error_perm as e:
                raise DepotPathError(destination, "delete", e)

    def verify_credentials(self, username: Optional[str] = None, password: Optional[str] = None) -> str:
        """
        Log into the depot and return the server's last response code.

        Raises:
            DepotValidationError: If the server gave no response
        """
        with self.with_connection(username, password) as ftp:
            response = getattr(ftp, "lastresp", None)

        if not response:
            raise DepotValidationError()
        return response

    def _list_names(self, ftp: FTP, directory: str = "") -> List[str]:
        # Some servers answer NLST with full paths, compare base names only
        entries = ftp.nlst(directory) if directory else ftp.nlst()
        return [posixpath.basename(entry.rstrip("/")) for entry in entries]

    def _create_directory_structure(self, ftp: FTP, directory_path: str) -> None:
        pwd = ftp.pwd()
        for directory in filter(None, directory_path.split("/")):
            if directory not in self._directory_names(ftp):
                logger.debug(f"Creating directory {directory}")
                try:
                    ftp.mkd(directory)
                except error_perm as e:
                    # Created by someone else in the meantime
                    if directory not in self._directory_names(ftp):
                        raise DepotPathError(directory, "create directory", e)
            ftp.cwd(directory)
        ftp.cwd(pwd)

    def _directory_names(self, ftp: FTP) -> List[str]:
        try:
            return self._list_names(ftp)
        except error_perm:
            # Empty directories make some servers answer "550 No files found"
            return []

    def _upload(self, ftp: FTP, source, destination: str, on_progress: Optional[ProgressCallback]) -> None:
        self._create_directory_structure(ftp, posixpath.dirname(destination))
        logger.info(f"Uploading file: {destination} to File Depot: {self.name}...")
        store_file(ftp, source, destination, on_progress)
        logger.info(f"Uploading file: {destination}... Complete")

    def _log_write_error(self, error: Exception) -> None:
        logger.error(
            f"Error '{str(error).strip()}', writing to FTP: [{redact(self._uri)}], "
            f"Username: [{self.username}]"
        )
