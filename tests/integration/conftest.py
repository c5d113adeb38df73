"""Local FTP depot server for integration testing.

Uses pyftpdlib to run an FTP server in a background thread whose
root directory holds an empty ``uploads`` depot directory.
"""

import tempfile
import threading
import time
from pathlib import Path
from typing import Optional

import pytest
from pyftpdlib.authorizers import DummyAuthorizer
from pyftpdlib.handlers import FTPHandler
from pyftpdlib.servers import FTPServer


class MockDepotFTPServer:
    """
    Local FTP server acting as a file depot.

    Usage:
        with MockDepotFTPServer(port=21212) as server:
            # Upload to server.uri
            # server.root_dir contains the served filesystem
            pass
    """

    DEFAULT_USER = "testuser"
    DEFAULT_PASS = "testpass"
    DEPOT_DIR = "uploads"

    def __init__(
        self,
        port: int = 21212,
        username: str = DEFAULT_USER,
        password: str = DEFAULT_PASS,
    ):
        """
        Initialize the server.

        Args:
            port: Port to listen on
            username: FTP username
            password: FTP password
        """
        self.port = port
        self.username = username
        self.password = password

        self._server: Optional[FTPServer] = None
        self._thread: Optional[threading.Thread] = None
        self._temp_dir: Optional[tempfile.TemporaryDirectory] = None
        self._root_dir: Optional[Path] = None

    @property
    def root_dir(self) -> Path:
        """Root directory of the served filesystem."""
        if self._root_dir is None:
            raise RuntimeError("Server not started")
        return self._root_dir

    @property
    def depot_dir(self) -> Path:
        """Local directory backing the depot base path."""
        return self.root_dir / self.DEPOT_DIR

    @property
    def host(self) -> str:
        """Server host address."""
        return "127.0.0.1"

    @property
    def uri(self) -> str:
        """Depot URI pointing at the uploads directory."""
        return f"ftp://{self.host}:{self.port}/{self.DEPOT_DIR}"

    def start(self) -> None:
        """Start the FTP server in a background thread."""
        self._temp_dir = tempfile.TemporaryDirectory(prefix="mock_depot_ftp_")
        self._root_dir = Path(self._temp_dir.name)
        self.depot_dir.mkdir()

        authorizer = DummyAuthorizer()
        authorizer.add_user(
            self.username,
            self.password,
            str(self._root_dir),
            perm="elradfmw"  # Full permissions
        )

        handler = type("DepotFTPHandler", (FTPHandler,), {})
        handler.authorizer = authorizer
        handler.passive_ports = range(60000, 60100)

        self._server = FTPServer((self.host, self.port), handler)

        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

        # Give server time to start
        time.sleep(0.2)

    def stop(self) -> None:
        """Stop the FTP server and clean up."""
        if self._server:
            self._server.close_all()

        if self._temp_dir:
            self._temp_dir.cleanup()

        self._server = None
        self._thread = None
        self._temp_dir = None
        self._root_dir = None

    def __enter__(self) -> "MockDepotFTPServer":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()


@pytest.fixture
def ftp_server():
    """Provide a running depot FTP server."""
    server = MockDepotFTPServer(port=21212)
    server.start()
    yield server
    server.stop()
