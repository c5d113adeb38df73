"""Binary file transfer for the file depot client.

Streams a local file to an FTP session in fixed-size blocks,
reporting progress per block.
"""

import ftplib
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from file_depot.ftp.exceptions import DepotUploadError
from file_depot.utils.validators import validate_file_path

# Block size for FTP transfers (8KB)
BLOCK_SIZE = 8192


@dataclass
class UploadProgress:
    """Progress information for an upload operation."""
    remote_path: str
    file_name: str
    bytes_sent: int
    bytes_total: int

    @property
    def percent(self) -> float:
        """Upload progress as percentage (0-100)."""
        if self.bytes_total == 0:
            return 0.0
        return (self.bytes_sent / self.bytes_total) * 100.0


# Type alias for progress callback
ProgressCallback = Callable[[UploadProgress], None]


def store_file(
    ftp,
    local_path: Path,
    remote_path: str,
    on_progress: Optional[ProgressCallback] = None
) -> int:
    """
    Upload a single file via FTP in binary mode.

    Args:
        ftp: FTP connection
        local_path: Local file path
        remote_path: Remote FTP path, relative to the login directory
        on_progress: Progress callback

    Returns:
        Number of bytes transferred

    Raises:
        DepotUploadError: If the local file is missing or the transfer fails
    """
    local_path = Path(local_path)
    file_name = local_path.name

    is_valid, error = validate_file_path(local_path, must_exist=True)
    if not is_valid:
        raise DepotUploadError(file_name, remote_path, FileNotFoundError(error))

    file_size = local_path.stat().st_size
    bytes_sent = 0

    def callback(block: bytes) -> None:
        nonlocal bytes_sent
        bytes_sent += len(block)

        if on_progress:
            on_progress(UploadProgress(
                remote_path=remote_path,
                file_name=file_name,
                bytes_sent=bytes_sent,
                bytes_total=file_size
            ))

    try:
        with open(local_path, "rb") as f:
            ftp.storbinary(
                f"STOR {remote_path}",
                f,
                blocksize=BLOCK_SIZE,
                callback=callback
            )
    except ftplib.all_errors as e:
        raise DepotUploadError(file_name, remote_path, e)

    return bytes_sent
