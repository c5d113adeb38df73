"""Log file records uploaded to a depot.

A LogFile ties a local file to the server (and zone) that produced
it. Its remote directory and region-key file name are derived only
from those identifying attributes.
"""

import logging
import posixpath
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Union

logger = logging.getLogger("file_depot.log_file")

WHITESPACE = re.compile(r"\s+")

# Timestamp format for the logging window in file names
LOG_TIME_FORMAT = "%Y%m%d_%H%M%S"


@dataclass
class Zone:
    """Zone a server belongs to."""
    name: str
    id: int

    @property
    def name_id(self) -> str:
        return f"{self.name}_{self.id}"


@dataclass
class Server:
    """Server whose logs are collected."""
    name: str
    id: int
    zone: Zone

    @property
    def name_id(self) -> str:
        return f"{self.name}_{self.id}"


# Hook invoked once a log file has landed in the depot
UploadCallback = Callable[["LogFile"], None]


@dataclass
class LogFile:
    """A local log file collected from a server."""
    resource: Server
    local_file: Union[str, Path]
    historical: bool = False
    region: Optional[int] = None
    logging_started_on: Optional[datetime] = None
    logging_ended_on: Optional[datetime] = None
    remove_local_after_upload: bool = False
    state: str = "collected"
    log_uri: Optional[str] = None
    on_uploaded: List[UploadCallback] = field(default_factory=list)

    @property
    def zone(self) -> Zone:
        return self.resource.zone

    @property
    def destination_directory(self) -> str:
        """Remote directory relative to the depot base path."""
        return posixpath.join(self.zone.name_id, self.resource.name_id)

    @property
    def destination_file_name(self) -> str:
        """
        Region-key file name for the upload.

        e.g. ``Current_region_unknown_default_1_EVM_1.txt``; historical
        logs start with ``Archive`` and a known logging window appends
        its start and end times. Whitespace runs become underscores.
        """
        prefix = "Archive" if self.historical else "Current"
        region = self.region if self.region is not None else "unknown"
        name = (
            f"{prefix}_region_{region}"
            f"_{self.zone.name_id}_{self.resource.name_id}"
            f"{self._logging_window}{Path(self.local_file).suffix}"
        )
        return WHITESPACE.sub("_", name)

    @property
    def _logging_window(self) -> str:
        if self.logging_started_on is None or self.logging_ended_on is None:
            return ""
        started = self.logging_started_on.strftime(LOG_TIME_FORMAT)
        ended = self.logging_ended_on.strftime(LOG_TIME_FORMAT)
        return f"_{started}_{ended}"

    def relative_path_for_upload(self) -> str:
        """Remote path of the file relative to the depot base path."""
        return posixpath.join(self.destination_directory, self.destination_file_name)

    def mark_available(self, log_uri: str) -> None:
        """Record that the file is stored in the depot at ``log_uri``."""
        self.state = "available"
        self.log_uri = log_uri

    def post_upload_tasks(self) -> None:
        """Run completion hooks after a successful upload."""
        for callback in self.on_uploaded:
            callback(self)

        if self.remove_local_after_upload:
            local_path = Path(self.local_file)
            if local_path.exists():
                logger.info(f"Removing uploaded local file: {local_path}")
                local_path.unlink()
