"""Pytest configuration and shared fixtures for file depot tests."""

import pytest
from pathlib import Path

from file_depot.models.log_file import LogFile, Server, Zone


@pytest.fixture
def zone() -> Zone:
    """Zone owning the test server."""
    return Zone(name="default", id=1)


@pytest.fixture
def server(zone: Zone) -> Server:
    """Server whose logs are uploaded."""
    return Server(name="EVM", id=1, zone=zone)


@pytest.fixture
def local_log(tmp_path: Path) -> Path:
    """Create a local log file for uploading."""
    log_path = tmp_path / "file.txt"
    log_path.write_text("[----] I, [2026-10-19T00:00:00] INFO -- : evm started\n")
    return log_path


@pytest.fixture
def log_file(server: Server, local_log: Path) -> LogFile:
    """Log file collected from the test server."""
    return LogFile(resource=server, local_file=local_log)


@pytest.fixture
def region_key() -> str:
    """Remote file name expected for the log_file fixture."""
    return "Current_region_unknown_default_1_EVM_1.txt"
