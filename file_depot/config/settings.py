"""Depot connection settings.

A depot is described by its URI, login name and FTP options. The
password is never part of the settings; it lives in the keyring.
"""

from dataclasses import dataclass, asdict, fields


@dataclass
class DepotSettings:
    """Everything needed to build a FileDepotFtp except the password."""

    name: str = ""
    uri: str = ""
    username: str = "anonymous"

    passive_mode: bool = True
    timeout: int = 30

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "DepotSettings":
        """Build settings from a mapping, dropping keys that are not settings (such as a password)."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
