"""file_depot: upload collected log files to an FTP depot."""

from file_depot.ftp.depot import FileDepotFtp
from file_depot.models.log_file import LogFile, Server, Zone

__all__ = ["FileDepotFtp", "LogFile", "Server", "Zone"]
__version__ = "1.0.0"
