"""Configuration for the file depot client.

- DepotSettings: depot URI, login name and FTP options
- CredentialManager: depot passwords stored in the system keyring
"""
