"""Records handed to a file depot for upload."""
