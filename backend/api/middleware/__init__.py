"""API middleware: authentication dependencies and error handling."""
