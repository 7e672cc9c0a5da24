"""In-memory task CRUD service over HTTP."""

__version__ = "0.1.0"
