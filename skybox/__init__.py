"""Protocol codec, buffers, event-loop pool, TCP accept loop and HTTP POST client for a file transfer service."""

__version__ = "0.1.0"