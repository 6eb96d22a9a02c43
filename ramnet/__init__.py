"""HTML building, HTTP/1.1 messages, a TCP client socket and expiring sessions."""

__version__ = "0.1.0"