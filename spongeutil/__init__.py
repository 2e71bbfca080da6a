"""IPv4 addresses, shared byte buffers, file descriptor handles and a poll-based event loop."""

__version__ = "0.1.0"
__all__ = ["address", "buffer", "eventloop", "file_descriptor"]