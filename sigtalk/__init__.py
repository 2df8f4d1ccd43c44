"""Text messaging between processes, one bit per SIGUSR1/SIGUSR2 signal."""

__version__ = "0.1.0"
__all__ = ["protocol", "strutil", "server", "client"]