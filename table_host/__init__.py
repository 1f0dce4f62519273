"""Table host package: serves the table engine to renderers over WebSockets."""

from .server import TableServer

__all__ = ["TableServer"]
