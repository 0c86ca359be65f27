"""API trigger — request handler and its HTTP surface."""

from src.api.errors import ErrorKind, HandlerError
from src.api.handler import RequestHandler
from src.api.server import create_app, start_server

__all__ = [
    "ErrorKind",
    "HandlerError",
    "RequestHandler",
    "create_app",
    "start_server",
]
