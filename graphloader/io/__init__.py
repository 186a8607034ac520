"""Transport and load handler components."""

from graphloader.io.handlers import (
    ArtifactsHandler,
    FileSystemHandler,
    HTTPRequestHandler,
    LoadHandler,
    get_load_handler,
)

__all__ = [
    "ArtifactsHandler",
    "FileSystemHandler",
    "HTTPRequestHandler",
    "LoadHandler",
    "get_load_handler",
]
