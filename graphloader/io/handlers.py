"""
Load Handler Interface and Implementations.

A load handler produces the artifacts of one model. The JSON graph
backend accepts either a URL (and picks a handler for it) or a
handler object supplied by the caller, so new transports can be added
without touching the router.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, List, Optional

import requests

from graphloader.io.fetch import (
    coerce_request_options,
    http_get,
    is_http_url,
    read_local,
    weight_url,
)
from graphloader.logging_config import LoggerAdapter, get_logger
from graphloader.models.artifacts import ModelArtifacts, ModelJSON, WeightsGroup
from graphloader.models.options import ProgressCallback

logger = get_logger(__name__)


class LoadHandler(ABC):
    """
    Abstract interface for load handlers.

    Implementations must return the model's artifacts from `load`.
    """

    @abstractmethod
    def load(self) -> ModelArtifacts:
        """
        Produce the model artifacts.

        Returns:
            ModelArtifacts with topology, weight specs and weight bytes.
        """
        pass


class ArtifactsHandler(LoadHandler):
    """
    Base for handlers that read model.json and its weight shards.

    Subclasses only decide how a single URL is fetched.
    Handlers are context managers; leaving the block releases any
    transport resources they hold.
    """

    def __init__(
        self,
        url: str,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> None:
        """
        Initialize the handler.

        Args:
            url: URL or path of model.json.
            progress_callback: Called with the completed fraction after each shard.
        """
        self.url = url
        self._progress_callback = progress_callback
        self._log = LoggerAdapter(logger, {"model_url": url})

    @abstractmethod
    def fetch(self, url: str) -> bytes:
        """Fetch the bytes at a URL."""
        pass

    def close(self) -> None:
        """Release transport resources. Nothing to release by default."""

    def __enter__(self) -> "ArtifactsHandler":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def fetch_json(self, url: str) -> Any:
        return json.loads(self.fetch(url))

    def fetch_weights(self, listing_url: str, groups: List[WeightsGroup]) -> bytes:
        """
        Fetch every shard of every group and concatenate them.

        Shards are resolved relative to `listing_url`, the file that
        listed them (model.json or a weights manifest).
        """
        shard_urls = [
            weight_url(listing_url, path)
            for group in groups
            for path in group.paths
        ]
        chunks = []
        for i, shard_url in enumerate(shard_urls, start=1):
            self._log.debug("Fetching weight shard", extra={"shard_url": shard_url})
            chunks.append(self.fetch(shard_url))
            if self._progress_callback is not None:
                self._progress_callback(i / len(shard_urls))
        return b"".join(chunks)

    def load(self) -> ModelArtifacts:
        document = ModelJSON.model_validate(self.fetch_json(self.url))
        weight_data = self.fetch_weights(self.url, document.weights_manifest)
        self._log.info(
            "Model artifacts fetched",
            extra={"weight_bytes": len(weight_data), "format": document.format},
        )
        return ModelArtifacts.from_model_json(document, weight_data)


class HTTPRequestHandler(ArtifactsHandler):
    """
    Handler fetching artifacts over HTTP(S).

    One `requests.Session` is used for model.json and all shards.

    Example:
        with HTTPRequestHandler("https://host/model/model.json") as handler:
            artifacts = handler.load()
    """

    def __init__(
        self,
        url: str,
        request_options: Any = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> None:
        super().__init__(url, progress_callback)
        self._request_options = coerce_request_options(request_options)
        self._session = requests.Session()

    def fetch(self, url: str) -> bytes:
        return http_get(url, self._request_options, session=self._session)

    def close(self) -> None:
        self._session.close()


class FileSystemHandler(ArtifactsHandler):
    """Handler reading artifacts from local paths or file:// URLs."""

    def fetch(self, url: str) -> bytes:
        return read_local(url)


def get_load_handler(
    url: str,
    request_options: Any = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> ArtifactsHandler:
    """
    Pick the handler for a URL.

    http:// and https:// go over HTTP; file:// URLs and bare paths
    are read from disk.
    """
    if is_http_url(url):
        return HTTPRequestHandler(url, request_options, progress_callback)
    return FileSystemHandler(url, progress_callback)
