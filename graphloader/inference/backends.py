"""
Backend Interfaces and Implementations.

Each backend turns one serialization variant into a model handle:

- BinaryGraphBackend: `.pb` frozen graph plus its weights manifest
- JsonGraphBackend: model.json graphs, from a URL or a load handler
- TFHubBackend: TF-Hub modules, resolved to their hosted model.json

The router depends on these interfaces, not on the concrete
implementations, so tests can swap in MockBackend.
"""

import time
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple

from graphloader.config import settings
from graphloader.inference.graph_model import FrozenModel, GraphModel
from graphloader.io.handlers import get_load_handler
from graphloader.logging_config import event_logger, get_logger
from graphloader.models.artifacts import ModelArtifacts, parse_weights_manifest
from graphloader.models.options import ProgressCallback

logger = get_logger(__name__)


class GraphBackendInterface(ABC):
    """
    Abstract interface for backends addressed by a single locator.

    Implemented by the JSON graph and TF-Hub backends.
    """

    @abstractmethod
    def load(
        self,
        model_url: Any,
        request_options: Any = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> GraphModel:
        """
        Load a model.

        Args:
            model_url: URL of the model (or a load handler, where supported).
            request_options: Transport configuration.
            progress_callback: Called with the completed fraction.

        Returns:
            The loaded model.
        """
        pass


class FrozenGraphBackendInterface(ABC):
    """Abstract interface for backends that need a separate weights manifest."""

    @abstractmethod
    def load(
        self,
        model_url: str,
        weights_manifest_url: str,
        request_options: Any = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> FrozenModel:
        """Load a binary frozen graph and the weights its manifest lists."""
        pass


class JsonGraphBackend(GraphBackendInterface):
    """
    Loader for model.json graphs.

    A string locator is fetched through the handler matching its
    scheme; any other locator is used as the load handler itself.

    Example:
        backend = JsonGraphBackend()
        model = backend.load("https://host/model/model.json")
    """

    def load(
        self,
        model_url: Any,
        request_options: Any = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> GraphModel:
        """
        Load a JSON graph.

        Raises:
            ValueError: If the locator is not a URL or a load handler,
                or the artifacts carry no model topology.
        """
        if isinstance(model_url, str):
            source = model_url
        else:
            if not callable(getattr(model_url, "load", None)):
                raise ValueError(
                    f"Expected a url or a load handler with a load() method, "
                    f"got {type(model_url).__name__}"
                )
            source = type(model_url).__name__

        start = time.perf_counter()
        try:
            if isinstance(model_url, str):
                with get_load_handler(model_url, request_options, progress_callback) as handler:
                    artifacts: ModelArtifacts = handler.load()
            else:
                # Caller-supplied handlers stay open; the caller owns them
                artifacts = model_url.load()
            if artifacts.model_topology is None:
                raise ValueError(f"Model artifacts from {source} have no model topology")
            model = GraphModel.from_artifacts(
                artifacts,
                model_url=model_url if isinstance(model_url, str) else None,
            )
        except Exception as e:
            logger.error(
                "Failed to load graph model",
                extra={"source": source, "error": str(e)},
            )
            raise

        event_logger.model_loaded(
            model_format=artifacts.format or "graph-model",
            url=source,
            load_time_ms=(time.perf_counter() - start) * 1000,
        )
        return model


class BinaryGraphBackend(FrozenGraphBackendInterface):
    """
    Loader for binary frozen graphs.

    Fetches the graph bytes, then the weights manifest, then every
    shard the manifest lists (relative to the manifest's location).
    The graph bytes are kept undecoded.
    """

    def load(
        self,
        model_url: str,
        weights_manifest_url: str,
        request_options: Any = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> FrozenModel:
        """
        Load a binary frozen graph.

        Raises:
            FileNotFoundError: If a local artifact is missing.
            requests.HTTPError: If a remote artifact cannot be fetched.
        """
        start = time.perf_counter()
        try:
            # The manifest may live on a different transport than the graph
            with get_load_handler(model_url, request_options) as graph_handler, \
                    get_load_handler(weights_manifest_url, request_options, progress_callback) as manifest_handler:
                graph_bytes = graph_handler.fetch(model_url)
                groups = parse_weights_manifest(manifest_handler.fetch_json(weights_manifest_url))
                weight_data = manifest_handler.fetch_weights(weights_manifest_url, groups)

            specs = [entry for group in groups for entry in group.weights]
            artifacts = ModelArtifacts(
                model_topology=graph_bytes,
                weight_specs=specs,
                weight_data=weight_data,
                format="frozen-graph",
            )
            model = FrozenModel.from_artifacts(artifacts, model_url=model_url)
        except Exception as e:
            logger.error(
                "Failed to load frozen model",
                extra={
                    "model_url": model_url,
                    "weights_manifest_url": weights_manifest_url,
                    "error": str(e),
                },
            )
            raise

        event_logger.model_loaded(
            model_format="frozen-graph",
            url=model_url,
            load_time_ms=(time.perf_counter() - start) * 1000,
        )
        return model


def resolve_tfhub_url(module_url: str) -> str:
    """
    Resolve a TF-Hub module URL to its hosted model.json.

    Example:
        >>> resolve_tfhub_url("https://tfhub.dev/google/imagenet/mobilenet_v2/2")
        'https://tfhub.dev/google/imagenet/mobilenet_v2/2/model.json?tfjs-format=file'
    """
    if not module_url.endswith("/"):
        module_url = module_url + "/"
    return f"{module_url}{settings.DEFAULT_MODEL_NAME}{settings.TFHUB_SEARCH_PARAM}"


class TFHubBackend(GraphBackendInterface):
    """Loader for TF-Hub modules, delegating to a JSON graph backend."""

    def __init__(self, json_backend: Optional[GraphBackendInterface] = None) -> None:
        """
        Initialize the TF-Hub backend.

        Args:
            json_backend: Backend that loads the resolved model.json.
        """
        self._json_backend = json_backend or JsonGraphBackend()

    def load(
        self,
        model_url: str,
        request_options: Any = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> GraphModel:
        resolved = resolve_tfhub_url(model_url)
        logger.info(
            "Resolved TF-Hub module",
            extra={"module_url": model_url, "model_url": resolved},
        )
        return self._json_backend.load(resolved, request_options, progress_callback)


class MockBackend:
    """
    Mock backend for testing.

    Stands in for any backend: records every call and either returns
    the configured model or raises the configured error.

    Example:
        backend = MockBackend(error=ConnectionError("offline"))
        router = ModelLoadRouter(json_backend=backend)
    """

    def __init__(
        self,
        model: Any = None,
        error: Optional[BaseException] = None,
    ) -> None:
        """
        Initialize the mock backend.

        Args:
            model: Value returned from load. Defaults to a fresh object.
            error: Exception raised from load instead of returning.
        """
        self.model = model if model is not None else object()
        self.error = error
        self.calls: List[Tuple[Any, ...]] = []

    def load(self, *args: Any) -> Any:
        """Record the call, then return the model or raise."""
        self.calls.append(args)
        logger.debug("Mock backend called", extra={"n_args": len(args)})
        if self.error is not None:
            raise self.error
        return self.model

    @property
    def called(self) -> bool:
        """Whether load was called at least once."""
        return bool(self.calls)
