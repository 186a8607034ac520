"""
Model Load Router - picks the backend for a load request.

The router:
1. Classifies the locator once into a locator kind
2. Forwards the request to exactly one backend
3. Returns the backend's result, or lets its error propagate untouched

It performs no retries, no fallback between backends and no caching.
"""

from typing import Any, Dict, Optional, Union

from graphloader.core.locator import (
    BinaryLocator,
    HandlerLocator,
    JsonLocator,
    ModelLocator,
    TFHubLocator,
    classify_graph_model_locator,
)
from graphloader.inference.backends import (
    BinaryGraphBackend,
    FrozenGraphBackendInterface,
    GraphBackendInterface,
    JsonGraphBackend,
    TFHubBackend,
)
from graphloader.inference.graph_model import GraphModel
from graphloader.logging_config import event_logger, get_logger
from graphloader.models.options import LoadOptions, ProgressCallback

logger = get_logger(__name__)


def _coerce_options(options: Union[LoadOptions, Dict[str, Any], None]) -> LoadOptions:
    if options is None:
        return LoadOptions()
    if isinstance(options, LoadOptions):
        return options
    return LoadOptions.model_validate(options)


class ModelLoadRouter:
    """
    Routes load requests to backends.

    Uses dependency injection for the backends, allowing easy testing.

    Example:
        router = ModelLoadRouter(json_backend=MockBackend())
        model = router.load_graph_model("https://host/model.json")
    """

    def __init__(
        self,
        binary_backend: Optional[FrozenGraphBackendInterface] = None,
        json_backend: Optional[GraphBackendInterface] = None,
        tfhub_backend: Optional[GraphBackendInterface] = None,
    ) -> None:
        """
        Initialize the router.

        Args:
            binary_backend: Backend for `.pb` frozen graphs.
            json_backend: Backend for model.json URLs and load handlers.
            tfhub_backend: Backend for TF-Hub modules. Defaults to one
                delegating to `json_backend`.
        """
        self.binary_backend = binary_backend or BinaryGraphBackend()
        self.json_backend = json_backend or JsonGraphBackend()
        self.tfhub_backend = tfhub_backend or TFHubBackend(self.json_backend)

    def route(
        self,
        locator: ModelLocator,
        request_options: Any = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Any:
        """
        Forward a classified request to its backend.

        Args:
            locator: Result of a classify_* function.
            request_options: Passed to the backend verbatim.
            progress_callback: Passed to the backend verbatim.

        Returns:
            Whatever the backend returned.

        Raises:
            TypeError: If locator is not one of the locator kinds.
        """
        if not isinstance(locator, (BinaryLocator, JsonLocator, HandlerLocator, TFHubLocator)):
            raise TypeError(f"Unknown locator kind: {type(locator).__name__}")

        event_logger.load_routed(locator.route, locator.describe())

        if isinstance(locator, TFHubLocator):
            return self.tfhub_backend.load(locator.module_url, request_options, progress_callback)
        if isinstance(locator, BinaryLocator):
            return self.binary_backend.load(
                locator.model_url,
                locator.weights_manifest_url,
                request_options,
                progress_callback,
            )
        if isinstance(locator, JsonLocator):
            return self.json_backend.load(locator.model_url, request_options, progress_callback)
        return self.json_backend.load(locator.handler, request_options, progress_callback)

    def load_graph_model(
        self,
        model_url: Any,
        options: Union[LoadOptions, Dict[str, Any], None] = None,
    ) -> GraphModel:
        """
        Load a graph model given a URL to the model definition or a load handler.

        Routing, first match wins:
        1. options.from_tfhub -> TF-Hub backend
        2. URL ending in ".pb" -> binary backend, manifest URL derived
        3. anything else -> JSON graph backend

        Args:
            model_url: URL string or load handler.
            options: LoadOptions, or a dict of them (camelCase keys accepted).

        Returns:
            The model the chosen backend produced.

        Raises:
            ValueError: If model_url is None, or is not a string while
                from_tfhub is set. Raised before any backend is called.
        """
        options = _coerce_options(options)
        locator = classify_graph_model_locator(model_url, from_tfhub=options.from_tfhub)
        return self.route(locator, options.request_options, options.progress_callback)


_default_router: Optional[ModelLoadRouter] = None


def get_router() -> ModelLoadRouter:
    """
    Get the process-wide router wired to the real backends.

    Created on first use.
    """
    global _default_router
    if _default_router is None:
        _default_router = ModelLoadRouter()
    return _default_router


def load_graph_model(
    model_url: Any,
    options: Union[LoadOptions, Dict[str, Any], None] = None,
) -> GraphModel:
    """
    Load a graph model given a URL to the model definition.

    Example:
        model = load_graph_model(
            "https://storage.googleapis.com/tfjs-models/savedmodel/mobilenet_v2_1.0_224/model.json"
        )
        model = load_graph_model(
            "https://tfhub.dev/google/imagenet/mobilenet_v2_140_224/classification/2",
            {"fromTFHub": True},
        )

    Args:
        model_url: URL string or load handler.
        options: Load options (from_tfhub, request_options, progress_callback).

    Returns:
        The loaded GraphModel.
    """
    return get_router().load_graph_model(model_url, options)


def load_tfhub_module(
    module_url: str,
    request_options: Any = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> GraphModel:
    """
    Load a TF-Hub module directly, skipping locator classification.

    Example:
        model = load_tfhub_module(
            "https://tfhub.dev/google/imagenet/mobilenet_v2_140_224/classification/2"
        )
    """
    return get_router().tfhub_backend.load(module_url, request_options, progress_callback)
