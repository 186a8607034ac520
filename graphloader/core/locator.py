"""
Locator classification.

A load request is classified once, at the entry point, into one of four
locator kinds. The router then dispatches on the kind instead of
re-inspecting strings:

- BinaryLocator: a `.pb` frozen graph plus its weights manifest
- JsonLocator: a model.json URL (current and legacy call shapes)
- HandlerLocator: an opaque load handler object
- TFHubLocator: a TF-Hub module URL

Classification order matters since the conditions overlap.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

from graphloader.core.manifest import get_weights_manifest_url

BINARY_SUFFIX = ".pb"
JSON_SUFFIX = ".json"


class RouteKind:
    """Names of the routes, used in logs."""

    BINARY = "binary"
    JSON = "json"
    HANDLER = "handler"
    TFHUB = "tfhub"


@dataclass(frozen=True)
class BinaryLocator:
    """Binary frozen graph and the manifest describing its weights."""

    model_url: str
    weights_manifest_url: Optional[str]

    route = RouteKind.BINARY

    def describe(self) -> str:
        return self.model_url


@dataclass(frozen=True)
class JsonLocator:
    """URL of a JSON graph."""

    model_url: str

    route = RouteKind.JSON

    def describe(self) -> str:
        return self.model_url


@dataclass(frozen=True)
class HandlerLocator:
    """A load handler, forwarded without inspection."""

    handler: Any

    route = RouteKind.HANDLER

    def describe(self) -> str:
        return type(self.handler).__name__


@dataclass(frozen=True)
class TFHubLocator:
    """URL of a TF-Hub module."""

    module_url: str

    route = RouteKind.TFHUB

    def describe(self) -> str:
        return self.module_url


ModelLocator = Union[BinaryLocator, JsonLocator, HandlerLocator, TFHubLocator]


def classify_graph_model_locator(model_url: Any, from_tfhub: bool = False) -> ModelLocator:
    """
    Classify a locator passed to `load_graph_model`.

    Args:
        model_url: URL string or load handler.
        from_tfhub: Whether the caller flagged the URL as a TF-Hub module.

    Returns:
        The locator kind to route.

    Raises:
        ValueError: If model_url is None, or is not a string while
            from_tfhub is set.
    """
    if model_url is None:
        raise ValueError(
            "model_url in load_graph_model() cannot be None. Please provide a url "
            "or a load handler that loads the model"
        )

    if from_tfhub:
        if not isinstance(model_url, str):
            raise ValueError(
                "from_tfhub requires model_url to be a TF-Hub module url, "
                f"got {type(model_url).__name__}"
            )
        return TFHubLocator(module_url=model_url)

    # TODO: Drop the .pb branch once binary frozen graphs stop being served.
    if isinstance(model_url, str) and model_url.endswith(BINARY_SUFFIX):
        return BinaryLocator(
            model_url=model_url,
            weights_manifest_url=get_weights_manifest_url(model_url),
        )

    if isinstance(model_url, str):
        return JsonLocator(model_url=model_url)

    return HandlerLocator(handler=model_url)


def classify_frozen_model_locator(
    model_url: Optional[str],
    weights_manifest_url: Optional[str] = None,
) -> ModelLocator:
    """
    Classify a locator passed to the deprecated `load_frozen_model`.

    A `.json` URL routes to the JSON graph backend and ignores any
    manifest URL; everything else is a binary frozen graph whose
    manifest URL is derived when omitted.

    Raises:
        ValueError: If model_url is None.
    """
    if model_url is None:
        raise ValueError(
            "model_url in load_frozen_model() cannot be None. "
            "Please provide the url of a frozen model"
        )

    if isinstance(model_url, str) and model_url.endswith(JSON_SUFFIX):
        return JsonLocator(model_url=model_url)

    if weights_manifest_url is None:
        weights_manifest_url = get_weights_manifest_url(model_url)

    return BinaryLocator(model_url=model_url, weights_manifest_url=weights_manifest_url)
