"""
Deprecated frozen-model entry point.

Kept apart from the router so it can be deleted without touching it.
"""

import warnings
from typing import Any, Optional, cast

from graphloader.core.locator import classify_frozen_model_locator
from graphloader.core.router import get_router
from graphloader.inference.graph_model import FrozenModel
from graphloader.logging_config import event_logger
from graphloader.models.options import ProgressCallback

DEPRECATION_MESSAGE = (
    "load_frozen_model() is going away. "
    "Use load_graph_model() instead, and note the positional argument changes."
)


def load_frozen_model(
    model_url: Optional[str],
    weights_manifest_url: Optional[str] = None,
    request_options: Any = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> FrozenModel:
    """
    Deprecated. Use `load_graph_model`.

    Load a frozen model through its URL. A `.json` URL is loaded as a
    JSON graph and the manifest URL is ignored; otherwise the URL names
    a binary frozen graph and, when `weights_manifest_url` is omitted,
    the manifest is expected next to it as weights_manifest.json.

    Args:
        model_url: URL of the model file.
        weights_manifest_url: URL of the weights manifest.
        request_options: Transport configuration (headers, auth, timeout).
        progress_callback: Called periodically with the completed fraction.

    Returns:
        The loaded model.

    Raises:
        ValueError: If model_url is None.
    """
    warnings.warn(DEPRECATION_MESSAGE, DeprecationWarning, stacklevel=2)
    event_logger.deprecated_call("load_frozen_model()", "load_graph_model()")

    locator = classify_frozen_model_locator(model_url, weights_manifest_url)
    return cast(FrozenModel, get_router().route(locator, request_options, progress_callback))
