"""
Weights manifest URL derivation.

A binary frozen graph keeps its weights manifest next to it under a
fixed file name, so the manifest URL can be derived from the model URL
alone when the caller does not pass one.
"""

from typing import Optional

from graphloader.config import settings


def get_weights_manifest_url(model_url: Optional[str]) -> Optional[str]:
    """
    Derive the conventional weights manifest URL for a model URL.

    Purely lexical: everything up to the last "/" is kept and the
    manifest file name is appended. A URL without any "/" yields
    "/" + manifest name.

    Args:
        model_url: URL or path of the model file.

    Returns:
        The manifest URL, or None when model_url is None.

    Example:
        >>> get_weights_manifest_url("https://host/dir/model.pb")
        'https://host/dir/weights_manifest.json'
    """
    if model_url is None:
        return None
    base = model_url[:model_url.rfind("/")] if "/" in model_url else ""
    return f"{base}/{settings.DEFAULT_MANIFEST_NAME}"
