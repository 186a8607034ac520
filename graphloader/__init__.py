"""
graphloader - load converted computation graphs into model handles.

Entry points:
- load_graph_model: current API, routes by locator and options
- load_frozen_model: deprecated API for binary frozen graphs
- load_tfhub_module: loads a TF-Hub module by its module URL
"""

__version__ = "1.0.0"

from graphloader.core import load_frozen_model, load_graph_model, load_tfhub_module
from graphloader.inference import FrozenModel, GraphModel
from graphloader.models import LoadOptions, RequestOptions

version_converter = __version__

__all__ = [
    "FrozenModel",
    "GraphModel",
    "LoadOptions",
    "RequestOptions",
    "load_frozen_model",
    "load_graph_model",
    "load_tfhub_module",
    "version_converter",
]
