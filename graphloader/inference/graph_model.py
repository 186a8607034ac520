"""
Loaded model handles.

A GraphModel owns the artifacts a backend fetched and the decoded
weights. Executing the graph belongs to a tensor runtime and is not
done here.
"""

from typing import Any, Dict, Optional

import numpy.typing as npt
import pandas as pd

from graphloader.inference.weights import decode_weights
from graphloader.models.artifacts import ModelArtifacts


class GraphModel:
    """
    A graph model loaded from a JSON graph.

    Example:
        model = load_graph_model("https://host/model/model.json")
        print(model.weights_summary())
    """

    def __init__(
        self,
        artifacts: ModelArtifacts,
        weights: Dict[str, npt.NDArray],
        model_url: Optional[str] = None,
    ) -> None:
        """
        Initialize the model.

        Args:
            artifacts: Artifacts produced by the handler.
            weights: Decoded weights keyed by name.
            model_url: Where the model came from, if it was a URL.
        """
        self._artifacts = artifacts
        self._weights = weights
        self.model_url = model_url

    @classmethod
    def from_artifacts(
        cls,
        artifacts: ModelArtifacts,
        model_url: Optional[str] = None,
    ) -> "GraphModel":
        """Decode the weights in `artifacts` and build a model."""
        weights = decode_weights(artifacts.weight_data, artifacts.weight_specs)
        return cls(artifacts, weights, model_url=model_url)

    @property
    def artifacts(self) -> ModelArtifacts:
        return self._artifacts

    @property
    def topology(self) -> Any:
        return self._artifacts.model_topology

    @property
    def weights(self) -> Dict[str, npt.NDArray]:
        """Decoded weights. The dict is a copy; the arrays are shared."""
        return dict(self._weights)

    @property
    def model_version(self) -> str:
        """Producer and converter versions, e.g. '2.15.0 4.17.0'."""
        generated_by = self._artifacts.generated_by or ""
        converted_by = self._artifacts.converted_by or ""
        return f"{generated_by} {converted_by}".strip()

    @property
    def signature(self) -> Optional[Dict[str, Any]]:
        return self._artifacts.signature

    @property
    def metadata(self) -> Optional[Dict[str, Any]]:
        return self._artifacts.user_defined_metadata

    def weights_summary(self) -> pd.DataFrame:
        """
        Tabulate the decoded weights.

        Returns:
            DataFrame with one row per weight: name, dtype, shape, size.
        """
        rows = [
            {
                "name": name,
                "dtype": str(array.dtype),
                "shape": tuple(array.shape),
                "size": int(array.size),
            }
            for name, array in self._weights.items()
        ]
        return pd.DataFrame(rows, columns=["name", "dtype", "shape", "size"])

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(model_url={self.model_url!r}, "
            f"n_weights={len(self._weights)})"
        )


class FrozenModel(GraphModel):
    """
    A model loaded from a binary frozen graph.

    The topology is the undecoded graph bytes.
    """

    @property
    def graph_bytes(self) -> bytes:
        topology = self._artifacts.model_topology
        return topology if isinstance(topology, bytes) else b""
