"""
Pytest fixtures shared across all tests.

Provides mock backends, a router wired to them, and on-disk model
directories written with numpy.
"""

import json
from pathlib import Path
from typing import Dict

import numpy as np
import pytest

from graphloader.core.router import ModelLoadRouter
from graphloader.inference.backends import MockBackend

DENSE_KERNEL = np.arange(6, dtype=np.float32).reshape(2, 3)
DENSE_BIAS = np.array([1, -1, 7], dtype=np.int32)
QUANTIZED_VALUES = np.array([0, 1, 2, 255], dtype=np.uint8)
QUANT_SCALE = 0.5
QUANT_MIN = -1.0


@pytest.fixture
def binary_backend() -> MockBackend:
    """Provide a mock binary frozen-graph backend."""
    return MockBackend(model="binary-model")


@pytest.fixture
def json_backend() -> MockBackend:
    """Provide a mock JSON graph backend."""
    return MockBackend(model="json-model")


@pytest.fixture
def tfhub_backend() -> MockBackend:
    """Provide a mock TF-Hub backend."""
    return MockBackend(model="tfhub-model")


@pytest.fixture
def router(
    binary_backend: MockBackend,
    json_backend: MockBackend,
    tfhub_backend: MockBackend,
) -> ModelLoadRouter:
    """Provide a router wired to the mock backends."""
    return ModelLoadRouter(
        binary_backend=binary_backend,
        json_backend=json_backend,
        tfhub_backend=tfhub_backend,
    )


@pytest.fixture
def default_router(router: ModelLoadRouter, monkeypatch: pytest.MonkeyPatch) -> ModelLoadRouter:
    """Install the mock-wired router as the process-wide router."""
    monkeypatch.setattr("graphloader.core.router._default_router", router)
    return router


@pytest.fixture
def weights_manifest() -> list:
    """Provide a weights manifest with one shard per group."""
    return [
        {
            "paths": ["group1-shard1of1.bin"],
            "weights": [
                {"name": "dense/kernel", "shape": [2, 3], "dtype": "float32"},
                {"name": "dense/bias", "shape": [3], "dtype": "int32"},
            ],
        },
        {
            "paths": ["group2-shard1of1.bin"],
            "weights": [
                {
                    "name": "quantized/kernel",
                    "shape": [2, 2],
                    "dtype": "float32",
                    "quantization": {"dtype": "uint8", "scale": QUANT_SCALE, "min": QUANT_MIN},
                },
            ],
        },
    ]


def _write_shards(directory: Path) -> None:
    (directory / "group1-shard1of1.bin").write_bytes(
        DENSE_KERNEL.astype("<f4").tobytes() + DENSE_BIAS.astype("<i4").tobytes()
    )
    (directory / "group2-shard1of1.bin").write_bytes(QUANTIZED_VALUES.tobytes())


@pytest.fixture
def json_model_dir(tmp_path: Path, weights_manifest: list) -> Path:
    """Provide a directory holding model.json and its weight shards."""
    model_json: Dict = {
        "format": "graph-model",
        "generatedBy": "2.15.0",
        "convertedBy": "converter 4.17.0",
        "modelTopology": {"node": [{"name": "input", "op": "Placeholder"}]},
        "weightsManifest": weights_manifest,
        "signature": {"inputs": {"input": {"name": "input:0"}}},
        "userDefinedMetadata": {"labels": ["cat", "dog"]},
    }
    (tmp_path / "model.json").write_text(json.dumps(model_json))
    _write_shards(tmp_path)
    return tmp_path


@pytest.fixture
def frozen_model_dir(tmp_path: Path, weights_manifest: list) -> Path:
    """Provide a directory holding a binary frozen graph and its manifest."""
    (tmp_path / "tensorflowjs_model.pb").write_bytes(b"\x0a\x05input\x12\x0bPlaceholder")
    (tmp_path / "weights_manifest.json").write_text(json.dumps(weights_manifest))
    _write_shards(tmp_path)
    return tmp_path
