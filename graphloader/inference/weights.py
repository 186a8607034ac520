"""
Weight decoding.

Turns the concatenated weight buffer into named numpy arrays,
following the order of the weight specs.
"""

from typing import Dict, Sequence

import numpy as np
import numpy.typing as npt

from graphloader.logging_config import get_logger
from graphloader.models.artifacts import WeightEntry

logger = get_logger(__name__)

# Stored little-endian
_STORAGE_DTYPES = {
    "float32": np.dtype("<f4"),
    "int32": np.dtype("<i4"),
    "bool": np.dtype("u1"),
}
_QUANTIZED_DTYPES = {
    "uint8": np.dtype("u1"),
    "uint16": np.dtype("<u2"),
    "float16": np.dtype("<f2"),
}


def _storage_dtype(spec: WeightEntry) -> np.dtype:
    if spec.quantization is not None:
        return _QUANTIZED_DTYPES[spec.quantization.dtype]
    if spec.dtype not in _STORAGE_DTYPES:
        raise ValueError(
            f"Unsupported dtype '{spec.dtype}' for weight '{spec.name}'. "
            f"Supported: {sorted(_STORAGE_DTYPES)}"
        )
    return _STORAGE_DTYPES[spec.dtype]


def _dequantize(values: npt.NDArray, spec: WeightEntry) -> npt.NDArray:
    quantization = spec.quantization
    if quantization.dtype == "float16":
        restored = values.astype(np.float32)
    else:
        restored = values.astype(np.float32) * quantization.scale + quantization.min
    if spec.dtype == "int32":
        return np.round(restored).astype(np.int32)
    return restored.astype(np.float32)


def decode_weights(
    weight_data: bytes,
    specs: Sequence[WeightEntry],
) -> Dict[str, npt.NDArray]:
    """
    Slice and decode every weight out of a concatenated buffer.

    Args:
        weight_data: All shards of all groups, concatenated in manifest order.
        specs: Weight entries, in the same order.

    Returns:
        Mapping of weight name to array of the declared shape.

    Raises:
        ValueError: On an unsupported dtype, or a buffer whose size differs
            from what the specs describe.
    """
    weights: Dict[str, npt.NDArray] = {}
    offset = 0

    for spec in specs:
        dtype = _storage_dtype(spec)
        n_bytes = spec.size * dtype.itemsize
        if offset + n_bytes > len(weight_data):
            raise ValueError(
                f"Weight buffer too short for '{spec.name}': need {offset + n_bytes} "
                f"bytes, have {len(weight_data)}"
            )

        values = np.frombuffer(weight_data, dtype=dtype, count=spec.size, offset=offset)
        offset += n_bytes

        if spec.quantization is not None:
            values = _dequantize(values, spec)
        elif spec.dtype == "bool":
            values = values.astype(bool)
        else:
            values = values.astype(dtype.newbyteorder("="))

        weights[spec.name] = values.reshape(spec.shape)

    if offset != len(weight_data):
        logger.error(
            "Weight buffer larger than its specs",
            extra={"unused_bytes": len(weight_data) - offset},
        )
        raise ValueError(
            f"Weight buffer has {len(weight_data) - offset} bytes not described "
            f"by the weight specs ({offset} of {len(weight_data)} used)"
        )

    return weights
