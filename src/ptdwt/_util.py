# Copyright 2023-present the HuggingFace Inc. team.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Utility methods shared by the 1d and 2d transforms."""

from __future__ import annotations

from collections.abc import Callable
from functools import partial
from typing import Any, Union, cast, overload

import numpy as np
import torch

from .constants import (
    WaveletCoeff2d,
    WaveletDetailTuple2d,
    WaveletMask2d,
)
from .errors import InvalidLengthError


def _as_tensor(data: Any) -> torch.Tensor:
    """Convert array like input into a floating point tensor.

    Floating point tensors are returned unchanged. Integer tensors, numpy
    arrays, numbers and (nested) sequences become ``float64`` tensors.
    """
    if isinstance(data, torch.Tensor):
        if data.is_floating_point():
            return data
        return data.to(torch.float64)
    if isinstance(data, np.ndarray):
        return torch.from_numpy(data.astype(np.float64, copy=False))
    return torch.tensor(data, dtype=torch.float64)


def _check_length(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidLengthError(f"{name} has to be an integer, got {value!r}.")
    if value < 0:
        raise InvalidLengthError(f"{name} has to be non-negative, got {value}.")
    return value


def _fold_axes(data: torch.Tensor, keep_no: int) -> tuple[torch.Tensor, list[int]]:
    """Fold unchanged leading dimensions into a single batch dimension.

    Args:
        data (torch.Tensor): The input data array.
        keep_no (int): The number of dimensions to keep.

    Returns:
        A tuple (result_tensor, input_shape) where result_tensor is the
        folded result array, and input_shape the shape of the original input.
    """
    dshape = list(data.shape)
    return (
        torch.reshape(data, [int(np.prod(dshape[:-keep_no]))] + dshape[-keep_no:]),
        dshape,
    )


def _unfold_axes(data: torch.Tensor, ds: list[int], keep_no: int) -> torch.Tensor:
    """Unfold i.e. [batch*rows, cols] back to [batch, rows, cols]."""
    return torch.reshape(data, ds[:-keep_no] + list(data.shape[-keep_no:]))


def _check_same_device(
    tensor: torch.Tensor, torch_device: torch.device
) -> torch.Tensor:
    if torch_device != tensor.device:
        raise ValueError("coefficients must be on the same device")
    return tensor


def _check_same_dtype(tensor: torch.Tensor, torch_dtype: torch.dtype) -> torch.Tensor:
    if torch_dtype != tensor.dtype:
        raise ValueError("coefficients must have the same dtype")
    return tensor


@overload
def _coeff_tree_map(
    coeffs: list[torch.Tensor],
    function: Callable[[torch.Tensor], torch.Tensor],
) -> list[torch.Tensor]: ...


@overload
def _coeff_tree_map(
    coeffs: WaveletCoeff2d,
    function: Callable[[torch.Tensor], torch.Tensor],
) -> WaveletCoeff2d: ...


@overload
def _coeff_tree_map(
    coeffs: WaveletMask2d,
    function: Callable[[torch.Tensor], torch.Tensor],
) -> WaveletMask2d: ...


def _coeff_tree_map(
    coeffs: Union[list[torch.Tensor], WaveletCoeff2d, WaveletMask2d],
    function: Callable[[torch.Tensor], torch.Tensor],
) -> Union[list[torch.Tensor], WaveletCoeff2d, WaveletMask2d]:
    """Apply `function` to all coefficient tensors in `coeffs`.

    Conceptually, this function is inspired by the
    pytree processing philosophy of the JAX framework, see
    https://jax.readthedocs.io/en/latest/working-with-pytrees.html

    The ``size`` of a :class:`WaveletCoeff2d` is kept, its mask trees are
    mapped as well.

    Raises:
        ValueError: If the input type is not supported.
    """
    if isinstance(coeffs, (WaveletCoeff2d, WaveletMask2d)):
        approx = function(coeffs.approximation)
        details = [
            WaveletDetailTuple2d(*map(function, detail)) for detail in coeffs.details
        ]
        if isinstance(coeffs, WaveletMask2d):
            return WaveletMask2d(approx, details)
        return WaveletCoeff2d(
            approx,
            details,
            coeffs.size,
            mask=None if coeffs.mask is None else _coeff_tree_map(coeffs.mask, function),
            contamination=(
                None
                if coeffs.contamination is None
                else _coeff_tree_map(coeffs.contamination, function)
            ),
        )
    if isinstance(coeffs, list):
        result_lst = []
        for element in coeffs:
            if not isinstance(element, torch.Tensor):
                raise ValueError(f"Unexpected input type {type(element)}")
            result_lst.append(function(element))
        return result_lst
    raise ValueError(f"Unexpected input type {type(coeffs)}")


def _flatten_coeffs(
    coeffs: Union[list[torch.Tensor], WaveletCoeff2d, WaveletMask2d],
) -> list[torch.Tensor]:
    """List all coefficient tensors of a tree, approximation first."""
    flat_coeff_lst: list[torch.Tensor] = []

    def _collect(coeff: torch.Tensor) -> torch.Tensor:
        flat_coeff_lst.append(coeff)
        return coeff

    if isinstance(coeffs, WaveletCoeff2d):
        # masks shadow the coefficients and are not part of the signal.
        coeffs = WaveletMask2d(coeffs.approximation, coeffs.details)
    _coeff_tree_map(coeffs, _collect)
    return flat_coeff_lst


def _check_same_device_dtype(
    coeffs: Union[list[torch.Tensor], WaveletCoeff2d],
) -> tuple[torch.device, torch.dtype]:
    """Check coefficients for dtype and device consistency.

    Args:
        coeffs (Wavelet coefficients): Either a list of tensors (1d case) or
            a :class:`ptdwt.constants.WaveletCoeff2d` (2d case).

    Returns:
        A tuple (device, dtype) with the shared device and dtype of
        all tensors in coeffs.
    """
    flat = _flatten_coeffs(coeffs)
    torch_device, torch_dtype = flat[0].device, flat[0].dtype

    # check for all tensors in `coeffs` that the device matches `torch_device`
    _coeff_tree_map(
        cast(list[torch.Tensor], flat),
        partial(_check_same_device, torch_device=torch_device),
    )
    # check for all tensors in `coeffs` that the dtype matches `torch_dtype`
    _coeff_tree_map(
        cast(list[torch.Tensor], flat),
        partial(_check_same_dtype, torch_dtype=torch_dtype),
    )

    return torch_device, torch_dtype
