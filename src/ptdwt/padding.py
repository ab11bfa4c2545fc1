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
"""Signal extension at the transform boundaries.

All functions extend the last axis of a tensor. Leading axes are batch axes
and are extended independently.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, NamedTuple, Union

import torch

from ._util import _as_tensor, _check_length
from .constants import DEFAULT_PADDING_MODE, PaddingMode
from .errors import (
    EmptyDataError,
    InvalidFilterError,
    InvalidShapeError,
    UnknownPaddingModeError,
)

__all__ = ["PaddingWidths", "pad", "pad_element", "pad_widths"]


class PaddingWidths(NamedTuple):
    """Number of synthetic samples in front of and behind the data."""

    front: int
    back: int


def _as_padding_mode(mode: Union[PaddingMode, str]) -> PaddingMode:
    try:
        return PaddingMode(mode)
    except ValueError as err:
        modes = ", ".join(member.value for member in PaddingMode)
        raise UnknownPaddingModeError(
            f"Padding mode not supported: {mode}. Choose one of: {modes}."
        ) from err


def _zero(data: torch.Tensor, index: int, inverse: bool) -> torch.Tensor:
    return data.new_zeros(data.shape[:-1])


def _one(data: torch.Tensor, index: int, inverse: bool) -> torch.Tensor:
    return data.new_ones(data.shape[:-1])


def _constant(data: torch.Tensor, index: int, inverse: bool) -> torch.Tensor:
    return data[..., 0] if inverse else data[..., -1]


def _symmetric(data: torch.Tensor, index: int, inverse: bool) -> torch.Tensor:
    length = data.shape[-1]
    inversions = index // length if inverse else index // length + 1
    if inversions % 2 == 0:
        return data[..., index % length]
    return data[..., length - 1 - index % length]


def _antisymmetric(data: torch.Tensor, index: int, inverse: bool) -> torch.Tensor:
    sign = -1.0 if (index // data.shape[-1]) % 2 == 0 else 1.0
    return sign * _symmetric(data, index, inverse)


def _periodic(data: torch.Tensor, index: int, inverse: bool) -> torch.Tensor:
    length = data.shape[-1]
    if inverse:
        return data[..., length - 1 - index % length]
    return data[..., index % length]


def _reflect(data: torch.Tensor, index: int, inverse: bool) -> torch.Tensor:
    length = data.shape[-1]
    if length == 1:
        return data[..., 0]
    period = length - 1
    inversions = index // period if inverse else index // period + 1
    if inversions % 2 == 0:
        return data[..., index % period + 1]
    return data[..., length - 2 - index % period]


def _smooth(data: torch.Tensor, index: int, inverse: bool) -> torch.Tensor:
    length = data.shape[-1]
    if inverse:
        offset = data[..., 0]
        slope = data[..., 0] if length == 1 else data[..., 0] - data[..., 1]
    else:
        offset = data[..., -1]
        slope = -data[..., 0] if length == 1 else data[..., -1] - data[..., -2]
    return offset + (index + 1) * slope


_PadFunction = Callable[[torch.Tensor, int, bool], torch.Tensor]

_PAD_ELEMENT: dict[PaddingMode, _PadFunction] = {
    PaddingMode.ZERO: _zero,
    PaddingMode.ONE: _one,
    PaddingMode.CONSTANT: _constant,
    PaddingMode.SYMMETRIC: _symmetric,
    PaddingMode.ANTISYMMETRIC: _antisymmetric,
    PaddingMode.PERIODIC: _periodic,
    PaddingMode.REFLECT: _reflect,
    PaddingMode.SMOOTH: _smooth,
}

_DATA_FREE_MODES = (PaddingMode.ZERO, PaddingMode.ONE)


def pad_element(
    data: Any,
    index: int,
    inverse: bool,
    mode: Union[PaddingMode, str] = DEFAULT_PADDING_MODE,
) -> torch.Tensor:
    """Compute a single synthetic sample of the extended signal.

    Args:
        data: The signal, extended along its last axis.
        index (int): Distance of the sample from the signal border, 0 being
            the sample directly next to it.
        inverse (bool): True for the front extension, False for the back
            extension.
        mode: The signal extension mode, see :class:`ptdwt.constants.PaddingMode`.

    Returns:
        The synthetic sample, a tensor with the batch shape of ``data``.

    Raises:
        EmptyDataError: If the mode reads from ``data`` and ``data`` is empty.
        InvalidLengthError: If ``index`` is negative or not an integer.
        UnknownPaddingModeError: If ``mode`` is not a padding mode.
    """
    mode = _as_padding_mode(mode)
    index = _check_length(index, "Padding index")
    data = _as_tensor(data)
    if data.dim() == 0:
        raise InvalidShapeError("Padding requires at least one axis.")
    if data.shape[-1] == 0 and mode not in _DATA_FREE_MODES:
        raise EmptyDataError(f"Padding mode '{mode.value}' requires non-empty data.")
    return _PAD_ELEMENT[mode](data, index, inverse)


def pad(
    data: Any,
    widths: tuple[int, int],
    mode: Union[PaddingMode, str] = DEFAULT_PADDING_MODE,
) -> torch.Tensor:
    """Extend a signal at both ends of its last axis.

    Args:
        data: The signal to extend.
        widths (tuple[int, int]): Number of samples to add in front of and
            behind the data.
        mode: The signal extension mode. Defaults to ``symmetric``.

    Returns:
        ``front`` synthetic samples, the data and ``back`` synthetic samples.

    Raises:
        InvalidLengthError: If a width is negative or not an integer.

    Example:
        >>> pad([1.0, 2.0, 3.0], (2, 2), "constant")
        tensor([1., 1., 1., 2., 3., 3., 3.], dtype=torch.float64)
    """
    front, back = widths
    front = _check_length(front, "Front padding width")
    back = _check_length(back, "Back padding width")
    data = _as_tensor(data)

    front_values = [pad_element(data, front - 1 - i, True, mode) for i in range(front)]
    back_values = [pad_element(data, i, False, mode) for i in range(back)]

    cat_list = [data]
    if front_values:
        cat_list.insert(0, torch.stack(front_values, -1))
    if back_values:
        cat_list.append(torch.stack(back_values, -1))
    return torch.cat(cat_list, dim=-1)


def pad_widths(data_length: int, filter_length: int) -> PaddingWidths:
    """Compute the padding for a single transform level.

    The front receives ``filter_length - 2`` samples. The back receives as
    many, or one more when ``data_length + filter_length`` is odd.

    Raises:
        InvalidLengthError: If a length is negative or not an integer.
        EmptyDataError: If ``data_length`` is zero.
        InvalidFilterError: If ``filter_length`` is below two.
    """
    data_length = _check_length(data_length, "Data length")
    filter_length = _check_length(filter_length, "Filter length")
    if data_length == 0:
        raise EmptyDataError("Cannot pad zero length data.")
    if filter_length < 2:
        raise InvalidFilterError(
            "Wavelet filter length has to be larger than or equal to two."
        )
    front = filter_length - 2
    if (data_length + filter_length) % 2 == 0:
        return PaddingWidths(front, filter_length - 2)
    return PaddingWidths(front, filter_length - 1)
