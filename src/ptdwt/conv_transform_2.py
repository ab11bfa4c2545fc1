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
"""Two-dimensional wavelet transforms built from the 1d transform.

The last two axes are the ``(row, column)`` axes of an image, leading axes
are batch axes. Every level filters along the rows first and along the
columns second.
"""

from __future__ import annotations

import logging
from typing import Any, Union

import torch

from ._util import _as_tensor, _check_same_device_dtype
from .analysis import get_analysis
from .constants import (
    DEFAULT_PADDING_MODE,
    DecompositionMode,
    LevelOption,
    PaddingMode,
    Rounding,
    Stepping,
    WaveletBands2d,
    WaveletCoeff2d,
    WaveletDetailTuple2d,
    WaveletMask2d,
)
from .conv_transform import _dwt, idwt, max_level
from .errors import InvalidShapeError, MismatchedLengthError, NegativeLevelError
from .wavelets import WaveletBasis, WaveletLike, wavelet_basis

logger = logging.getLogger(__name__)

__all__ = ["max_level2", "dwt2", "idwt2", "wavedec2", "waverec2"]


def _check_if_image(data: torch.Tensor) -> torch.Tensor:
    if data.dim() < 2:
        raise InvalidShapeError(
            f"2d transforms require at least two axes, got shape {list(data.shape)}."
        )
    if data.shape[-2] == 0 or data.shape[-1] == 0:
        raise InvalidShapeError(
            f"2d transforms require non-empty rows and columns, got shape {list(data.shape)}."
        )
    return data


def _transpose(data: torch.Tensor) -> torch.Tensor:
    return data.transpose(-2, -1)


def max_level2(
    size: tuple[int, int],
    wavelet: WaveletLike,
    rounding: Union[Rounding, str] = Rounding.LOW,
    allow_dimension_downgrade: bool = False,
) -> int:
    """Compute the maximum decomposition level of an image.

    Args:
        size (tuple[int, int]): The ``(rows, cols)`` of the image.
        wavelet: A wavelet name or basis, see :func:`ptdwt.wavelets.wavelet_basis`.
        rounding: ``LOW`` or ``HIGH``, see :func:`ptdwt.conv_transform.max_level`.
        allow_dimension_downgrade (bool): If False, the smaller axis limits
            the level. If True, the larger axis does and the smaller axis
            keeps being transformed after it is exhausted.

    Returns:
        The maximum level.
    """
    rows, cols = size
    levels = (max_level(rows, wavelet, rounding), max_level(cols, wavelet, rounding))
    return max(levels) if allow_dimension_downgrade else min(levels)


def dwt2(
    data: Any,
    wavelet: WaveletLike,
    mode: Union[PaddingMode, str] = DEFAULT_PADDING_MODE,
    decomposition_mode: DecompositionMode = "transform",
    *,
    stepping: Stepping = "dyadic",
) -> WaveletBands2d:
    """Compute a single level 2d discrete wavelet transform.

    Every row is transformed with :func:`ptdwt.conv_transform.dwt`, then every
    column of both row results.

    Args:
        data: The input image, transformed along the last two axes.
        wavelet: A wavelet name or basis, see :func:`ptdwt.wavelets.wavelet_basis`.
        mode: The signal extension mode. Defaults to ``symmetric``.
        decomposition_mode: See :func:`ptdwt.conv_transform.dwt`.
        stepping: See :func:`ptdwt.conv_transform.dwt`.

    Returns:
        The four subbands ``(ll, lh, hl, hh)``, indexed by spatial position.

    Raises:
        InvalidShapeError: If ``data`` has fewer than two axes or an empty axis.
    """
    data = _check_if_image(_as_tensor(data))
    return _dwt2(data, wavelet_basis(wavelet), mode, decomposition_mode, stepping)


def _dwt2(
    data: torch.Tensor,
    basis: WaveletBasis,
    mode: Union[PaddingMode, str],
    decomposition_mode: DecompositionMode,
    stepping: Stepping,
    weight: float = 1.0,
) -> WaveletBands2d:
    """Run a single 2d level, ``weight`` input samples per entry of ``data``."""
    res_lo, res_hi = _dwt(data, basis, mode, decomposition_mode, stepping, weight)
    # row results span one window of columns each
    weight = weight * basis.filter_length
    ll, lh = _dwt(
        _transpose(res_lo), basis, mode, decomposition_mode, stepping, weight
    )
    hl, hh = _dwt(
        _transpose(res_hi), basis, mode, decomposition_mode, stepping, weight
    )
    return WaveletBands2d(*map(_transpose, (ll, lh, hl, hh)))


def idwt2(
    approx: Any,
    detail: WaveletDetailTuple2d,
    wavelet: WaveletLike,
) -> torch.Tensor:
    """Compute a single level inverse 2d discrete wavelet transform.

    Args:
        approx: The ``ll`` band. It may exceed the detail bands by one
            trailing row or column, which is dropped.
        detail (WaveletDetailTuple2d): The ``(lh, hl, hh)`` bands.
        wavelet: A wavelet name or basis, see :func:`ptdwt.wavelets.wavelet_basis`.

    Returns:
        The reconstructed image.

    Raises:
        MismatchedLengthError: If the bands disagree in shape.
    """
    approx = _check_if_image(_as_tensor(approx))
    lh, hl, hh = (_check_if_image(_as_tensor(band)) for band in detail)
    if hl.shape != lh.shape or hh.shape != lh.shape:
        raise MismatchedLengthError(
            "Detail bands have to share a shape, got "
            f"{list(lh.shape)}, {list(hl.shape)} and {list(hh.shape)}."
        )

    rows, cols = lh.shape[-2:]
    if approx.shape[-2] == rows + 1:
        logger.debug("Dropping the last approximation row to match %d rows.", rows)
        approx = approx[..., :-1, :]
    if approx.shape[-1] == cols + 1:
        logger.debug("Dropping the last approximation column to match %d columns.", cols)
        approx = approx[..., :-1]
    if approx.shape != lh.shape:
        raise MismatchedLengthError(
            "Approximation and detail bands have to share a shape, got "
            f"{list(approx.shape)} and {list(lh.shape)}."
        )
    _check_same_device_dtype([approx, lh, hl, hh])

    basis = wavelet_basis(wavelet)
    res_lo = _transpose(idwt(_transpose(approx), _transpose(lh), basis))
    res_hi = _transpose(idwt(_transpose(hl), _transpose(hh), basis))
    return idwt(res_lo, res_hi, basis)


def _resolve_level2(
    level: LevelOption,
    size: tuple[int, int],
    wavelet: WaveletLike,
    allow_dimension_downgrade: bool,
) -> int:
    if level is None:
        level = Rounding.LOW
    if isinstance(level, str):
        return max_level2(size, wavelet, level, allow_dimension_downgrade)
    if isinstance(level, bool) or not isinstance(level, int):
        raise ValueError(f"Level has to be an integer or LOW/HIGH, got {level!r}.")
    highest = max_level2(size, wavelet, Rounding.HIGH, allow_dimension_downgrade)
    if level < 0 or level > highest:
        raise NegativeLevelError(
            f"Level has to be between 0 and {highest} for size {size}, got {level}."
        )
    return level


def _wavedec2(
    data: torch.Tensor,
    basis: WaveletBasis,
    mode: Union[PaddingMode, str],
    level: int,
    decomposition_mode: DecompositionMode,
    stepping: Stepping,
) -> WaveletMask2d:
    """Run the multi level 2d forward recursion with the given strategy."""
    analysis = get_analysis(decomposition_mode)
    details = []
    res_ll = analysis.marker(data)
    weight = 1.0
    for _ in range(level):
        res_ll, lh, hl, hh = _dwt2(
            res_ll, basis, mode, decomposition_mode, stepping, weight
        )
        details.append(WaveletDetailTuple2d(lh, hl, hh))
        weight *= basis.filter_length**2
    return WaveletMask2d(res_ll, details)


def wavedec2(
    data: Any,
    wavelet: WaveletLike,
    mode: Union[PaddingMode, str] = DEFAULT_PADDING_MODE,
    level: LevelOption = None,
    allow_dimension_downgrade: bool = False,
    *,
    stepping: Stepping = "dyadic",
) -> WaveletCoeff2d:
    """Compute the multi level 2d discrete wavelet transform.

    Next to the coefficients, the syntheticity mask and the contamination
    count of every coefficient are computed, see :mod:`ptdwt.analysis`.

    Args:
        data: The input image, transformed along the last two axes.
        wavelet: A wavelet name or basis, see :func:`ptdwt.wavelets.wavelet_basis`.
        mode: The signal extension mode. Defaults to ``symmetric``.
        level: The number of levels to compute, or ``LOW``/``HIGH`` to use
            :func:`max_level2` with that rounding. ``None`` is ``LOW``.
        allow_dimension_downgrade (bool): See :func:`max_level2`.
        stepping: See :func:`ptdwt.conv_transform.dwt`.

    Returns:
        The coefficients, ``details[0]`` for the first (finest) level, along
        with the input size and both mask trees.

    Raises:
        NegativeLevelError: If ``level`` is negative or above the
            ``HIGH`` rounded maximum level.
        InvalidShapeError: If ``data`` has fewer than two axes or an empty axis.

    Example:
        >>> import torch, ptdwt
        >>> coefficients = ptdwt.wavedec2(torch.ones(8, 8), "haar", level=2)
        >>> coefficients.approximation.shape
        torch.Size([2, 2])
    """
    data = _check_if_image(_as_tensor(data))
    basis = wavelet_basis(wavelet)
    size = (data.shape[-2], data.shape[-1])
    level = _resolve_level2(level, size, basis, allow_dimension_downgrade)
    logger.debug("Decomposing an image of size %s into %d levels.", size, level)

    coefficients = _wavedec2(data, basis, mode, level, "transform", stepping)
    mask = _wavedec2(data, basis, mode, level, "syntheticity", stepping)
    contamination = _wavedec2(data, basis, mode, level, "contamination", stepping)
    return WaveletCoeff2d(
        coefficients.approximation,
        coefficients.details,
        size,
        mask=mask,
        contamination=contamination,
    )


def waverec2(coeffs: WaveletCoeff2d, wavelet: WaveletLike) -> torch.Tensor:
    """Reconstruct an image from 2d wavelet coefficients.

    Args:
        coeffs (WaveletCoeff2d): The coefficients as returned by
            :func:`wavedec2`.
        wavelet: A wavelet name or basis, see :func:`ptdwt.wavelets.wavelet_basis`.

    Returns:
        The reconstructed image, cut to ``coeffs.size``.

    Raises:
        ValueError: If ``coeffs`` is not a :class:`WaveletCoeff2d`.
    """
    if not isinstance(coeffs, WaveletCoeff2d):
        raise ValueError(f"Expected WaveletCoeff2d, got {type(coeffs)}.")
    basis = wavelet_basis(wavelet)

    res_ll = _as_tensor(coeffs.approximation)
    for detail in reversed(coeffs.details):
        res_ll = idwt2(res_ll, detail, basis)

    rows, cols = coeffs.size
    if res_ll.shape[-2] > rows or res_ll.shape[-1] > cols:
        logger.debug(
            "Cutting the reconstruction of shape %s to size %s.",
            tuple(res_ll.shape[-2:]),
            coeffs.size,
        )
        res_ll = res_ll[..., :rows, :cols]
    return res_ll
