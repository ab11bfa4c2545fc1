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
"""Fast wavelet transformations based on torch.nn.functional.conv1d and its transpose.

This module treats the last axis as the time axis. Leading axes are batch
axes.
"""

from __future__ import annotations

import logging
import math
import warnings
from collections.abc import Sequence
from typing import Any, Optional, Union

import torch

from ._util import (
    _as_tensor,
    _check_length,
    _check_same_device_dtype,
    _flatten_coeffs,
    _fold_axes,
    _unfold_axes,
)
from .analysis import get_analysis
from .constants import (
    DEFAULT_PADDING_MODE,
    DecompositionMode,
    LevelOption,
    PaddingMode,
    Rounding,
    Stepping,
    WaveletCoeff2d,
)
from .errors import (
    ApproxDetailMismatchError,
    EmptyCoefficientsError,
    EmptyDataError,
    InvalidShapeError,
    NegativeLevelError,
    UndefinedCoefficientsError,
)
from .padding import _as_padding_mode, pad_widths
from .wavelets import WaveletBasis, WaveletLike, check_filters, wavelet_basis

logger = logging.getLogger(__name__)

__all__ = ["dwt", "idwt", "wavedec", "waverec", "max_level", "energy"]


def _as_rounding(rounding: Union[Rounding, str]) -> Rounding:
    try:
        return Rounding(rounding)
    except ValueError as err:
        raise ValueError(
            f"Rounding option not supported: {rounding}. Choose LOW or HIGH."
        ) from err


def _get_step(stepping: Stepping, filt_len: int) -> int:
    if stepping == "dyadic":
        return 2
    elif stepping == "block":
        if filt_len > 2:
            warnings.warn(
                "Block stepping with filters longer than two keeps fewer "
                "coefficients than samples, idwt cannot invert the result.",
                UserWarning,
                stacklevel=4,
            )
        return filt_len
    raise ValueError(f"Stepping not supported: {stepping}. Choose dyadic or block.")


def _check_signal(data: torch.Tensor) -> torch.Tensor:
    if data.dim() == 0:
        raise InvalidShapeError("Wavelet transforms require at least one axis.")
    return data


def max_level(
    data_length: int,
    wavelet: WaveletLike,
    rounding: Union[Rounding, str] = Rounding.LOW,
) -> int:
    """Compute the maximum useful decomposition level.

    The level is ``log2(data_length / (filter_length - 1))``, rounded down
    for ``LOW`` and up for ``HIGH``, and never below zero.

    Args:
        data_length (int): Number of samples.
        wavelet: A wavelet name or basis, see :func:`ptdwt.wavelets.wavelet_basis`.
        rounding: ``LOW`` or ``HIGH``. Defaults to ``LOW``.

    Returns:
        The maximum level, 0 for empty data.

    Raises:
        InvalidLengthError: If ``data_length`` is negative or not an integer.
    """
    data_length = _check_length(data_length, "Data length")
    filt_len = check_filters(wavelet_basis(wavelet).dec)
    rounding = _as_rounding(rounding)
    if data_length == 0:
        return 0
    ratio = math.log2(data_length / (filt_len - 1))
    level = math.floor(ratio) if rounding == Rounding.LOW else math.ceil(ratio)
    return max(0, level)


def _resolve_level(level: LevelOption, data_length: int, wavelet: WaveletLike) -> int:
    if level is None:
        level = Rounding.LOW
    if isinstance(level, str):
        return max_level(data_length, wavelet, level)
    if isinstance(level, bool) or not isinstance(level, int):
        raise ValueError(f"Level has to be an integer or LOW/HIGH, got {level!r}.")
    if level < 0:
        raise NegativeLevelError(f"Level has to be non-negative, got {level}.")
    return level


def dwt(
    data: Any,
    wavelet: WaveletLike,
    mode: Union[PaddingMode, str] = DEFAULT_PADDING_MODE,
    decomposition_mode: DecompositionMode = "transform",
    *,
    stepping: Stepping = "dyadic",
) -> tuple[torch.Tensor, torch.Tensor]:
    """Compute a single level discrete wavelet transform.

    The signal is padded with :func:`ptdwt.padding.pad_widths` samples and a
    window of the filter length slides over it. Every window contributes its
    dot product with the decomposition low-pass filter to the approximation
    and with the high-pass filter to the detail coefficients.

    Args:
        data: The signal, transformed along the last axis.
        wavelet: A wavelet name or basis, see :func:`ptdwt.wavelets.wavelet_basis`.
        mode: The signal extension mode. Defaults to ``symmetric``.
        decomposition_mode: ``transform`` computes coefficients.
            ``syntheticity`` and ``contamination`` treat ``data`` as a taint
            marker and propagate it instead, see :mod:`ptdwt.analysis`.
        stepping: ``dyadic`` moves the window by two samples. ``block`` moves
            it by the filter length, which for filters longer than two is not
            invertible. Defaults to ``dyadic``.

    Returns:
        A tuple ``(approx, detail)`` of equal length.

    Raises:
        EmptyDataError: If ``data`` is empty.

    Example:
        >>> import ptdwt
        >>> approx, detail = ptdwt.dwt([1.0, 1.0, 1.0, 1.0], "haar", "zero")
        >>> detail
        tensor([0., 0.], dtype=torch.float64)
    """
    data = _check_signal(_as_tensor(data))
    return _dwt(data, wavelet_basis(wavelet), mode, decomposition_mode, stepping)


def _dwt(
    data: torch.Tensor,
    basis: WaveletBasis,
    mode: Union[PaddingMode, str],
    decomposition_mode: DecompositionMode,
    stepping: Stepping,
    weight: float = 1.0,
) -> tuple[torch.Tensor, torch.Tensor]:
    """Run a single forward level, ``weight`` input samples per entry of ``data``."""
    filt_len = check_filters(basis.dec)
    mode = _as_padding_mode(mode)
    analysis = get_analysis(decomposition_mode)
    step = _get_step(stepping, filt_len)

    if data.shape[-1] == 0:
        raise EmptyDataError("Cannot transform zero length data.")

    padding = pad_widths(data.shape[-1], filt_len)
    padded = analysis.extend(data, padding, mode, weight)
    return analysis.filter(padded, basis.dec, mode, step)


def idwt(
    approx: Optional[Any],
    detail: Optional[Any],
    wavelet: WaveletLike,
) -> torch.Tensor:
    """Compute a single level inverse discrete wavelet transform.

    Every coefficient pair scales the reconstruction filters, which are
    accumulated at twice the coefficient index. ``filter_length - 2``
    samples are then removed from both ends.

    Args:
        approx: Approximation coefficients. ``None`` is read as zeros.
        detail: Detail coefficients. ``None`` is read as zeros.
        wavelet: A wavelet name or basis, see :func:`ptdwt.wavelets.wavelet_basis`.

    Returns:
        The reconstructed signal of length ``2 * len(approx) - filter_length + 2``.

    Raises:
        UndefinedCoefficientsError: If both inputs are ``None``.
        ApproxDetailMismatchError: If the inputs differ in shape.
        EmptyDataError: If the inputs are empty.
    """
    if approx is None and detail is None:
        raise UndefinedCoefficientsError(
            "Either approximation or detail coefficients have to be given."
        )
    if approx is None:
        detail = _check_signal(_as_tensor(detail))
        approx = torch.zeros_like(detail)
    elif detail is None:
        approx = _check_signal(_as_tensor(approx))
        detail = torch.zeros_like(approx)
    else:
        approx = _check_signal(_as_tensor(approx))
        detail = _check_signal(_as_tensor(detail))

    if approx.shape != detail.shape:
        raise ApproxDetailMismatchError(
            "Approximation and detail coefficients have to have equal length, "
            f"got {list(approx.shape)} and {list(detail.shape)}."
        )
    if approx.shape[-1] == 0:
        raise EmptyDataError("Cannot reconstruct from zero length coefficients.")
    torch_device, torch_dtype = _check_same_device_dtype([approx, detail])

    basis = wavelet_basis(wavelet)
    filt_len = check_filters(basis.rec)
    filt = torch.tensor(
        [basis.rec.low, basis.rec.high], device=torch_device, dtype=torch_dtype
    ).unsqueeze(1)

    res_lo, ds = _fold_axes(approx, 1)
    res_hi, _ = _fold_axes(detail, 1)
    res = torch.stack([res_lo, res_hi], 1)
    res = torch.nn.functional.conv_transpose1d(res, filt, stride=2).squeeze(1)

    trim = filt_len - 2
    if trim > 0:
        res = res[..., trim:-trim]
    return _unfold_axes(res, ds, 1)


def _wavedec(
    data: Any,
    wavelet: WaveletLike,
    mode: Union[PaddingMode, str],
    level: LevelOption,
    decomposition_mode: DecompositionMode,
    stepping: Stepping,
) -> list[torch.Tensor]:
    """Run the multi level forward recursion with the given strategy."""
    data = _check_signal(_as_tensor(data))
    basis = wavelet_basis(wavelet)
    analysis = get_analysis(decomposition_mode)
    level = _resolve_level(level, data.shape[-1], basis)
    logger.debug(
        "Decomposing %d samples into %d levels (%s).",
        data.shape[-1],
        level,
        decomposition_mode,
    )

    result_list = []
    res_lo = analysis.marker(data)
    weight = 1.0
    for _ in range(level):
        res_lo, res_hi = _dwt(
            res_lo, basis, mode, decomposition_mode, stepping, weight
        )
        result_list.append(res_hi)
        # every coefficient spans one window of the level below
        weight *= basis.filter_length
    result_list.append(res_lo)
    result_list.reverse()
    return result_list


def wavedec(
    data: Any,
    wavelet: WaveletLike,
    mode: Union[PaddingMode, str] = DEFAULT_PADDING_MODE,
    level: LevelOption = None,
    *,
    stepping: Stepping = "dyadic",
) -> list[torch.Tensor]:
    r"""Compute the analysis (forward) 1d fast wavelet transform.

    Args:
        data: The input signal, transformed along the last axis.
        wavelet: A wavelet name or basis, see :func:`ptdwt.wavelets.wavelet_basis`.
        mode: The signal extension mode. Defaults to ``symmetric``.
        level: The number of levels to compute, or ``LOW``/``HIGH`` to use
            :func:`max_level` with that rounding. ``None`` is ``LOW``.
        stepping: How the analysis window advances, see :func:`dwt`.

    Returns:
        A list::

            [cA_n, cD_n, cD_n-1, ..., cD2, cD1]

        containing the wavelet coefficients, where n denotes the level of
        decomposition. The first entry of the list (``cA_n``) is the
        approximation coefficient tensor. The following entries are the
        detail coefficients, from the coarsest to the finest level.

    Raises:
        NegativeLevelError: If ``level`` is negative.

    Example:
        >>> import ptdwt
        >>> coefficients = ptdwt.wavedec([1.0, 2.0, 3.0, 4.0], "haar", level=2)
        >>> len(coefficients)
        3
    """
    return _wavedec(data, wavelet, mode, level, "transform", stepping)


def waverec(coeffs: Sequence[Any], wavelet: WaveletLike) -> torch.Tensor:
    """Reconstruct a signal from wavelet coefficients.

    Args:
        coeffs: The coefficient list as returned by :func:`wavedec`.
        wavelet: A wavelet name or basis, see :func:`ptdwt.wavelets.wavelet_basis`.

    Returns:
        The reconstructed signal. Signals of odd length come back with one
        trailing sample in excess.

    Raises:
        EmptyCoefficientsError: If ``coeffs`` is empty.
    """
    if not coeffs:
        raise EmptyCoefficientsError("Cannot reconstruct from an empty coefficient list.")
    coeffs = [_check_signal(_as_tensor(coeff)) for coeff in coeffs]
    _check_same_device_dtype(coeffs)
    basis = wavelet_basis(wavelet)

    res_lo = coeffs[0]
    for res_hi in coeffs[1:]:
        # an odd length signal leaves one coefficient in excess
        if res_lo.shape[-1] == res_hi.shape[-1] + 1:
            logger.debug(
                "Dropping the last of %d approximation coefficients to match "
                "%d detail coefficients.",
                res_lo.shape[-1],
                res_hi.shape[-1],
            )
            res_lo = res_lo[..., :-1]
        res_lo = idwt(res_lo, res_hi, basis)
    return res_lo


def energy(values: Any) -> float:
    """Compute the sum of squares.

    Args:
        values: A tensor, array, number, (nested) sequence of those, or a
            :class:`ptdwt.constants.WaveletCoeff2d`, whose mask trees are
            ignored.

    Returns:
        The energy as a float.
    """
    if isinstance(values, WaveletCoeff2d):
        values = _flatten_coeffs(values)
    if isinstance(values, (list, tuple)):
        return float(sum(energy(value) for value in values))
    tensor = _as_tensor(values)
    return float(torch.sum(tensor**2))
