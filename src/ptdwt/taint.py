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
"""Taint analysis of wavelet decompositions.

Boundary padding invents samples that do not exist in the input. The masks
computed here shadow the coefficient trees of :func:`ptdwt.wavedec` and
:func:`ptdwt.wavedec2` and tell, per coefficient, whether or how strongly it
is influenced by those synthetic samples.
"""

from __future__ import annotations

from typing import Any, Literal, Union

import torch

from ._util import _as_tensor
from .constants import (
    DEFAULT_PADDING_MODE,
    LevelOption,
    PaddingMode,
    Stepping,
    WaveletMask2d,
)
from .conv_transform import _wavedec
from .conv_transform_2 import _check_if_image, _resolve_level2, _wavedec2
from .wavelets import WaveletLike, wavelet_basis

__all__ = ["TaintVariant", "wavedec_mask", "wavedec2_mask"]

TaintVariant = Literal["syntheticity", "contamination"]
"""
This is a type literal for the taint masks.

- ``syntheticity``: 1 where a coefficient depends on input data, 0 where
  padding alone produces it.
- ``contamination``: the number of padded samples behind a coefficient.
"""


def _check_variant(variant: str) -> TaintVariant:
    if variant not in ("syntheticity", "contamination"):
        raise ValueError(
            f"Taint variant not supported: {variant}. "
            "Choose syntheticity or contamination."
        )
    return variant  # type: ignore[return-value]


def wavedec_mask(
    data: Any,
    wavelet: WaveletLike,
    mode: Union[PaddingMode, str] = DEFAULT_PADDING_MODE,
    level: LevelOption = None,
    variant: TaintVariant = "syntheticity",
    *,
    stepping: Stepping = "dyadic",
) -> list[torch.Tensor]:
    """Compute the taint mask of a 1d decomposition.

    Args:
        data: The input signal. Only its shape matters.
        wavelet: A wavelet name or basis, see :func:`ptdwt.wavelets.wavelet_basis`.
        mode: The signal extension mode of the decomposition.
        level: See :func:`ptdwt.wavedec`.
        variant: ``syntheticity`` or ``contamination``.
        stepping: See :func:`ptdwt.dwt`.

    Returns:
        A list shaped like the output of :func:`ptdwt.wavedec`. Unsupported
        wavelet and mode combinations are filled with
        :data:`ptdwt.constants.TAINT_NOT_IMPLEMENTED`.

    Example:
        >>> import ptdwt
        >>> ptdwt.wavedec_mask([1.0, 2.0, 3.0], "haar", level=1)[1]
        tensor([1., 0.], dtype=torch.float64)
    """
    return _wavedec(data, wavelet, mode, level, _check_variant(variant), stepping)


def wavedec2_mask(
    data: Any,
    wavelet: WaveletLike,
    mode: Union[PaddingMode, str] = DEFAULT_PADDING_MODE,
    level: LevelOption = None,
    variant: TaintVariant = "syntheticity",
    allow_dimension_downgrade: bool = False,
    *,
    stepping: Stepping = "dyadic",
) -> WaveletMask2d:
    """Compute the taint mask of a 2d decomposition.

    :func:`ptdwt.wavedec2` attaches both variants to its result. This function
    computes a single one without transforming the data.

    Args:
        data: The input image. Only its shape matters.
        wavelet: A wavelet name or basis, see :func:`ptdwt.wavelets.wavelet_basis`.
        mode: The signal extension mode of the decomposition.
        level: See :func:`ptdwt.wavedec2`.
        variant: ``syntheticity`` or ``contamination``.
        allow_dimension_downgrade (bool): See :func:`ptdwt.max_level2`.
        stepping: See :func:`ptdwt.dwt`.

    Returns:
        A mask tree shaped like the coefficients of :func:`ptdwt.wavedec2`.
    """
    variant = _check_variant(variant)
    data = _check_if_image(_as_tensor(data))
    basis = wavelet_basis(wavelet)
    size = (data.shape[-2], data.shape[-1])
    level = _resolve_level2(level, size, basis, allow_dimension_downgrade)
    return _wavedec2(data, basis, mode, level, variant, stepping)
