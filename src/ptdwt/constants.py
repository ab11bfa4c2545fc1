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
"""Constants and types used throughout ptdwt."""

import enum
from typing import Literal, NamedTuple, Optional, Union

import torch
from typing_extensions import TypeAlias

__all__ = [
    "PaddingMode",
    "Rounding",
    "Stepping",
    "DecompositionMode",
    "SIGNAL_EXTENSION_MODES",
    "DEFAULT_PADDING_MODE",
    "TAINT_NOT_IMPLEMENTED",
    "WaveletBands2d",
    "WaveletDetailTuple2d",
    "WaveletMask2d",
    "WaveletCoeff2d",
    "LevelOption",
]


class PaddingMode(str, enum.Enum):
    """
    Enum class for the supported signal extension modes.

    - ZERO: pads zeros.
    - CONSTANT: replicates the border values.
    - SYMMETRIC: mirrors samples along the border, repeating the edge sample.
    - PERIODIC: cyclically repeats samples.
    - SMOOTH: extrapolates the slope at the border linearly.
    - REFLECT: mirrors samples along the border without repeating the edge sample.
    - ANTISYMMETRIC: mirrors samples with a sign flip at every reflection.
    - ONE: pads ones. This is a marker used by the contamination analysis,
      not a physical extension.
    """

    ZERO = "zero"
    CONSTANT = "constant"
    SYMMETRIC = "symmetric"
    PERIODIC = "periodic"
    SMOOTH = "smooth"
    REFLECT = "reflect"
    ANTISYMMETRIC = "antisymmetric"
    ONE = "one"


SIGNAL_EXTENSION_MODES: tuple[PaddingMode, ...] = (
    PaddingMode.ZERO,
    PaddingMode.CONSTANT,
    PaddingMode.SYMMETRIC,
    PaddingMode.PERIODIC,
    PaddingMode.SMOOTH,
    PaddingMode.REFLECT,
    PaddingMode.ANTISYMMETRIC,
)
"""The physical extension modes, i.e. every mode except ``one``."""

DEFAULT_PADDING_MODE = PaddingMode.SYMMETRIC


class Rounding(str, enum.Enum):
    """
    Enum class for the rounding of the maximum decomposition level.

    - LOW: ``floor(log2(n / (filter_length - 1)))``
    - HIGH: ``ceil(log2(n / (filter_length - 1)))``
    """

    LOW = "LOW"
    HIGH = "HIGH"


Stepping = Literal["dyadic", "block"]
"""
This is a type literal for the way the analysis window advances.

- ``dyadic`` moves the window by two samples, i.e. a decimation by two.
- ``block`` moves the window by the whole filter length, consuming the
  padded signal in disjoint blocks. Both agree for filters of length two.
"""

DecompositionMode = Literal["transform", "syntheticity", "contamination"]
"""
This is a type literal selecting what a forward transform computes.

- ``transform`` computes wavelet coefficients.
- ``syntheticity`` computes a 0/1 mask, where 0 marks coefficients produced
  by padding alone.
- ``contamination`` counts the synthetic samples behind every coefficient.
"""

TAINT_NOT_IMPLEMENTED = float("nan")
"""Marker written into taint masks for unsupported wavelet and mode combinations.

It is not a transform result. Test for it with ``torch.isnan``.
"""


class WaveletBands2d(NamedTuple):
    """The four subbands of a single level 2d transform.

    ``ll`` is low-pass filtered along rows and columns, ``lh`` low-pass along
    rows and high-pass along columns, ``hl`` high-pass along rows and low-pass
    along columns and ``hh`` high-pass along both axes. All bands are indexed
    by spatial ``(row, column)`` position.
    """

    ll: torch.Tensor
    lh: torch.Tensor
    hl: torch.Tensor
    hh: torch.Tensor


class WaveletDetailTuple2d(NamedTuple):
    """Detail coefficients of a 2d wavelet transform for a given level."""

    lh: torch.Tensor
    hl: torch.Tensor
    hh: torch.Tensor


class WaveletMask2d(NamedTuple):
    """A taint mask tree with the shapes of a 2d coefficient tree.

    ``details[0]`` belongs to the first (finest) decomposition level.
    """

    approximation: torch.Tensor
    details: list[WaveletDetailTuple2d]


class WaveletCoeff2d(NamedTuple):
    """Result of a multi level 2d wavelet transform.

    Attributes:
        approximation: The ``ll`` band of the last level.
        details: Detail tuples, ``details[0]`` for the first (finest) level and
            ``details[-1]`` for the last (coarsest) level.
        size: The ``(rows, cols)`` of the transformed input. ``waverec2``
            uses it to strip rows and columns that only exist due to padding.
        mask: Syntheticity mask tree, 1 where a coefficient depends on input
            data and 0 where it is a synthetic product of padding.
        contamination: Contamination count tree, the number of synthetic
            samples behind every coefficient.
    """

    approximation: torch.Tensor
    details: list[WaveletDetailTuple2d]
    size: tuple[int, int]
    mask: Optional[WaveletMask2d] = None
    contamination: Optional[WaveletMask2d] = None


LevelOption: TypeAlias = Union[int, Rounding, str, None]
"""A decomposition level, or a rounding option for computing the maximum level."""
