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
"""Discrete wavelet transforms and boundary taint analysis in PyTorch."""

__version__ = "0.1.0"

from .config import WaveletConfig
from .constants import (
    SIGNAL_EXTENSION_MODES,
    TAINT_NOT_IMPLEMENTED,
    PaddingMode,
    Rounding,
    WaveletBands2d,
    WaveletCoeff2d,
    WaveletDetailTuple2d,
    WaveletMask2d,
)
from .conv_transform import dwt, energy, idwt, max_level, wavedec, waverec
from .conv_transform_2 import dwt2, idwt2, max_level2, wavedec2, waverec2
from .errors import (
    ApproxDetailMismatchError,
    EmptyCoefficientsError,
    EmptyDataError,
    InvalidFilterError,
    InvalidLengthError,
    InvalidShapeError,
    MismatchedLengthError,
    NegativeLevelError,
    UndefinedCoefficientsError,
    UnknownPaddingModeError,
    UnknownWaveletError,
    WaveletError,
)
from .padding import pad, pad_element, pad_widths
from .taint import wavedec2_mask, wavedec_mask
from .transform import WaveletTransform
from .wavelets import (
    Filters,
    WaveletBasis,
    basis_from_scaling_numbers,
    wavelet_basis,
    wavelist,
)
