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
"""Exceptions raised by ptdwt.

Every error is a ``ValueError`` raised while validating input, so callers can
either catch a specific class, :class:`WaveletError`, or the builtin.
"""

__all__ = [
    "WaveletError",
    "EmptyDataError",
    "EmptyCoefficientsError",
    "InvalidLengthError",
    "InvalidShapeError",
    "MismatchedLengthError",
    "ApproxDetailMismatchError",
    "InvalidFilterError",
    "UnknownWaveletError",
    "UnknownPaddingModeError",
    "NegativeLevelError",
    "UndefinedCoefficientsError",
]


class WaveletError(ValueError):
    """Base class of all ptdwt input errors."""


class EmptyDataError(WaveletError):
    """Zero length data where a non-empty signal is required."""


class EmptyCoefficientsError(EmptyDataError):
    """A coefficient list without a single coefficient array."""


class InvalidLengthError(WaveletError):
    """A length or padding width that is not a non-negative integer."""


class InvalidShapeError(WaveletError):
    """An input whose number of axes does not fit the transform."""


class MismatchedLengthError(WaveletError):
    """Arrays that must agree in length do not."""


class ApproxDetailMismatchError(MismatchedLengthError):
    """Approximation and detail coefficients of unequal length."""


class InvalidFilterError(WaveletError):
    """A wavelet filter with fewer than two taps."""


class UnknownWaveletError(WaveletError):
    """A wavelet name that is not registered."""


class UnknownPaddingModeError(WaveletError):
    """A signal extension mode that does not exist."""


class NegativeLevelError(WaveletError):
    """A decomposition level below zero or above the computable maximum."""


class UndefinedCoefficientsError(WaveletError):
    """Neither approximation nor detail coefficients were given."""
