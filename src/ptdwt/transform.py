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
"""An object bundling a :class:`ptdwt.config.WaveletConfig` with the transforms."""

from __future__ import annotations

import dataclasses
from typing import Any, Optional

import torch

from .config import WaveletConfig
from .constants import WaveletCoeff2d
from .conv_transform import wavedec, waverec
from .conv_transform_2 import wavedec2, waverec2
from .wavelets import WaveletBasis, wavelet_basis


class WaveletTransform:
    """Multi level wavelet transforms with fixed settings.

    Args:
        config (WaveletConfig, optional): The settings. Defaults to
            ``WaveletConfig()``.
        **kwargs: Config fields overriding those of ``config``.

    Example:
        >>> import torch, ptdwt
        >>> transform = ptdwt.WaveletTransform(wavelet="db2", mode="periodic")
        >>> signal = torch.arange(16, dtype=torch.float64)
        >>> torch.allclose(transform.waverec(transform.wavedec(signal)), signal)
        True
    """

    def __init__(self, config: Optional[WaveletConfig] = None, **kwargs: Any) -> None:
        if config is None:
            config = WaveletConfig(**kwargs)
        elif kwargs:
            config = dataclasses.replace(config, **kwargs)
        self.config = config
        self.basis: WaveletBasis = wavelet_basis(config.wavelet)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.config})"

    def wavedec(self, data: Any) -> list[torch.Tensor]:
        """Decompose a signal, see :func:`ptdwt.wavedec`."""
        return wavedec(
            data,
            self.basis,
            self.config.mode,
            self.config.level,
            stepping=self.config.stepping,
        )

    def waverec(self, coeffs: list[torch.Tensor]) -> torch.Tensor:
        """Reconstruct a signal, see :func:`ptdwt.waverec`."""
        return waverec(coeffs, self.basis)

    def wavedec2(self, data: Any) -> WaveletCoeff2d:
        """Decompose an image, see :func:`ptdwt.wavedec2`."""
        return wavedec2(
            data,
            self.basis,
            self.config.mode,
            self.config.level,
            self.config.allow_dimension_downgrade,
            stepping=self.config.stepping,
        )

    def waverec2(self, coeffs: WaveletCoeff2d) -> torch.Tensor:
        """Reconstruct an image, see :func:`ptdwt.waverec2`."""
        return waverec2(coeffs, self.basis)
