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
"""Filtering strategies of a single forward transform level.

A strategy decides what a forward transform computes from the padded
signal: wavelet coefficients, or a taint mask tracking which coefficients
are produced by padding rather than by input data.
"""

from __future__ import annotations

import abc

import torch

from ._util import _fold_axes, _unfold_axes
from .constants import TAINT_NOT_IMPLEMENTED, DecompositionMode, PaddingMode
from .padding import PaddingWidths, pad
from .wavelets import Filters

__all__ = [
    "Analysis",
    "TransformAnalysis",
    "SyntheticityAnalysis",
    "ContaminationAnalysis",
    "get_analysis",
]


class Analysis(abc.ABC):
    """Base class of the forward filtering strategies.

    Subclasses define the marker a decomposition starts from, the padding
    applied to it and how a padded sequence is filtered into an approximation
    and a detail band.
    """

    decomposition_mode: DecompositionMode

    def marker(self, data: torch.Tensor) -> torch.Tensor:
        """Return the sequence the first decomposition level operates on."""
        return data

    def padding_mode(self, mode: PaddingMode) -> PaddingMode:
        """Return the extension mode used for padding the marker."""
        return mode

    def extend(
        self,
        data: torch.Tensor,
        widths: PaddingWidths,
        mode: PaddingMode,
        weight: float = 1.0,
    ) -> torch.Tensor:
        """Pad the sequence a decomposition level operates on.

        Args:
            data (torch.Tensor): The sequence, padded along the last axis.
            widths (PaddingWidths): The front and back padding widths.
            mode (PaddingMode): The extension mode requested by the caller.
            weight (float): Number of input samples every entry of ``data``
                stands for. Only counting strategies use it.
        """
        return pad(data, widths, self.padding_mode(mode))

    @abc.abstractmethod
    def filter(
        self, padded: torch.Tensor, filters: Filters, mode: PaddingMode, step: int
    ) -> tuple[torch.Tensor, torch.Tensor]:
        """Filter windows of the padded sequence into two bands.

        Args:
            padded (torch.Tensor): The padded sequence, filtered along the
                last axis.
            filters (Filters): The decomposition filters.
            mode (PaddingMode): The extension mode requested by the caller.
            step (int): Offset between consecutive windows.

        Returns:
            A tuple ``(approx, detail)`` of equal shape.
        """


class TransformAnalysis(Analysis):
    """Dot products of every window with the low-pass and high-pass filter."""

    decomposition_mode: DecompositionMode = "transform"

    def filter(
        self, padded: torch.Tensor, filters: Filters, mode: PaddingMode, step: int
    ) -> tuple[torch.Tensor, torch.Tensor]:
        folded, ds = _fold_axes(padded, 1)
        filt = torch.tensor(
            [filters.low, filters.high], device=padded.device, dtype=padded.dtype
        ).unsqueeze(1)
        res = torch.nn.functional.conv1d(folded.unsqueeze(1), filt, stride=step)
        res_lo, res_hi = torch.split(res, 1, 1)
        return (
            _unfold_axes(res_lo.squeeze(1), ds, 1),
            _unfold_axes(res_hi.squeeze(1), ds, 1),
        )


class _TaintAnalysis(Analysis):
    def _not_implemented(
        self, padded: torch.Tensor, filters: Filters, step: int
    ) -> tuple[torch.Tensor, torch.Tensor]:
        windows = padded.unfold(-1, len(filters.low), step)
        nan = torch.full_like(windows[..., 0], TAINT_NOT_IMPLEMENTED)
        return nan, nan.clone()


class SyntheticityAnalysis(_TaintAnalysis):
    """Track which coefficients depend on input data at all.

    The marker holds 1 for every input sample and is padded with zeros. A
    coefficient is 1 when its window touches input data and 0 when padding
    alone produces it. For a Haar shaped filter under symmetric extension the
    window ``[1, 0]`` pairs the last sample with its own mirror image, so its
    detail coefficient is an exact synthetic zero.

    Other wavelets and modes are not supported and yield
    :data:`ptdwt.constants.TAINT_NOT_IMPLEMENTED`.
    """

    decomposition_mode: DecompositionMode = "syntheticity"

    def marker(self, data: torch.Tensor) -> torch.Tensor:
        return torch.ones_like(data)

    def padding_mode(self, mode: PaddingMode) -> PaddingMode:
        return PaddingMode.ZERO

    def filter(
        self, padded: torch.Tensor, filters: Filters, mode: PaddingMode, step: int
    ) -> tuple[torch.Tensor, torch.Tensor]:
        haar_shaped = len(filters.low) == 2 and filters.low[0] == filters.low[1]
        if not haar_shaped or mode != PaddingMode.SYMMETRIC:
            return self._not_implemented(padded, filters, step)

        windows = padded.unfold(-1, 2, step)
        first, second = windows[..., 0], windows[..., 1]
        synthetic = (first == 0) & (second == 0)
        mirrored = (first == 1) & (second == 0)
        zeros, ones = torch.zeros_like(first), torch.ones_like(first)
        approx = torch.where(synthetic, zeros, ones)
        detail = torch.where(synthetic | mirrored, zeros, ones)
        return approx, detail


class ContaminationAnalysis(_TaintAnalysis):
    """Count the synthetic samples behind every coefficient.

    The marker holds 0 for every input sample. A padded entry stands for as
    many synthetic samples as the entries of the level hold input samples, so
    the marker is padded with that weight and the sum over a window counts the
    synthetic samples behind it. At the first level the weight is one. Every
    window multiplies it by the window length, in 2d once for the row pass and
    once more for the column pass. Only filters of length two are supported,
    longer filters yield :data:`ptdwt.constants.TAINT_NOT_IMPLEMENTED`.
    """

    decomposition_mode: DecompositionMode = "contamination"

    def marker(self, data: torch.Tensor) -> torch.Tensor:
        return torch.zeros_like(data)

    def padding_mode(self, mode: PaddingMode) -> PaddingMode:
        return PaddingMode.ONE

    def extend(
        self,
        data: torch.Tensor,
        widths: PaddingWidths,
        mode: PaddingMode,
        weight: float = 1.0,
    ) -> torch.Tensor:
        synthetic = pad(torch.zeros_like(data), widths, self.padding_mode(mode))
        return pad(data, widths, PaddingMode.ZERO) + weight * synthetic

    def filter(
        self, padded: torch.Tensor, filters: Filters, mode: PaddingMode, step: int
    ) -> tuple[torch.Tensor, torch.Tensor]:
        if len(filters.low) != 2:
            return self._not_implemented(padded, filters, step)

        count = padded.unfold(-1, 2, step).sum(-1)
        return count, count.clone()


_ANALYSES: dict[str, Analysis] = {
    analysis.decomposition_mode: analysis
    for analysis in (
        TransformAnalysis(),
        SyntheticityAnalysis(),
        ContaminationAnalysis(),
    )
}


def get_analysis(decomposition_mode: DecompositionMode) -> Analysis:
    """Look up the filtering strategy of a decomposition mode.

    Raises:
        ValueError: If the decomposition mode is unknown.
    """
    try:
        return _ANALYSES[decomposition_mode]
    except KeyError as err:
        raise ValueError(
            f"Decomposition mode not supported: {decomposition_mode}. "
            f"Choose one of: {', '.join(_ANALYSES)}."
        ) from err
