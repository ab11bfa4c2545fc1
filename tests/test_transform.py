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
"""Test the configured transform object."""

import re

import pytest
import torch

import ptdwt
from ptdwt import WaveletConfig, WaveletTransform, wavedec, wavedec2
from ptdwt.errors import UnknownWaveletError
from tests._mackey_glass import generate_mackey


@pytest.mark.parametrize("wavelet_string", ["haar", "db2", "D6"])
@pytest.mark.parametrize("mode", ["symmetric", "periodic", "zero"])
def test_round_trip(wavelet_string: str, mode: str) -> None:
    """A configured transform reconstructs its input."""
    transform = WaveletTransform(wavelet=wavelet_string, mode=mode, level=2)
    signal = generate_mackey(batch_size=4, length=64)
    coeffs = transform.wavedec(signal)
    assert len(coeffs) == 3
    assert torch.allclose(transform.waverec(coeffs), signal)


def test_matches_functions() -> None:
    """The object forwards its settings to the functional transforms."""
    config = WaveletConfig(wavelet="db3", mode="reflect", level="HIGH")
    transform = WaveletTransform(config)
    signal = torch.randn(40, dtype=torch.float64)
    for coeff, expected in zip(
        transform.wavedec(signal), wavedec(signal, "db3", "reflect", "HIGH")
    ):
        assert torch.equal(coeff, expected)


def test_kwargs_override_config() -> None:
    """Keyword arguments replace single fields of the given config."""
    config = WaveletConfig(wavelet="db2", level=1)
    transform = WaveletTransform(config, level=3, mode="zero")
    assert transform.config.wavelet == "db2"
    assert transform.config.level == 3
    assert transform.config.mode == "zero"
    # the given config is left untouched
    assert config.level == 1
    assert len(transform.wavedec(torch.randn(64))) == 4


def test_invalid_override() -> None:
    """Overrides are validated like a new config."""
    with pytest.raises(UnknownWaveletError):
        WaveletTransform(WaveletConfig(), wavelet="db42")


def test_2d_round_trip() -> None:
    """Images of odd size are reconstructed to their size."""
    transform = WaveletTransform(wavelet="haar", level=2)
    image = torch.randn(3, 17, 13, dtype=torch.float64)
    coeffs = transform.wavedec2(image)
    assert coeffs.size == (17, 13)
    assert len(coeffs.details) == 2
    assert coeffs.mask is not None
    assert torch.allclose(transform.waverec2(coeffs), image)


def test_2d_dimension_downgrade() -> None:
    """The downgrade setting reaches the 2d decomposition."""
    image = torch.randn(64, 4, dtype=torch.float64)
    transform = WaveletTransform(level="LOW", allow_dimension_downgrade=True)
    coeffs = transform.wavedec2(image)
    expected = wavedec2(image, "haar", level="LOW", allow_dimension_downgrade=True)
    assert len(coeffs.details) == len(expected.details) == 6
    assert torch.allclose(transform.waverec2(coeffs), image)


def test_repr() -> None:
    assert repr(WaveletTransform(wavelet="db4")).startswith("WaveletTransform(WaveletConfig(")


def test_package_version() -> None:
    """The package exposes its release version."""
    assert re.fullmatch(r"\d+\.\d+\.\d+(\.dev\d+)?", ptdwt.__version__)
