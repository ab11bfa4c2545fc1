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
"""Test the 1d convolution transforms."""

import math
from typing import Optional

import numpy as np
import pytest
import pywt
import torch

from ptdwt.constants import SIGNAL_EXTENSION_MODES, PaddingMode
from ptdwt.conv_transform import dwt, energy, idwt, max_level, wavedec, waverec
from ptdwt.errors import (
    ApproxDetailMismatchError,
    EmptyCoefficientsError,
    EmptyDataError,
    InvalidLengthError,
    MismatchedLengthError,
    NegativeLevelError,
    UndefinedCoefficientsError,
)
from ptdwt.wavelets import Filters, WaveletBasis, wavelet_basis, wavelist
from tests._mackey_glass import generate_mackey


def test_dwt_haar_example() -> None:
    """A constant signal has no detail."""
    approx, detail = dwt([1.0, 1.0, 1.0, 1.0], "haar", "zero")
    assert np.allclose(approx.numpy(), [math.sqrt(2), math.sqrt(2)])
    assert np.allclose(detail.numpy(), [0.0, 0.0])


def test_ripples_haar_lvl3() -> None:
    """Compute example from page 7 of Ripples in Mathematics, Jensen, la Cour-Harbo."""

    class _MyHaarFilterBank:
        @property
        def filter_bank(self) -> tuple[list[float], ...]:
            """Unscaled Haar wavelet filters."""
            return (
                [1 / 2, 1 / 2.0],
                [-1 / 2.0, 1 / 2.0],
                [1 / 2.0, 1 / 2.0],
                [1 / 2.0, -1 / 2.0],
            )

    data = torch.tensor([56.0, 40.0, 8.0, 24.0, 48.0, 48.0, 40.0, 16.0])
    wavelet = pywt.Wavelet("unscaled Haar Wavelet", filter_bank=_MyHaarFilterBank())
    coeffs = wavedec(data, wavelet, level=3)
    assert coeffs[0].tolist() == [35.0]
    assert coeffs[1].tolist() == [-3.0]
    assert coeffs[2].tolist() == [16.0, 10.0]
    assert coeffs[3].tolist() == [8.0, -8.0, 0.0, 12.0]


@pytest.mark.parametrize("wavelet_string", ["db1", "db2", "db3", "db4", "db5"])
@pytest.mark.parametrize("length", [32, 33])
@pytest.mark.parametrize("mode", SIGNAL_EXTENSION_MODES)
def test_dwt_pywt(wavelet_string: str, length: int, mode: PaddingMode) -> None:
    """Compare a single level against pywt."""
    data = generate_mackey(batch_size=1, length=length)[0]
    approx, detail = dwt(data, wavelet_string, mode)
    py_approx, py_detail = pywt.dwt(data.numpy(), wavelet_string, mode=mode.value)
    assert approx.shape == detail.shape
    assert np.allclose(approx.numpy(), py_approx)
    assert np.allclose(detail.numpy(), py_detail)


@pytest.mark.slow
@pytest.mark.parametrize("wavelet_string", ["db1", "db2", "db3", "db4", "db5", "db8"])
@pytest.mark.parametrize("level", [1, 2, 3, None])
@pytest.mark.parametrize("length", [64, 65])
@pytest.mark.parametrize("batch_size", [1, 3])
@pytest.mark.parametrize("mode", SIGNAL_EXTENSION_MODES)
@pytest.mark.parametrize("dtype", [torch.float32, torch.float64])
def test_conv_fwt1d(
    wavelet_string: str,
    level: Optional[int],
    mode: PaddingMode,
    length: int,
    batch_size: int,
    dtype: torch.dtype,
) -> None:
    """Test multiple convolution fwt, for various levels and padding options."""
    mackey_data = generate_mackey(batch_size=batch_size, length=length, dtype=dtype)
    ptcoeff = wavedec(mackey_data, wavelet_string, mode, level)
    assert all(coeff.dtype == dtype for coeff in ptcoeff)
    cptcoeff = torch.cat(ptcoeff, -1)
    py_level = level if level is not None else max_level(length, wavelet_string)
    py_list = []
    for b_el in range(batch_size):
        py_list.append(
            np.concatenate(
                pywt.wavedec(
                    mackey_data[b_el, :].double().numpy(),
                    wavelet_string,
                    level=py_level,
                    mode=mode.value,
                ),
                -1,
            )
        )
    py_coeff = np.stack(py_list)
    atol = 1e-5 if dtype == torch.float32 else 1e-10
    assert np.allclose(cptcoeff.double().numpy(), py_coeff, atol=atol)
    res = waverec(ptcoeff, wavelet_string)
    assert np.allclose(
        mackey_data.numpy(), res.numpy()[:, : mackey_data.shape[-1]], atol=atol
    )


@pytest.mark.parametrize("size", [[5, 10, 64], [1, 1, 32]])
@pytest.mark.parametrize("wavelet_string", ["haar", "db2"])
def test_conv_fwt1d_channel(size: list[int], wavelet_string: str) -> None:
    """Test channel dimension support."""
    data = torch.randn(*size, dtype=torch.float64)
    ptdwt_coeff = wavedec(data, wavelet_string, level=2)
    pywt_coeff = pywt.wavedec(data.numpy(), wavelet_string, mode="symmetric", level=2)
    assert all(
        np.allclose(ptdwtc.numpy(), pywtc)
        for ptdwtc, pywtc in zip(ptdwt_coeff, pywt_coeff)
    )
    rec = waverec(ptdwt_coeff, wavelet_string)
    assert np.allclose(data.numpy(), rec.numpy())


@pytest.mark.parametrize("wavelet_string", ["haar", "db3", "db6"])
@pytest.mark.parametrize("mode", ["zero", "symmetric", "periodic"])
def test_idwt_pywt(wavelet_string: str, mode: str, random_signal: torch.Tensor) -> None:
    """Compare a single inverse level against pywt, also with missing bands."""
    approx, detail = dwt(random_signal, wavelet_string, mode)
    py_approx, py_detail = approx.numpy(), detail.numpy()
    assert np.allclose(
        idwt(approx, detail, wavelet_string).numpy(),
        pywt.idwt(py_approx, py_detail, wavelet_string, mode=mode),
    )
    assert np.allclose(
        idwt(None, detail, wavelet_string).numpy(),
        pywt.idwt(None, py_detail, wavelet_string, mode=mode),
    )
    assert np.allclose(
        idwt(approx, None, wavelet_string).numpy(),
        pywt.idwt(py_approx, None, wavelet_string, mode=mode),
    )


@pytest.mark.slow
@pytest.mark.parametrize("wavelet_string", wavelist())
@pytest.mark.parametrize("mode", SIGNAL_EXTENSION_MODES)
@pytest.mark.parametrize("length", [8, 9, 50, 51])
def test_round_trip(wavelet_string: str, mode: PaddingMode, length: int) -> None:
    """Reconstruct every wavelet and mode, odd lengths keep one extra sample."""
    data = generate_mackey(batch_size=2, length=length)
    rec = waverec(wavedec(data, wavelet_string, mode, 2), wavelet_string)
    assert rec.shape[-1] == length + length % 2
    assert np.allclose(rec[..., :length].numpy(), data.numpy(), atol=1e-9)


@pytest.mark.parametrize("wavelet_string", ["haar", "db2", "db4"])
@pytest.mark.parametrize("length", range(8, 21))
@pytest.mark.parametrize("level", [1, 2, 3])
def test_waverec_trim(
    wavelet_string: str, length: int, level: int, debug_log: pytest.LogCaptureFixture
) -> None:
    """The approximation loses its last sample where a level had odd length."""
    data = torch.randn(length, dtype=torch.float64)
    coeffs = wavedec(data, wavelet_string, "symmetric", level)
    assert len(coeffs) == level + 1
    rec = waverec(coeffs, wavelet_string)
    assert rec.shape[-1] in (length, length + 1)
    assert np.allclose(rec[:length].numpy(), data.numpy())

    # a trim happens wherever an inner level saw an odd number of samples
    trims = sum(coeff.shape[-1] % 2 for coeff in coeffs[2:])
    dropping = [record for record in debug_log.records if "Dropping" in record.message]
    assert len(dropping) == trims


def test_waverec_keeps_even_lengths() -> None:
    """Even lengths at every level need no trimming."""
    data = torch.randn(64, dtype=torch.float64)
    rec = waverec(wavedec(data, "haar", "zero", 6), "haar")
    assert rec.shape == (64,)
    assert np.allclose(rec.numpy(), data.numpy())


@pytest.mark.parametrize("wavelet_string", ["haar", "db2", "db5", "db10"])
def test_max_level(wavelet_string: str) -> None:
    """The maximum level grows with the signal and agrees with pywt."""
    filt_len = wavelet_basis(wavelet_string).filter_length
    assert max_level(0, wavelet_string) == 0
    assert max_level(0, wavelet_string, "HIGH") == 0
    previous = 0
    for length in range(1, 300):
        low = max_level(length, wavelet_string)
        high = max_level(length, wavelet_string, "HIGH")
        assert low == pywt.dwt_max_level(length, filt_len)
        assert high >= low >= previous
        previous = low


def test_max_level_values() -> None:
    """Test the rounding on a few hand computed values."""
    assert max_level(8, "haar") == 3
    assert max_level(10, "haar") == 3
    assert max_level(10, "haar", "HIGH") == 4
    assert max_level(12, "db2") == 2
    assert max_level(2, "db10") == 0
    with pytest.raises(InvalidLengthError):
        max_level(-1, "haar")
    with pytest.raises(ValueError):
        max_level(8, "haar", "MIDDLE")


@pytest.mark.parametrize("wavelet_string", ["haar", "db2", "db7"])
def test_level_keywords(wavelet_string: str, random_signal: torch.Tensor) -> None:
    """None, LOW and HIGH resolve through max_level."""
    low = max_level(32, wavelet_string)
    high = max_level(32, wavelet_string, "HIGH")
    assert len(wavedec(random_signal, wavelet_string)) == low + 1
    assert len(wavedec(random_signal, wavelet_string, level="LOW")) == low + 1
    assert len(wavedec(random_signal, wavelet_string, level="HIGH")) == high + 1


def test_level_zero(random_signal: torch.Tensor) -> None:
    """Level zero returns the input as approximation."""
    coeffs = wavedec(random_signal, "db2", level=0)
    assert len(coeffs) == 1
    assert torch.equal(coeffs[0], random_signal)
    assert torch.equal(waverec(coeffs, "db2"), random_signal)


@pytest.mark.parametrize("wavelet_string", ["haar", "db2", "db5"])
@pytest.mark.parametrize("length", [16, 17])
def test_energy_preserved_with_zero_padding(
    wavelet_string: str, length: int
) -> None:
    """Orthogonal transforms keep the energy when padding adds none."""
    data = generate_mackey(batch_size=1, length=length)[0]
    approx, detail = dwt(data, wavelet_string, "zero")
    assert math.isclose(energy(data), energy(approx) + energy(detail), rel_tol=1e-9)
    coeffs = wavedec(data, wavelet_string, "zero", 3)
    assert math.isclose(energy(coeffs), energy(data), rel_tol=1e-9)


def test_energy_inputs() -> None:
    """Energy accepts numbers, sequences, arrays and tensors."""
    assert energy(3.0) == 9.0
    assert energy([3.0, 4.0]) == 25.0
    assert energy(np.array([[1.0, 2.0], [2.0, 0.0]])) == 9.0
    assert energy([torch.ones(3), [torch.ones(2)]]) == 5.0
    assert energy([]) == 0.0


@pytest.mark.parametrize("wavelet_string", ["haar", "db2", "db3"])
def test_block_stepping(wavelet_string: str, random_signal: torch.Tensor) -> None:
    """Block stepping keeps every ``L / 2``-th window of dyadic stepping."""
    filt_len = wavelet_basis(wavelet_string).filter_length
    approx, detail = dwt(random_signal, wavelet_string)
    if filt_len > 2:
        with pytest.warns(UserWarning):
            block_approx, block_detail = dwt(
                random_signal, wavelet_string, stepping="block"
            )
    else:
        block_approx, block_detail = dwt(random_signal, wavelet_string, stepping="block")
    stride = filt_len // 2
    padded_length = 32 + 2 * filt_len - 4
    assert block_approx.shape[-1] == (padded_length - filt_len) // filt_len + 1
    assert torch.allclose(block_approx, approx[::stride][: block_approx.shape[-1]])
    assert torch.allclose(block_detail, detail[::stride][: block_detail.shape[-1]])


def test_unknown_stepping(random_signal: torch.Tensor) -> None:
    """Unknown stepping names are rejected."""
    with pytest.raises(ValueError):
        dwt(random_signal, "haar", stepping="triadic")


def test_custom_basis(random_signal: torch.Tensor) -> None:
    """A literal basis transforms like the registered one."""
    haar = wavelet_basis("haar")
    literal = WaveletBasis(Filters(*haar.dec), Filters(*haar.rec))
    for mine, registered in zip(
        wavedec(random_signal, literal, level=3), wavedec(random_signal, "haar", level=3)
    ):
        assert torch.equal(mine, registered)


def test_errors(random_signal: torch.Tensor) -> None:
    """Test expected errors for invalid input."""
    with pytest.raises(EmptyDataError):
        dwt([], "haar")
    with pytest.raises(UndefinedCoefficientsError):
        idwt(None, None, "haar")
    with pytest.raises(NegativeLevelError):
        wavedec(random_signal, "haar", "zero", -1)
    with pytest.raises(ApproxDetailMismatchError):
        idwt([1.0, 2.0], [1.0], "haar")
    with pytest.raises(MismatchedLengthError):
        idwt([1.0, 2.0], [1.0], "haar")
    with pytest.raises(EmptyDataError):
        idwt([], [], "haar")
    with pytest.raises(EmptyCoefficientsError):
        waverec([], "haar")
    with pytest.raises(MismatchedLengthError):
        dwt(random_signal, WaveletBasis(Filters((1.0, 1.0), (1.0,)), Filters((1.0, 1.0), (1.0,))))
    with pytest.raises(ValueError):
        dwt(random_signal, "haar", decomposition_mode="fourier")
