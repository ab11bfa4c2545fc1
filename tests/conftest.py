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
"""Shared pytest configuration."""

import logging

import pytest
import torch


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: mark tests that run large parameter grids")


@pytest.fixture
def debug_log(caplog):
    """Capture the debug records of ptdwt."""
    caplog.set_level(logging.DEBUG, logger="ptdwt")
    return caplog


@pytest.fixture
def random_signal():
    """A seeded random float64 signal of 32 samples."""
    generator = torch.Generator().manual_seed(0)
    return torch.randn(32, generator=generator, dtype=torch.float64)
