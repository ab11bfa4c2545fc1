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
"""Serializable settings of a wavelet decomposition."""

from __future__ import annotations

import inspect
import json
import os
import warnings
from dataclasses import asdict, dataclass, field
from typing import Optional, Union

from .constants import DEFAULT_PADDING_MODE, PaddingMode, Rounding, Stepping
from .errors import NegativeLevelError
from .padding import _as_padding_mode
from .wavelets import wavelet_basis

__all__ = ["CONFIG_NAME", "WaveletConfig"]

CONFIG_NAME = "wavelet_config.json"


def _check_and_remove_unused_kwargs(cls, kwargs):
    """Remove keys that are no fields of the config class.

    Returns the filtered kwargs and the set of removed keys.
    """
    signature_parameters = inspect.signature(cls.__init__).parameters
    unexpected_kwargs = set(kwargs.keys()) - set(signature_parameters.keys())
    for key in unexpected_kwargs:
        del kwargs[key]
    return kwargs, unexpected_kwargs


@dataclass
class WaveletConfig:
    r"""
    This is the configuration class to store the settings of a wavelet decomposition. The method `save_pretrained`
    saves it in a directory, the method `from_pretrained` loads it from there.

    Args:
        wavelet (`str`): The name of a registered wavelet, see [`~ptdwt.wavelets.wavelist`].
        mode (Union[[`~ptdwt.constants.PaddingMode`], `str`]): The signal extension mode.
        level (`int` or `str`, *optional*): The decomposition level, or `LOW`/`HIGH` to compute the maximum level
            with that rounding. `None` is the same as `LOW`.
        stepping (`str`): `dyadic` or `block`, see [`~ptdwt.conv_transform.dwt`].
        allow_dimension_downgrade (`bool`): Whether 2d decompositions may continue after the smaller axis is
            exhausted.
    """

    wavelet: str = field(default="haar", metadata={"help": "Name of the wavelet, e.g. 'haar', 'db4' or 'D8'."})
    mode: Union[str, PaddingMode] = field(
        default=DEFAULT_PADDING_MODE, metadata={"help": "Signal extension mode at the boundaries."}
    )
    level: Optional[Union[int, str]] = field(
        default=None,
        metadata={"help": "Decomposition level, or 'LOW'/'HIGH' to use the maximum level with that rounding."},
    )
    stepping: Stepping = field(
        default="dyadic", metadata={"help": "Window offset of the forward transform, 'dyadic' or 'block'."}
    )
    allow_dimension_downgrade: bool = field(
        default=False, metadata={"help": "Let the larger image axis decide the maximum 2d level."}
    )

    def __post_init__(self):
        self.mode = _as_padding_mode(self.mode)
        # raises for unknown names
        wavelet_basis(self.wavelet)

        if isinstance(self.level, str):
            try:
                self.level = Rounding(self.level).value
            except ValueError as exc:
                raise ValueError(f"Invalid level: '{self.level}'. Must be an integer, 'LOW' or 'HIGH'.") from exc
        elif self.level is not None:
            if isinstance(self.level, bool) or not isinstance(self.level, int):
                raise ValueError(f"Invalid level: '{self.level}'. Must be an integer, 'LOW' or 'HIGH'.")
            if self.level < 0:
                raise NegativeLevelError(f"Level has to be non-negative, got {self.level}.")

        if self.stepping not in ("dyadic", "block"):
            raise ValueError(f"Invalid stepping: '{self.stepping}'. Must be one of: dyadic, block.")

    def to_dict(self) -> dict:
        r"""
        Returns the configuration as a dictionary of plain values.
        """
        output_dict = asdict(self)
        output_dict["mode"] = PaddingMode(self.mode).value
        return output_dict

    def save_pretrained(self, save_directory: str) -> None:
        r"""
        This method saves the configuration in a directory.

        Args:
            save_directory (`str`):
                The directory where the configuration will be saved.
        """
        if os.path.isfile(save_directory):
            raise AssertionError(f"Provided path ({save_directory}) should be a directory, not a file")

        os.makedirs(save_directory, exist_ok=True)
        output_path = os.path.join(save_directory, CONFIG_NAME)
        with open(output_path, "w") as writer:
            writer.write(json.dumps(self.to_dict(), indent=2, sort_keys=True))

    @classmethod
    def from_json_file(cls, path_json_file: str) -> dict:
        r"""
        Loads the configuration values from a json file.

        Args:
            path_json_file (`str`):
                The path to the json file.
        """
        with open(path_json_file) as file:
            return json.load(file)

    @classmethod
    def from_pretrained(cls, save_directory: str, **kwargs) -> WaveletConfig:
        r"""
        This method loads the configuration from a directory.

        Keys the configuration class does not know, e.g. written by a later version, are dropped with a warning.

        Args:
            save_directory (`str`):
                The directory where the configuration is saved.
            kwargs (additional keyword arguments, *optional*):
                Values overriding the loaded ones.
        """
        config_file = os.path.join(save_directory, CONFIG_NAME)
        if not os.path.isfile(config_file):
            raise ValueError(f"Can't find '{CONFIG_NAME}' at '{save_directory}'")

        loaded_attributes = cls.from_json_file(config_file)
        kwargs = {**loaded_attributes, **kwargs}
        kwargs, unexpected_kwargs = _check_and_remove_unused_kwargs(cls, kwargs)
        if unexpected_kwargs:
            warnings.warn(
                f"Unexpected keyword arguments {sorted(unexpected_kwargs)} for class {cls.__name__}, these are "
                "ignored. This probably means that you're loading a configuration file that was saved using a "
                "higher version of the library."
            )
        return cls(**kwargs)
