"""
Conversion Errors
Exception hierarchy shared by the pipeline, the engines and the entry points.
"""

from pathlib import Path
from typing import Union


class ConversionError(Exception):
    """Base class for every error raised by the converter."""


class ScanError(ConversionError):
    """No class-bearing elements were found in the input markup."""


class ConversionIOError(ConversionError):
    """Reading the input or writing an output failed."""

    def __init__(self, step: str, path: Union[str, Path], cause: Exception):
        self.step = step
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Failed to {step} ({self.path}): {cause}")


class EngineError(ConversionError):
    """The atomic-CSS engine could not generate CSS for a token set."""


class EngineUnavailableError(EngineError):
    """The atomic-CSS engine could not be set up at all."""


class ConfigError(ConversionError):
    """A Tailwind config file could not be evaluated."""


class SettingsError(ConversionError):
    """A converter settings file is malformed."""
