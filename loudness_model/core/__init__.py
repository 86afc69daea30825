"""
Core DSP module - block-streaming stages of the loudness model.

This module contains:
- SignalBank container (ears x channels x samples)
- Second-order recursive filter section (Biquad)
- Glasberg & Moore temporal loudness integration
- ERB-rate (Cam) scale conversions
"""

from .signal_bank import SignalBank, make_signal_bank
from .stage import Stage, ConfigurationError
from .auditory import freq_to_cam, cam_to_freq, cam_spaced_frequencies
from .biquad import Biquad
from .integrated_loudness import (
    IntegratedLoudnessGM,
    TimeConstants,
    SMOOTHING_PRESETS,
    DEFAULT_PRESET,
    IL_CHANNEL,
    STL_CHANNEL,
    LTL_CHANNEL,
)

__all__ = [
    "SignalBank",
    "make_signal_bank",
    "Stage",
    "ConfigurationError",
    "freq_to_cam",
    "cam_to_freq",
    "cam_spaced_frequencies",
    "Biquad",
    "IntegratedLoudnessGM",
    "TimeConstants",
    "SMOOTHING_PRESETS",
    "DEFAULT_PRESET",
    "IL_CHANNEL",
    "STL_CHANNEL",
    "LTL_CHANNEL",
]
