"""
Temporal Loudness Integration (Glasberg & Moore)

Converts per-frame specific loudness into instantaneous (IL), short-term
(STL) and long-term (LTL) loudness for each ear.

Two asymmetric first-order smoothers in series:

    STL[k] = STL[k-1] + alpha * (IL[k]  - STL[k-1])
    LTL[k] = LTL[k-1] + alpha * (STL[k] - LTL[k-1])

alpha is the attack coefficient when the target is greater than the
previous value, otherwise the release coefficient:

    alpha = 1 - exp(-time_step / tau)

Technical assumptions:
- Input channels are uniformly spaced on the Cam scale, only the first
  two centre frequencies are used to obtain the spacing
- A single ear means diotic presentation, loudness is doubled
- The previous STL/LTL values are read back from the output bank,
  the output bank is zeroed at initialize() and at reset()
- One frame (sample 0 of the input block) per process() call

References:
- Glasberg & Moore (2002), J. Audio Eng. Soc. 50(5)
- Chen & Hu (2012), smoothing times of the CH2012 preset
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .auditory import freq_to_cam
from .signal_bank import SignalBank
from .stage import ConfigurationError
from ..utils.formatting import (
    format_bank_shape,
    format_cam,
    format_frequency,
    format_milliseconds,
)


# Output channel layout
IL_CHANNEL = 0
STL_CHANNEL = 1
LTL_CHANNEL = 2
NUM_OUTPUT_CHANNELS = 3

MAX_EARS = 2


@dataclass(frozen=True)
class TimeConstants:
    """
    Attack and release time constants in seconds.

    Attributes:
        attack_stl: Short-term loudness, rising input
        release_stl: Short-term loudness, falling input
        attack_ltl: Long-term loudness, rising STL
        release_ltl: Long-term loudness, falling STL
    """
    attack_stl: float
    release_stl: float
    attack_ltl: float
    release_ltl: float

    def __post_init__(self):
        for name in ("attack_stl", "release_stl", "attack_ltl", "release_ltl"):
            if getattr(self, name) <= 0:
                raise ValueError(f"Time constant {name} must be positive")

    @classmethod
    def from_per_ms_coefficients(
        cls,
        attack_stl: float,
        release_stl: float,
        attack_ltl: float,
        release_ltl: float,
    ) -> "TimeConstants":
        """
        Build from smoothing coefficients defined for a 1 ms time step.

        Glasberg & Moore publish their smoothing as alpha per 1 ms frame,
        the equivalent time constant is tau = -1 ms / ln(1 - alpha).
        """
        def tau(alpha: float) -> float:
            return -0.001 / np.log(1 - alpha)

        return cls(tau(attack_stl), tau(release_stl), tau(attack_ltl), tau(release_ltl))

    def coefficients(self, time_step: float) -> tuple[float, float, float, float]:
        """
        Discretized smoothing coefficients for a given time step.

        Returns:
            (attack_stl, release_stl, attack_ltl, release_ltl) coefficients
        """
        return tuple(
            float(1 - np.exp(-time_step / tau))
            for tau in (self.attack_stl, self.release_stl, self.attack_ltl, self.release_ltl)
        )


SMOOTHING_PRESETS: dict[str, TimeConstants] = {
    # Glasberg & Moore (2002)
    "GM2002": TimeConstants.from_per_ms_coefficients(0.045, 0.02, 0.01, 0.0005),
    # Glasberg & Moore (2003), faster long-term release
    "GM2003": TimeConstants.from_per_ms_coefficients(0.045, 0.02, 0.01, 0.005),
    # Chen & Hu (2012)
    "CH2012": TimeConstants(0.016, 0.032, 0.1, 2.0),
}

DEFAULT_PRESET = "GM2002"


class IntegratedLoudnessGM:
    """
    Short-term and long-term loudness stage.

    Usage:
        stage = IntegratedLoudnessGM("GM2002", c_param=1.53e-8)
        if stage.initialize(specific_loudness_bank):
            for frame in frames:
                stage.process(frame)
                stl = stage.output.get_sample(0, STL_CHANNEL, 0)

    Input bank: (ears, channels, 1) specific loudness per channel, with
    centre frequencies and frame rate set.
    Output bank: (ears, 3, 1) with IL, STL, LTL at channel 0, 1, 2.
    """

    def __init__(
        self,
        author: str = DEFAULT_PRESET,
        c_param: float = 1.0,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Create stage.

        Args:
            author: Name of the smoothing-time preset (see SMOOTHING_PRESETS)
            c_param: Loudness scaling constant
            logger: Optional logger (default: module logger)
        """
        self.name = "IntegratedLoudnessGM"
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.c_param = float(c_param)

        self.author = author
        if author not in SMOOTHING_PRESETS:
            self.logger.warning(
                "%s: Unknown smoothing preset '%s', using smoothing times "
                "given by Glasberg and Moore (2002).",
                self.name, author,
            )
            self.author = DEFAULT_PRESET
        self._time_constants = SMOOTHING_PRESETS[self.author]

        self.cam_step = 0.0
        self.time_step = 0.0
        self.loudness_scale = 0.0
        self.attack_stl_coef = 0.0
        self.release_stl_coef = 0.0
        self.attack_ltl_coef = 0.0
        self.release_ltl_coef = 0.0

        self._output = SignalBank()
        self._initialized = False

        self.logger.debug("%s: Constructed (%s).", self.name, self.author)

    @property
    def time_constants(self) -> TimeConstants:
        return self._time_constants

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def output(self) -> SignalBank:
        return self._output

    def initialize(self, input_bank: SignalBank) -> bool:
        """
        Derive scaling and smoothing coefficients from the input.

        Requires more than one input channel and one or two ears.

        Returns:
            True on success, False on invalid input configuration
        """
        try:
            self._configure(input_bank)
        except ConfigurationError as e:
            self.logger.error("%s: %s", self.name, e)
            self._initialized = False
            return False

        self._initialized = True
        return True

    def _configure(self, input_bank: SignalBank) -> None:
        if input_bank.n_channels <= 1:
            raise ConfigurationError("Insufficient number of input channels.")
        if not 0 < input_bank.n_ears <= MAX_EARS:
            raise ConfigurationError(
                f"A human has one or two ears, input has {input_bank.n_ears}."
            )

        # assumes uniformly spaced channels
        self.cam_step = (
            freq_to_cam(input_bank.get_centre_freq(1))
            - freq_to_cam(input_bank.get_centre_freq(0))
        )
        self.logger.debug(
            "%s: Filter spacing: %s, first channel at %s",
            self.name,
            format_cam(self.cam_step),
            format_frequency(input_bank.get_centre_freq(0)),
        )

        scale = self.c_param
        if input_bank.n_ears == 1:
            scale *= 2
            self.logger.debug(
                "%s: Diotic presentation, loudness will be multiplied by 2.", self.name
            )
        self.loudness_scale = scale * self.cam_step

        self.time_step = 1.0 / input_bank.frame_rate
        self.logger.debug("%s: Time step: %s", self.name, format_milliseconds(self.time_step))

        (
            self.attack_stl_coef,
            self.release_stl_coef,
            self.attack_ltl_coef,
            self.release_ltl_coef,
        ) = self._time_constants.coefficients(self.time_step)

        self._output = SignalBank()
        self._output.initialize(input_bank.n_ears, NUM_OUTPUT_CHANNELS, 1, input_bank.fs)
        self._output.set_frame_rate(input_bank.frame_rate)
        self.logger.debug(
            "%s: Output %s", self.name, format_bank_shape(*self._output.shape)
        )

    def process(self, input_bank: SignalBank) -> None:
        """
        Integrate one frame.

        Each ear is processed independently. The values written by the
        previous call are the smoother state for this one.
        """
        if not self._initialized:
            raise RuntimeError(f"{self.name}: process() called before successful initialize()")

        for ear in range(input_bank.n_ears):
            il = self.loudness_scale * float(np.sum(input_bank.get_frame(ear, 0)))

            prev_stl = self._output.get_sample(ear, STL_CHANNEL, 0)
            if il > prev_stl:
                stl = prev_stl + self.attack_stl_coef * (il - prev_stl)
            else:
                stl = prev_stl + self.release_stl_coef * (il - prev_stl)

            prev_ltl = self._output.get_sample(ear, LTL_CHANNEL, 0)
            if stl > prev_ltl:
                ltl = prev_ltl + self.attack_ltl_coef * (stl - prev_ltl)
            else:
                ltl = prev_ltl + self.release_ltl_coef * (stl - prev_ltl)

            self._output.set_frame(ear, 0, (il, stl, ltl))

    def reset(self) -> None:
        """
        Clear the smoother state.

        The state lives in the output bank, clearing it is all there is
        to do.
        """
        if self._initialized:
            self._output.clear()
