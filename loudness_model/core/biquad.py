"""
Biquad - Second-Order Recursive Filter Section

General purpose second-order IIR filter, usable with any b/a coefficient
pair (pre-emphasis, outer/middle ear weighting, DC blocking, ...).

Difference equation (Direct Form I):

    y[n] = b0*x[n] + b1*x[n-1] + b2*x[n-2] - a1*y[n-1] - a2*y[n-2]

with x[n] = input[n] * gain.

Technical assumptions:
- Coefficients are normalized by a0 during initialize()
- Delay line: [x[n-1], x[n-2], y[n-1], y[n-2]], handed to
  scipy.signal.lfilter as initial conditions for every block
- Only ear 0, channel 0 of the input bank is filtered
- No saturation or stability check, bad coefficients diverge
"""

import logging
from typing import Optional, Sequence

import numpy as np
from scipy import signal

from .signal_bank import SignalBank
from .stage import ConfigurationError
from ..utils.formatting import format_bank_shape


FILTER_ORDER = 2
NUM_TAPS = FILTER_ORDER + 1


class Biquad:
    """
    Second-order IIR filter stage.

    Usage:
        bq = Biquad([0.5, 0.5, 0.0], [1.0, 0.0, 0.0])
        if bq.initialize(input_bank):
            bq.process(input_bank)
            y = bq.output.get_signal(0, 0)

    State is kept between process() calls, so consecutive blocks of one
    stream are filtered seamlessly. Call reset() before an unrelated
    stream.
    """

    def __init__(
        self,
        b_coefs: Optional[Sequence[float]] = None,
        a_coefs: Optional[Sequence[float]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Create filter.

        Args:
            b_coefs: Feedforward taps [b0, b1, b2]
            a_coefs: Feedback taps [a0, a1, a2]
            logger: Optional logger (default: module logger)
        """
        self.name = "Biquad"
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.order = FILTER_ORDER

        self._b = np.zeros(0)
        self._a = np.zeros(0)
        self._gain = 1.0
        self._z = np.zeros(0)
        self._output = SignalBank()
        self._initialized = False

        if b_coefs is not None or a_coefs is not None:
            b_coefs = [] if b_coefs is None else b_coefs
            a_coefs = [] if a_coefs is None else a_coefs
            if len(b_coefs) != NUM_TAPS:
                self.logger.warning(
                    "%s: The order of this filter is %d. Length of feedforward "
                    "coefficients is inappropriate (%d). Continuing anyway.",
                    self.name, self.order, len(b_coefs),
                )
            if len(a_coefs) != NUM_TAPS:
                self.logger.warning(
                    "%s: The order of this filter is %d. Length of feedback "
                    "coefficients is inappropriate (%d). Continuing anyway.",
                    self.name, self.order, len(a_coefs),
                )
            self.set_b_coefs(b_coefs)
            self.set_a_coefs(a_coefs)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_b_coefs(self, b_coefs: Sequence[float]) -> None:
        """Set feedforward taps. Length is checked in initialize()."""
        self._b = np.array(b_coefs, dtype=np.float64)

    def set_a_coefs(self, a_coefs: Sequence[float]) -> None:
        """Set feedback taps. Length is checked in initialize()."""
        self._a = np.array(a_coefs, dtype=np.float64)

    def set_gain(self, gain: float) -> None:
        """Input gain applied to every sample before filtering."""
        self._gain = float(gain)

    @property
    def b_coefs(self) -> np.ndarray:
        return self._b.copy()

    @property
    def a_coefs(self) -> np.ndarray:
        return self._a.copy()

    @property
    def gain(self) -> float:
        return self._gain

    @property
    def delay_line(self) -> np.ndarray:
        """Current state [x[n-1], x[n-2], y[n-1], y[n-2]] (copy)."""
        return self._z.copy()

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def output(self) -> SignalBank:
        return self._output

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, input_bank: SignalBank) -> bool:
        """
        Prepare filter for the given input.

        Normalizes the coefficients by a0, allocates a zeroed delay line
        and an output bank with the input's channel count, block size
        and sample rate.

        Returns:
            True on success, False on inappropriate coefficients
        """
        try:
            self._configure(input_bank)
        except ConfigurationError as e:
            self.logger.error("%s: %s", self.name, e)
            self._initialized = False
            return False

        self._initialized = True
        self.logger.debug(
            "%s: Initialized, output %s",
            self.name,
            format_bank_shape(*self._output.shape),
        )
        return True

    def _configure(self, input_bank: SignalBank) -> None:
        if len(self._b) != NUM_TAPS or len(self._a) != NUM_TAPS:
            raise ConfigurationError("Inappropriate filter coefficients.")
        if self._a[0] == 0:
            raise ConfigurationError("Leading feedback coefficient a0 must not be zero.")

        self._normalize_coefs()

        self._z = np.zeros(2 * self.order)

        self._output = SignalBank()
        self._output.initialize(1, input_bank.n_channels, input_bank.n_samples, input_bank.fs)

    def _normalize_coefs(self) -> None:
        """Divide all taps by a0, so that a0 == 1."""
        a0 = self._a[0]
        self._b = self._b / a0
        self._a = self._a / a0

    def process(self, input_bank: SignalBank) -> None:
        """
        Filter one block.

        Causal filtering with scipy.signal.lfilter. The delay line left by
        the previous block is converted to the initial conditions of this
        one, so block boundaries are seamless.

        The block size must match the one seen at initialize(), a
        different size is a caller error and raises RuntimeError.
        """
        if not self._initialized:
            raise RuntimeError(f"{self.name}: process() called before successful initialize()")
        if input_bank.n_samples != self._output.n_samples:
            raise RuntimeError(
                f"{self.name}: Block size changed from {self._output.n_samples} "
                f"to {input_bank.n_samples} samples, initialize() again"
            )

        x_block = input_bank.get_signal(0, 0) * self._gain

        z0, z1, z2, z3 = self._z
        zi = signal.lfiltic(self._b, self._a, y=[z2, z3], x=[z0, z1])
        y_block, _ = signal.lfilter(self._b, self._a, x_block, zi=zi)

        if len(x_block) >= 2:
            self._z[:] = (x_block[-1], x_block[-2], y_block[-1], y_block[-2])
        else:
            self._z[:] = (x_block[-1], z0, y_block[-1], z2)

        self._output.set_signal(0, 0, y_block)

    def reset(self) -> None:
        """Zero the delay line and output. Coefficients and gain are kept."""
        if self._initialized:
            self._output.clear()
        self._z = np.zeros(2 * self.order)

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def frequency_response(
        self,
        fs: float,
        num_points: int = 1024,
    ) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Calculate frequency response of the current coefficient set.

        Gain is included. For documentation and verification of
        supplied coefficients, no design is performed.

        Args:
            fs: Sample rate in Hz
            num_points: Number of frequency points between 0 and fs/2

        Returns:
            Tuple of (frequencies in Hz, magnitude in dB, phase in degrees)
        """
        if len(self._b) != NUM_TAPS or len(self._a) != NUM_TAPS:
            raise ValueError("Inappropriate filter coefficients.")

        w, h = signal.freqz(self._b * self._gain, self._a, worN=num_points, fs=fs)

        magnitude_db = 20 * np.log10(np.abs(h) + 1e-10)
        phase_deg = np.angle(h, deg=True)

        return w, magnitude_db, phase_deg
