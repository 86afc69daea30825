"""
SignalBank - multi-ear, multi-channel sample container

Carries data between loudness model stages.

Technical assumptions:
- Storage is a single float64 numpy array, Shape: (ears, channels, samples)
- Each stage owns its output bank, banks are never shared for writing
- Freshly allocated banks are zero-filled
- frame_rate defaults to the sample rate until explicitly set
"""

from typing import Optional
import numpy as np


class SignalBank:
    """
    Container for per-ear, per-channel sample blocks.

    Usage:
        bank = SignalBank()
        bank.initialize(n_ears=2, n_channels=40, n_samples=1, fs=32000)
        bank.set_frame_rate(1000)
        bank.set_centre_freqs(freqs)

        bank.set_sample(0, 3, 0, 0.25)
        frame = bank.get_frame(0, 0)  # all channels of ear 0, sample 0

    A "frame" is one time step of a (possibly decimated) signal. For
    frame based stages, frame_rate is the rate at which new frames
    arrive and differs from fs.
    """

    def __init__(self):
        self._data = np.zeros((0, 0, 0))
        self.fs: float = 0.0
        self.frame_rate: float = 0.0
        self._centre_freqs = np.zeros(0)

    def initialize(
        self,
        n_ears: int,
        n_channels: int,
        n_samples: int,
        fs: float,
    ) -> None:
        """
        Allocate zeroed storage.

        Args:
            n_ears: Number of ears (0 allowed, describes an empty bank)
            n_channels: Number of channels per ear
            n_samples: Number of samples per channel
            fs: Sample rate in Hz
        """
        if n_ears < 0:
            raise ValueError(f"Number of ears must not be negative, got: {n_ears}")
        if n_channels < 1:
            raise ValueError(f"Number of channels must be at least 1, got: {n_channels}")
        if n_samples < 1:
            raise ValueError(f"Number of samples must be at least 1, got: {n_samples}")
        if fs <= 0:
            raise ValueError(f"Sample rate must be positive, got: {fs}")

        self._data = np.zeros((n_ears, n_channels, n_samples), dtype=np.float64)
        self.fs = float(fs)
        self.frame_rate = float(fs)
        self._centre_freqs = np.zeros(n_channels, dtype=np.float64)

    @property
    def n_ears(self) -> int:
        return self._data.shape[0]

    @property
    def n_channels(self) -> int:
        return self._data.shape[1]

    @property
    def n_samples(self) -> int:
        return self._data.shape[2]

    @property
    def shape(self) -> tuple[int, int, int]:
        """(ears, channels, samples)"""
        return self._data.shape

    @property
    def data(self) -> np.ndarray:
        """Underlying storage (view, not a copy)."""
        return self._data

    @property
    def centre_freqs(self) -> np.ndarray:
        """Centre frequency of every channel in Hz (copy)."""
        return self._centre_freqs.copy()

    def set_frame_rate(self, frame_rate: float) -> None:
        if frame_rate <= 0:
            raise ValueError(f"Frame rate must be positive, got: {frame_rate}")
        self.frame_rate = float(frame_rate)

    def set_centre_freqs(self, centre_freqs) -> None:
        """
        Set the centre frequency of every channel.

        Args:
            centre_freqs: Sequence of frequencies in Hz, one per channel
        """
        freqs = np.asarray(centre_freqs, dtype=np.float64)
        if freqs.shape != (self.n_channels,):
            raise ValueError(
                f"Expected {self.n_channels} centre frequencies, got shape: {freqs.shape}"
            )
        self._centre_freqs = freqs.copy()

    def get_centre_freq(self, channel: int) -> float:
        self._check_channel(channel)
        return float(self._centre_freqs[channel])

    def get_sample(self, ear: int, channel: int, sample: int) -> float:
        self._check_index(ear, channel, sample)
        return float(self._data[ear, channel, sample])

    def set_sample(self, ear: int, channel: int, sample: int, value: float) -> None:
        self._check_index(ear, channel, sample)
        self._data[ear, channel, sample] = value

    def get_frame(self, ear: int, sample: int = 0) -> np.ndarray:
        """All channel values of one ear at one sample index (copy)."""
        self._check_index(ear, 0, sample)
        return self._data[ear, :, sample].copy()

    def set_frame(self, ear: int, sample: int, values) -> None:
        """Write all channel values of one ear at one sample index."""
        self._check_index(ear, 0, sample)
        values = np.asarray(values, dtype=np.float64)
        if values.shape != (self.n_channels,):
            raise ValueError(
                f"Expected {self.n_channels} values, got shape: {values.shape}"
            )
        self._data[ear, :, sample] = values

    def set_signal(self, ear: int, channel: int, values) -> None:
        """Write a complete block into one ear/channel."""
        self._check_index(ear, channel, 0)
        values = np.asarray(values, dtype=np.float64)
        if values.shape != (self.n_samples,):
            raise ValueError(
                f"Expected {self.n_samples} samples, got shape: {values.shape}"
            )
        self._data[ear, channel, :] = values

    def get_signal(self, ear: int, channel: int) -> np.ndarray:
        """Complete block of one ear/channel (copy)."""
        self._check_index(ear, channel, 0)
        return self._data[ear, channel, :].copy()

    def clear(self) -> None:
        """Zero all samples. Shape and metadata are kept."""
        self._data.fill(0.0)

    def _check_channel(self, channel: int) -> None:
        if not 0 <= channel < self.n_channels:
            raise IndexError(
                f"Channel {channel} out of range (0..{self.n_channels - 1})"
            )

    def _check_index(self, ear: int, channel: int, sample: int) -> None:
        if not 0 <= ear < self.n_ears:
            raise IndexError(f"Ear {ear} out of range (0..{self.n_ears - 1})")
        self._check_channel(channel)
        if not 0 <= sample < self.n_samples:
            raise IndexError(
                f"Sample {sample} out of range (0..{self.n_samples - 1})"
            )

    def __repr__(self) -> str:
        return (
            f"SignalBank(ears={self.n_ears}, channels={self.n_channels}, "
            f"samples={self.n_samples}, fs={self.fs:g}, frame_rate={self.frame_rate:g})"
        )


def make_signal_bank(
    data: np.ndarray,
    fs: float,
    frame_rate: Optional[float] = None,
    centre_freqs=None,
) -> SignalBank:
    """
    Build a SignalBank from an existing array.

    Args:
        data: Array of shape (ears, channels, samples), copied
        fs: Sample rate in Hz
        frame_rate: Optional frame rate (default: fs)
        centre_freqs: Optional per-channel centre frequencies in Hz

    Returns:
        Initialized SignalBank
    """
    data = np.asarray(data, dtype=np.float64)
    if data.ndim != 3:
        raise ValueError(f"Expected 3D array (ears, channels, samples), got: {data.ndim}D")

    bank = SignalBank()
    bank.initialize(data.shape[0], data.shape[1], data.shape[2], fs)
    bank.data[...] = data
    if frame_rate is not None:
        bank.set_frame_rate(frame_rate)
    if centre_freqs is not None:
        bank.set_centre_freqs(centre_freqs)
    return bank
