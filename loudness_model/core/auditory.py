"""
Auditory scale conversions

ERB-rate (Cam) scale after Glasberg & Moore:

    cam = 21.366 * log10(0.004368 * f + 1)

Both functions accept scalars or numpy arrays.
"""

import numpy as np


ERB_RATE_SCALE = 21.366
ERB_RATE_SLOPE = 0.004368  # 1/Hz


def freq_to_cam(freq):
    """
    Convert frequency in Hz to ERB-rate in Cams.

    Args:
        freq: Frequency in Hz (scalar or array)

    Returns:
        ERB-rate in Cams (float for scalar input)
    """
    cam = ERB_RATE_SCALE * np.log10(ERB_RATE_SLOPE * np.asarray(freq, dtype=np.float64) + 1.0)
    return float(cam) if np.ndim(cam) == 0 else cam


def cam_to_freq(cam):
    """Inverse of freq_to_cam."""
    freq = (10.0 ** (np.asarray(cam, dtype=np.float64) / ERB_RATE_SCALE) - 1.0) / ERB_RATE_SLOPE
    return float(freq) if np.ndim(freq) == 0 else freq


def cam_spaced_frequencies(cam_lo: float, cam_hi: float, cam_step: float) -> np.ndarray:
    """
    Centre frequencies uniformly spaced on the Cam scale.

    Args:
        cam_lo: First channel in Cams
        cam_hi: Upper limit in Cams (included if it falls on the grid)
        cam_step: Channel spacing in Cams

    Returns:
        Centre frequencies in Hz
    """
    if cam_step <= 0:
        raise ValueError(f"Cam step must be positive, got: {cam_step}")
    n = int(np.floor((cam_hi - cam_lo) / cam_step + 1e-9)) + 1
    cams = cam_lo + np.arange(n) * cam_step
    return cam_to_freq(cams)
