"""
Formatting helpers for log output.

Converts numeric values into readable strings.
"""


def format_frequency(hz: float) -> str:
    """
    Format frequency.

    Args:
        hz: Frequency in Hz

    Returns:
        Formatted string (e.g. "1.5 kHz" or "250 Hz")
    """
    if hz >= 1000:
        return f"{hz/1000:.1f} kHz"
    else:
        return f"{hz:.0f} Hz"


def format_milliseconds(seconds: float, precision: int = 2) -> str:
    """
    Format a short duration (time step, time constant) in ms.

    Args:
        seconds: Duration in seconds
        precision: Decimal places

    Returns:
        Formatted string (e.g. "22.22 ms")
    """
    return f"{seconds * 1000:.{precision}f} ms"


def format_cam(cam: float, precision: int = 3) -> str:
    """Format an ERB-rate value (e.g. "0.250 Cam")."""
    return f"{cam:.{precision}f} Cam"


def format_bank_shape(n_ears: int, n_channels: int, n_samples: int) -> str:
    """
    Format a SignalBank shape.

    Returns:
        e.g. "2 ears x 40 channels x 1 sample"
    """
    ears = "ear" if n_ears == 1 else "ears"
    channels = "channel" if n_channels == 1 else "channels"
    samples = "sample" if n_samples == 1 else "samples"
    return f"{n_ears} {ears} x {n_channels} {channels} x {n_samples} {samples}"
