"""
Tests für ERB-Rate-Umrechnung (Cam-Skala).
"""

import pytest
import numpy as np

from loudness_model.core.auditory import freq_to_cam, cam_to_freq, cam_spaced_frequencies
from loudness_model.utils.formatting import format_frequency, format_milliseconds, format_bank_shape


class TestCamScale:
    """Tests für Cam-Skala."""

    def test_zero_frequency(self):
        """0 Hz entspricht 0 Cam."""
        assert freq_to_cam(0.0) == 0.0

    def test_known_value(self):
        """1 kHz liegt bei etwa 15.6 Cam."""
        assert freq_to_cam(1000.0) == pytest.approx(15.59, abs=0.01)

    def test_scalar_returns_float(self):
        """Skalare Eingabe liefert float."""
        assert isinstance(freq_to_cam(500), float)
        assert isinstance(cam_to_freq(10), float)

    def test_inverse(self):
        """cam_to_freq ist die Umkehrung von freq_to_cam."""
        freqs = np.array([50.0, 100.0, 1000.0, 8000.0, 15000.0])

        np.testing.assert_allclose(cam_to_freq(freq_to_cam(freqs)), freqs)

    def test_monotonic(self):
        """Cam-Skala steigt monoton."""
        cams = freq_to_cam(np.linspace(20, 20000, 200))

        assert np.all(np.diff(cams) > 0)

    def test_spaced_frequencies(self):
        """Äquidistante Kanäle auf der Cam-Skala."""
        freqs = cam_spaced_frequencies(1.75, 39.0, 0.25)

        assert len(freqs) == 150
        np.testing.assert_allclose(np.diff(freq_to_cam(freqs)), 0.25)

    def test_invalid_step(self):
        """Nicht-positiver Abstand wird abgelehnt."""
        with pytest.raises(ValueError):
            cam_spaced_frequencies(1.0, 2.0, 0.0)


class TestFormatting:
    """Tests für Formatierung der Log-Ausgaben."""

    def test_format_frequency(self):
        assert format_frequency(250) == "250 Hz"
        assert format_frequency(1500) == "1.5 kHz"

    def test_format_milliseconds(self):
        assert format_milliseconds(0.001) == "1.00 ms"

    def test_format_bank_shape(self):
        assert format_bank_shape(1, 3, 1) == "1 ear x 3 channels x 1 sample"
        assert format_bank_shape(2, 1, 8) == "2 ears x 1 channel x 8 samples"
