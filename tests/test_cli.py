"""
Tests for spectrograph/cli.py — command line entry point.

Every test calls main(argv) directly and checks the exit code and the
files written into tmp_path.
"""

import numpy as np
import pytest
from PIL import Image

from spectrograph.cli import build_parser, main
from conftest import make_sine

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def tone_wav(write_wav):
    return write_wav("tone.wav", make_sine(amplitude=0.5))


# ---------------------------------------------------------------------------
# Success
# ---------------------------------------------------------------------------


class TestCliSuccess:
    def test_png_default_size(self, tone_wav, tmp_path):
        """Default output is a 256×256 PNG."""
        out = tmp_path / "out.png"
        assert main(["--wav", str(tone_wav), "--png", str(out), "--quiet"]) == 0
        with Image.open(out) as img:
            assert img.size == (256, 256)

    def test_csv_dimensions(self, tone_wav, tmp_path):
        """CSV has a header plus `height` rows of `width` values."""
        out = tmp_path / "out.csv"
        code = main(
            ["--wav", str(tone_wav), "--csv", str(out), "--width", "8", "--height", "4", "--quiet"]
        )
        assert code == 0
        lines = out.read_text().splitlines()
        assert len(lines) == 5
        assert lines[0] == "0,1,2,3,4,5,6,7"

    def test_all_options(self, tone_wav, tmp_path):
        """Every rendering option can be combined."""
        png = tmp_path / "out.png"
        csv_out = tmp_path / "out.csv"
        legend = tmp_path / "legend.png"
        code = main(
            [
                "--wav", str(tone_wav),
                "--png", str(png),
                "--csv", str(csv_out),
                "--legend", str(legend),
                "--chunk-len", "512",
                "--overlap", "0.75",
                "--window-function", "blackman_harris",
                "--freq-scale", "log",
                "--gradient", "rainbow",
                "--downsample", "2",
                "--scale", "0.5",
                "--normalise",
                "--workers", "2",
                "--width", "100",
                "--height", "50",
            ]
        )  # fmt: skip
        assert code == 0
        with Image.open(png) as img:
            assert img.size == (100, 50)
        with Image.open(legend) as img:
            assert img.size[1] == 50
        assert csv_out.exists()

    def test_second_channel(self, write_wav, tmp_path):
        """--channel 2 reads the right channel of a stereo file."""
        stereo = np.column_stack([make_sine(amplitude=0.5), make_sine(freq=1000.0, amplitude=0.5)])
        path = write_wav("stereo.wav", stereo)
        out = tmp_path / "out.png"
        assert main(["--wav", str(path), "--png", str(out), "--channel", "2", "--quiet"]) == 0

    def test_verbose_logs_pipeline(self, tone_wav, tmp_path, caplog):
        """Without --quiet the pipeline diagnostics are logged."""
        with caplog.at_level("INFO", logger="spectrograph"):
            main(["--wav", str(tone_wav), "--png", str(tmp_path / "out.png")])
        assert "compute.fft" in caplog.text


# ---------------------------------------------------------------------------
# Invalid arguments (exit code 2)
# ---------------------------------------------------------------------------


class TestCliUsageErrors:
    def test_no_output(self, tone_wav):
        """Without --png or --csv there is nothing to do."""
        assert main(["--wav", str(tone_wav), "--quiet"]) == 2

    def test_chunk_len_too_small(self, tone_wav, tmp_path):
        """--chunk-len must exceed 16."""
        out = tmp_path / "out.png"
        assert main(["--wav", str(tone_wav), "--png", str(out), "--chunk-len", "16", "--quiet"]) == 2
        assert not out.exists()

    @pytest.mark.parametrize("overlap", ["1.0", "-0.1"])
    def test_overlap_out_of_range(self, tone_wav, tmp_path, overlap):
        """--overlap must be in [0, 1)."""
        argv = ["--wav", str(tone_wav), "--png", str(tmp_path / "o.png"), "--overlap", overlap]
        assert main([*argv, "--quiet"]) == 2

    @pytest.mark.parametrize("flag,value", [("--downsample", "0"), ("--channel", "0"), ("--width", "0")])
    def test_non_positive_values(self, tone_wav, tmp_path, flag, value):
        """Zero divisors, channels and sizes are rejected up front."""
        argv = ["--wav", str(tone_wav), "--png", str(tmp_path / "o.png"), flag, value, "--quiet"]
        assert main(argv) == 2

    def test_unknown_window_function(self, tone_wav, tmp_path):
        """argparse rejects unknown choices with exit status 2."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--wav", str(tone_wav), "--png", str(tmp_path / "o.png"), "--window-function", "hamming"])
        assert exc_info.value.code == 2

    def test_wav_required(self):
        """--wav is mandatory."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


# ---------------------------------------------------------------------------
# Pipeline failures (exit code 1)
# ---------------------------------------------------------------------------


class TestCliPipelineErrors:
    def test_missing_file(self, tmp_path):
        """A missing WAV exits with 1."""
        argv = ["--wav", str(tmp_path / "nope.wav"), "--png", str(tmp_path / "o.png"), "--quiet"]
        assert main(argv) == 1

    def test_unsupported_codec(self, write_wav, tmp_path):
        """A 24-bit WAV exits with 1."""
        path = write_wav("hi_res.wav", make_sine(), subtype="PCM_24")
        assert main(["--wav", str(path), "--png", str(tmp_path / "o.png"), "--quiet"]) == 1

    def test_channel_beyond_file(self, tone_wav, tmp_path):
        """Channel 2 of a mono file exits with 1."""
        argv = ["--wav", str(tone_wav), "--png", str(tmp_path / "o.png"), "--channel", "2", "--quiet"]
        assert main(argv) == 1

    def test_signal_too_short(self, write_wav, tmp_path):
        """A signal shorter than one frame exits with 1."""
        path = write_wav("short.wav", make_sine(seconds=0.1))
        assert main(["--wav", str(path), "--png", str(tmp_path / "o.png"), "--quiet"]) == 1
