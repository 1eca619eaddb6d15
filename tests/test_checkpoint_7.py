"""Checkpoint 7: CLI Interface and Metrics Verification."""

import sys
import os
import subprocess
import tempfile

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
import pytest

from blockcodec.constants import HEADER_MAGIC
from blockcodec.io import read_image, write_image, write_image_bytes
from blockcodec.metrics import (
    calculate_rmse, calculate_psnr, calculate_bpp,
    calculate_compression_ratio, generate_error_map
)

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
ENCODE = os.path.join(PROJECT_ROOT, "encode.py")
DECODE = os.path.join(PROJECT_ROOT, "decode.py")


def run_command(args, stdin=None):
    """Run a CLI script and return the CompletedProcess."""
    return subprocess.run([sys.executable] + args, input=stdin,
                          capture_output=True, cwd=PROJECT_ROOT)


@pytest.fixture
def workdir():
    with tempfile.TemporaryDirectory() as tmp:
        yield tmp


@pytest.fixture
def sample_png(workdir):
    rng = np.random.default_rng(30)
    img = rng.integers(0, 256, (13, 10, 3), dtype=np.uint8)
    path = os.path.join(workdir, "input.png")
    write_image(img, path)
    return path


def test_encode_decode_roundtrip(workdir, sample_png):
    encoded = os.path.join(workdir, "out.bic")
    decoded = os.path.join(workdir, "out.png")

    result = run_command([ENCODE, sample_png, encoded])
    assert result.returncode == 0, result.stderr
    assert b"Encoded:" in result.stdout

    with open(encoded, 'rb') as f:
        assert f.read().startswith(HEADER_MAGIC)

    result = run_command([DECODE, encoded, decoded, "--verbose"])
    assert result.returncode == 0, result.stderr
    assert read_image(decoded).shape == (13, 10, 3)


def test_level_option(workdir, sample_png):
    encoded = os.path.join(workdir, "out.bic")
    result = run_command([ENCODE, "--level", "32", "--quiet", sample_png, encoded])
    assert result.returncode == 0, result.stderr
    assert result.stdout == b""

    result = run_command([ENCODE, "--level", "0", sample_png, encoded])
    assert result.returncode == 1
    assert b"Error" in result.stderr


def test_stdin_stdout_pipeline(sample_png):
    with open(sample_png, 'rb') as f:
        png_bytes = f.read()

    result = run_command([ENCODE, "-", "-"], stdin=png_bytes)
    assert result.returncode == 0, result.stderr
    assert result.stdout.startswith(HEADER_MAGIC)

    result = run_command([DECODE, "-", "-"], stdin=result.stdout)
    assert result.returncode == 0, result.stderr
    assert result.stdout.startswith(b"\x89PNG")


def test_missing_input(workdir):
    result = run_command([ENCODE, os.path.join(workdir, "missing.png"),
                          os.path.join(workdir, "out.bic")])
    assert result.returncode == 1
    assert b"not found" in result.stderr


def test_invalid_compressed_file(workdir):
    bad = os.path.join(workdir, "bad.bic")
    with open(bad, 'wb') as f:
        f.write(b"definitely not a block image")

    result = run_command([DECODE, bad, os.path.join(workdir, "out.png")])
    assert result.returncode == 1
    assert b"Invalid compressed file" in result.stderr


def test_output_error_is_not_reported_as_bad_input(workdir, sample_png):
    encoded = os.path.join(workdir, "out.bic")
    assert run_command([ENCODE, "--quiet", sample_png, encoded]).returncode == 0

    result = run_command([DECODE, encoded, os.path.join(workdir, "out.unknownext")])
    assert result.returncode == 1
    assert b"Error:" in result.stderr
    assert b"Invalid compressed file" not in result.stderr


def test_metrics_functions():
    original = np.full((8, 8, 3), 100, dtype=np.uint8)
    shifted = original + 2

    assert calculate_rmse(original, original) == 0
    assert calculate_rmse(original, shifted) == pytest.approx(2.0)
    assert calculate_psnr(original, original) == float('inf')
    assert calculate_psnr(original, shifted) == pytest.approx(10 * np.log10(255 ** 2 / 4))
    assert calculate_bpp(64, (8, 8, 3)) == 8.0
    assert calculate_compression_ratio(192, 96) == 2.0
    assert calculate_compression_ratio(192, 0) == float('inf')

    error_map = generate_error_map(original, shifted)
    assert error_map.shape == (8, 8)
    assert np.all(error_map == 2)


def test_write_image_bytes_is_png():
    assert write_image_bytes(np.zeros((8, 8, 3), dtype=np.uint8)).startswith(b"\x89PNG")


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
