import logging
import os
import subprocess
import sys
from pathlib import Path

import numpy as np
import pytest

from ppmblur.cli.blur import log_level, main
from ppmblur.pipeline.blur_pipeline import blur_file
from ppmblur.repositories.image_repository import ImageRepository


PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture(autouse=True)
def restore_root_level(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("PPM_VALUES_PER_LINE", raising=False)
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


@pytest.fixture
def input_ppm(tmp_path):
    path = tmp_path / "in.ppm"
    path.write_bytes(b"P3\n# tiny\n1 1\n255\n10 20 30\n")
    return path


def test_main_writes_blurred_image(tmp_path, input_ppm):
    out = tmp_path / "out.ppm"
    assert main([str(input_ppm), str(out)]) == 0
    assert out.read_bytes() == b"P3\n1 1\n255\n10 20 30 \n"


@pytest.mark.parametrize(
    "argv", [[], ["only-one.ppm"], ["a.ppm", "b.ppm", "c.ppm"], ["-h"], ["--help"]]
)
def test_wrong_argument_count_is_usage_error(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2


def test_missing_input_reports_error(tmp_path, caplog):
    out = tmp_path / "out.ppm"
    with caplog.at_level(logging.ERROR):
        assert main([str(tmp_path / "missing.ppm"), str(out)]) == 1
    assert "Error: Could not open input file" in caplog.text
    assert not out.exists()


@pytest.mark.parametrize(
    "content, message",
    [
        (b"P6\n1 1\n255\n", "Only P3 PPM format is supported"),
        (b"P3\nA B\n255\n1 2 3\n", "Bad integer in file"),
        (b"P3\n1 1\n255\n1 2\n", "Unexpected EOF in pixel data"),
        (b"P3\n100000 100000\n255\n", "Image too large"),
    ],
)
def test_bad_input_reports_error_without_output(tmp_path, caplog, content, message):
    src = tmp_path / "bad.ppm"
    src.write_bytes(content)
    out = tmp_path / "out.ppm"
    with caplog.at_level(logging.ERROR):
        assert main([str(src), str(out)]) == 1
    assert message in caplog.text
    assert not out.exists()


def test_pipeline_output_reparses_to_returned_image(tmp_path):
    rng = np.random.default_rng(99)
    values = rng.integers(0, 4096, size=6 * 5 * 3)
    src = tmp_path / "noise.ppm"
    src.write_bytes(
        b"P3\n6 5\n4095\n" + " ".join(map(str, values)).encode() + b"\n"
    )
    out = tmp_path / "noise_blur.ppm"

    blurred = blur_file(src, out)
    reloaded = ImageRepository().load(out)

    assert blurred.path == out
    assert (reloaded.width, reloaded.height, reloaded.max_value) == (6, 5, 4095)
    assert np.array_equal(reloaded.channels, blurred.channels)


def test_input_path_may_start_with_dash(tmp_path, input_ppm, monkeypatch):
    monkeypatch.chdir(tmp_path)
    input_ppm.rename(tmp_path / "-in.ppm")
    assert main(["-in.ppm", "out.ppm"]) == 0
    assert (tmp_path / "out.ppm").exists()


@pytest.mark.parametrize("raw", ["abc", "0"])
def test_bad_values_per_line_reports_error(tmp_path, input_ppm, caplog, monkeypatch, raw):
    monkeypatch.setenv("PPM_VALUES_PER_LINE", raw)
    out = tmp_path / "out.ppm"
    with caplog.at_level(logging.ERROR):
        assert main([str(input_ppm), str(out)]) == 1
    assert "Error: PPM_VALUES_PER_LINE must be a positive integer" in caplog.text
    assert not out.exists()


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("DEBUG", logging.DEBUG),
        ("warning", logging.WARNING),
        ("CRITICAL", logging.ERROR),
        ("verbose", logging.INFO),
        ("", logging.INFO),
    ],
)
def test_log_level_is_validated_and_capped(monkeypatch, raw, expected):
    monkeypatch.setenv("LOG_LEVEL", raw)
    assert log_level() == expected


def test_errors_are_logged_even_with_critical_log_level(tmp_path, caplog, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "CRITICAL")
    assert main([str(tmp_path / "missing.ppm"), str(tmp_path / "out.ppm")]) == 1
    assert "Error: Could not open input file" in caplog.text


def test_error_reaches_stderr_of_module_entry_point(tmp_path):
    env = dict(os.environ, LOG_LEVEL="CRITICAL", PPM_VALUES_PER_LINE="15")
    result = subprocess.run(
        [sys.executable, "-m", "ppmblur", str(tmp_path / "missing.ppm"), str(tmp_path / "out.ppm")],
        cwd=PROJECT_ROOT,
        env=env,
        capture_output=True,
        text=True,
    )
    assert result.returncode == 1
    assert "Error: Could not open input file" in result.stderr
