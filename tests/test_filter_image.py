import numpy as np
import pytest
from numpy.testing import assert_array_equal

import filter_image
from PixelBuffer import load_image, save_image


@pytest.fixture
def input_path(tmp_path, step_image):
    path = tmp_path / "in.bmp"
    save_image(step_image, path)
    return path


def test_default_filter_writes_output(tmp_path, input_path, capsys):
    output = tmp_path / "out.bmp"
    assert filter_image.main([str(input_path), "-o", str(output)]) == 0

    printed = capsys.readouterr().out
    assert "Image size (WxH): 4x6." in printed
    assert "Time for processing:" in printed
    assert "Time to write file:" in printed

    result = load_image(output)
    assert result.shape == (6, 4, 3)
    assert np.all(result[2:4] > 0)


def test_filter_chain_in_order(tmp_path, input_path):
    output = tmp_path / "out.bmp"
    filter_image.main([str(input_path), "-o", str(output), "-f", "invert", "-f", "red_only",
                       "--workers", "2"])
    result = load_image(output)
    assert_array_equal(result[0, 0], (55, 0, 0))
    assert_array_equal(result[5, 0], (255, 0, 0))


def test_no_write(tmp_path, input_path, capsys):
    output = tmp_path / "out.bmp"
    assert filter_image.main([str(input_path), "-o", str(output), "--no-write"]) == 0
    assert not output.exists()
    assert "Time to write file:" not in capsys.readouterr().out


def test_profile_prints_stats(tmp_path, input_path, capsys):
    filter_image.main([str(input_path), "--no-write", "--profile", "-f", "sharpen"])
    assert "=== Profiling Results ===" in capsys.readouterr().out


def test_unknown_filter_rejected(input_path):
    with pytest.raises(SystemExit):
        filter_image.main([str(input_path), "-f", "canny"])


def test_invalid_worker_count(input_path):
    with pytest.raises(SystemExit):
        filter_image.main([str(input_path), "--workers", "0"])


def test_keyboard_interrupt_exits_with_status_1(monkeypatch, tmp_path, input_path, capsys):
    def interrupted(*args, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(filter_image, "run_filters", interrupted)
    output = tmp_path / "out.bmp"
    assert filter_image.main([str(input_path), "-o", str(output)]) == 1
    assert "Program interrupted" in capsys.readouterr().out
    assert not output.exists()
