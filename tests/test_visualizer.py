import numpy as np
import pytest
from PIL import Image

from visdist.alignment.edit_core import AlignedColumn, AlignmentStep, ColumnAligner
from visdist.config import BACKGROUND_GRAY, DELETION_COLOR, INSERTION_COLOR
from visdist.pixel_buffer import PixelBuffer
from visdist.visualizer import (
    VisualizationUnavailableError,
    debug_image_path,
    render_alignment,
    save_debug_image,
    substitution_color,
    visualize,
)

THRESHOLD = 0.085


@pytest.fixture
def aligner():
    return ColumnAligner(threshold=THRESHOLD)


def test_strip_layout_for_trailing_insertion(aligner, make_buffer):
    buffer_a = make_buffer(0, 100)
    buffer_b = make_buffer(0, 100, 255)
    _, matrix = aligner.align(buffer_a, buffer_b)

    path, image = visualize(buffer_a, buffer_b, matrix, aligner)
    pixels = image.to_array()

    # width = max(2, 3) + ceil(0.085 / 0.085), height = 2 + 2 + 8
    assert image.shape == (4, 12)
    assert len(path) == 3

    # Matched columns: A on top, B below, band untouched
    assert pixels[0:2, 1].tolist() == [[100, 100, 100]] * 2
    assert pixels[2:4, 1].tolist() == [[100, 100, 100]] * 2
    assert pixels[4:, 1].tolist() == [list(BACKGROUND_GRAY)] * 8

    # Inserted column: only B drawn, green band
    assert pixels[0:2, 2].tolist() == [list(BACKGROUND_GRAY)] * 2
    assert pixels[2:4, 2].tolist() == [[255, 255, 255]] * 2
    assert pixels[4:, 2].tolist() == [list(INSERTION_COLOR)] * 8

    # Headroom column stays gray
    assert pixels[:, 3].tolist() == [list(BACKGROUND_GRAY)] * 12


def test_strip_width_ignores_float_noise_in_distance(make_buffer):
    distance = THRESHOLD + THRESHOLD + THRESHOLD
    image = render_alignment(make_buffer(0), make_buffer(0), [], distance, THRESHOLD)
    assert image.width == 1 + 3


def test_deleted_column_is_drawn_on_top_with_red_band(aligner, make_buffer):
    buffer_a = make_buffer(0, 100, 255)
    buffer_b = make_buffer(0, 100)
    _, matrix = aligner.align(buffer_a, buffer_b)

    _, image = visualize(buffer_a, buffer_b, matrix, aligner)
    pixels = image.to_array()

    assert pixels[0:2, 2].tolist() == [[255, 255, 255]] * 2
    assert pixels[2:4, 2].tolist() == [list(BACKGROUND_GRAY)] * 2
    assert pixels[4:, 2].tolist() == [list(DELETION_COLOR)] * 8


def test_substitution_band_is_blue(aligner, make_buffer):
    buffer_a = make_buffer(200)
    buffer_b = make_buffer(180)
    _, matrix = aligner.align(buffer_a, buffer_b)

    path, image = visualize(buffer_a, buffer_b, matrix, aligner)

    assert path[0].step == AlignmentStep.SUBSTITUTE
    assert image.pixel(0, 4) == substitution_color(path[0].cost_delta)


def test_substitution_color_scale():
    assert substitution_color(0.0) == (0, 0, 255)
    assert substitution_color(1.0) == (0, 0, 0)
    assert substitution_color(5.0) == (0, 0, 0)
    assert substitution_color(-0.5) == substitution_color(0.5)
    low, high = substitution_color(0.1), substitution_color(0.6)
    assert low[2] > high[2]


def test_steps_past_the_strip_edge_are_clipped(make_buffer):
    buffer_a = make_buffer(0)
    buffer_b = make_buffer(0)
    path = [
        AlignedColumn(AlignmentStep.DELETE, 0, None, 0.0),
        AlignedColumn(AlignmentStep.INSERT, None, 0, 0.0),
    ]
    image = render_alignment(buffer_a, buffer_b, path, distance=0.0, threshold=THRESHOLD)
    assert image.shape == (1, 12)
    assert image.pixel(0, 11) == DELETION_COLOR


def test_save_debug_image_round_trips_pixels(tmp_path, aligner, make_buffer):
    buffer_a = make_buffer(0, 100)
    buffer_b = make_buffer(0, 100, 255)
    _, matrix = aligner.align(buffer_a, buffer_b)
    _, image = visualize(buffer_a, buffer_b, matrix, aligner)

    output = save_debug_image(image, tmp_path / "debug", "abc")

    assert output == tmp_path / "debug" / "abc.png"
    with Image.open(output) as saved:
        assert np.array_equal(np.asarray(saved.convert("RGB")), image.to_array())


def test_empty_image_is_unavailable(tmp_path):
    with pytest.raises(VisualizationUnavailableError):
        save_debug_image(PixelBuffer.empty(0, 0), tmp_path, "nothing")


def test_unwritable_directory_is_unavailable(tmp_path, make_buffer):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")
    with pytest.raises(VisualizationUnavailableError):
        save_debug_image(make_buffer(0, 1), blocker, "label")


def test_debug_image_path_sanitizes_labels(tmp_path):
    assert debug_image_path(tmp_path, "a/b c") == tmp_path / "a_b_c.png"
    assert debug_image_path(tmp_path, "") == tmp_path / "empty.png"
    assert debug_image_path(tmp_path, "test") == tmp_path / "test.png"
