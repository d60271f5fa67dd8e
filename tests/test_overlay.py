"""Tests for highlight overlay rendering."""

import time

import cv2
import numpy as np
import pytest

from uihighlight.core.exceptions import ImageDecodeError
from uihighlight.vision.models import BoundingBox, HighlightStyle
from uihighlight.vision.overlay import decode_image, render_annotated_image, render_overlay

YELLOW = [0, 255, 255]
BLACK = [0, 0, 0]
STYLE = HighlightStyle()


@pytest.fixture
def black_image():
    return np.zeros((300, 300, 3), dtype=np.uint8)


class TestHighlightStyle:

    def test_from_hex_converts_to_bgr(self):
        style = HighlightStyle.from_hex("#ffff00")
        assert style.color == (0, 255, 255)

    def test_defaults(self):
        assert (STYLE.dash_on, STYLE.dash_off, STYLE.stroke_width) == (25, 25, 15)


class TestRenderOverlay:

    def test_keeps_dimensions_and_source(self, black_image):
        surface = render_overlay(black_image, [BoundingBox(50, 50, 250, 250)], STYLE)

        assert surface.shape == black_image.shape
        assert not black_image.any()

    def test_dash_pattern_on_top_edge(self, black_image):
        surface = render_overlay(black_image, [BoundingBox(50, 50, 250, 250)], STYLE)

        assert surface[50, 60].tolist() == YELLOW  # first dash, x 50..74
        assert surface[50, 80].tolist() == BLACK  # first gap, x 75..99
        assert surface[50, 110].tolist() == YELLOW  # second dash

    def test_stroke_is_fifteen_pixels_wide(self, black_image):
        surface = render_overlay(black_image, [BoundingBox(50, 50, 250, 250)], STYLE)

        column = surface[:, 60]
        yellow_rows = [y for y in range(300) if column[y].tolist() == YELLOW]
        assert yellow_rows == list(range(43, 58))

    def test_dash_phase_continues_around_corner(self, black_image):
        # Top edge is 200 px long, so the right edge starts on a dash
        surface = render_overlay(black_image, [BoundingBox(50, 50, 250, 250)], STYLE)

        assert surface[60, 250].tolist() == YELLOW
        assert surface[80, 250].tolist() == BLACK

    def test_interior_untouched(self, black_image):
        surface = render_overlay(black_image, [BoundingBox(50, 50, 250, 250)], STYLE)
        assert surface[150, 150].tolist() == BLACK

    def test_inverted_box_skipped(self, black_image):
        surface = render_overlay(black_image, [BoundingBox(250, 250, 50, 50)], STYLE)
        assert not surface.any()

    def test_box_outside_image_is_clipped(self, black_image):
        surface = render_overlay(black_image, [BoundingBox(280, 280, 900, 900)], STYLE)
        assert surface.shape == black_image.shape

    def test_no_boxes_returns_copy(self, black_image):
        surface = render_overlay(black_image, [], STYLE)

        assert surface is not black_image
        assert np.array_equal(surface, black_image)


class TestCornersAndDirection:

    def test_outer_corner_squares_painted(self, black_image):
        # Every side of a 200 px box starts on a dash
        surface = render_overlay(black_image, [BoundingBox(50, 50, 250, 250)], STYLE)

        for y, x in [(45, 45), (45, 255), (255, 255), (255, 45), (43, 43), (257, 257)]:
            assert surface[y, x].tolist() == YELLOW, (y, x)
        assert surface[42, 42].tolist() == BLACK
        assert surface[258, 258].tolist() == BLACK

    def test_reverse_edges_mirror_forward_edges(self):
        image = np.zeros((201, 201, 3), dtype=np.uint8)

        surface = render_overlay(image, [BoundingBox(50, 50, 150, 150)], STYLE)

        assert surface.any()
        assert np.array_equal(surface, surface[::-1, ::-1])

    def test_bottom_edge_dash_ends_at_corner_pixel(self, black_image):
        surface = render_overlay(black_image, [BoundingBox(50, 50, 250, 250)], STYLE)

        # Leftward first dash covers x 226..250 plus the corner square
        assert surface[250, 226].tolist() == YELLOW
        assert surface[250, 225].tolist() == BLACK


class TestLargeCoordinates:

    def test_huge_box_renders_quickly(self):
        image = np.zeros((100, 100, 3), dtype=np.uint8)

        start = time.perf_counter()
        surface = render_overlay(image, [BoundingBox(0, 0, 2_000_000_000, 2_000_000_000)], STYLE)

        assert time.perf_counter() - start < 2.0
        assert surface.shape == image.shape
        assert surface[0, 10].tolist() == YELLOW
        assert surface[50, 50].tolist() == BLACK

    def test_coordinates_beyond_int32(self):
        image = np.zeros((100, 100, 3), dtype=np.uint8)

        surface = render_overlay(image, [BoundingBox(0, 0, 3_000_000_000, 50)], STYLE)

        assert surface[0, 10].tolist() == YELLOW
        # Bottom edge phase at x is (-x) mod 50, so x=30 falls on a dash
        assert surface[50, 30].tolist() == YELLOW

    def test_box_entirely_off_surface_draws_nothing(self):
        image = np.zeros((100, 100, 3), dtype=np.uint8)

        surface = render_overlay(image, [BoundingBox(5_000_000_000, 10, 6_000_000_000, 90)], STYLE)

        assert not surface.any()


class TestDecodeImage:

    def test_rejects_garbage(self):
        with pytest.raises(ImageDecodeError):
            decode_image(b"definitely not an image")

    def test_rejects_empty(self):
        with pytest.raises(ImageDecodeError):
            decode_image(b"")

    def test_decodes_png(self, png_factory):
        image = decode_image(png_factory(40, 30))
        assert image.shape == (30, 40, 3)


class TestRenderAnnotatedImage:

    def test_png_output_matches_source_size(self, png_factory):
        annotated = render_annotated_image("home", png_factory(320, 240), [BoundingBox(10, 10, 100, 100)], STYLE)

        assert annotated.name == "home"
        assert (annotated.width, annotated.height) == (320, 240)
        assert annotated.box_count == 1
        assert annotated.data.startswith(b"\x89PNG")

        decoded = cv2.imdecode(np.frombuffer(annotated.data, dtype=np.uint8), cv2.IMREAD_COLOR)
        assert decoded.shape == (240, 320, 3)
        assert decoded[10, 20].tolist() == YELLOW

    def test_undecodable_screenshot_raises(self):
        with pytest.raises(ImageDecodeError):
            render_annotated_image("bad", b"nope", [], STYLE)
