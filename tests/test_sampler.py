"""
Unit tests for pixel sampling over decoded buffers.
"""
from huepick.services.colors.sampler import center_color, grid_sample, point_color, region_average
from huepick.services.imaging import ColorSample

RED = ColorSample(255, 0, 0, 255)
BLUE = ColorSample(0, 0, 255, 255)
YELLOW = ColorSample(255, 255, 0, 255)


class TestPointColor:
    """Test single pixel reads"""

    def test_every_pixel_of_solid_buffer(self, red_buffer):
        for x in range(10):
            for y in range(10):
                assert point_color(red_buffer, x, y) == RED

    def test_row_major_indexing(self, two_tone_buffer):
        assert point_color(two_tone_buffer, 9, 6) == BLUE
        assert point_color(two_tone_buffer, 0, 7) == YELLOW

    def test_out_of_bounds(self, red_buffer):
        assert point_color(red_buffer, 10, 0) is None
        assert point_color(red_buffer, 0, 10) is None
        assert point_color(red_buffer, -1, 0) is None

    def test_fractional_coordinates_are_floored(self, red_buffer):
        assert point_color(red_buffer, -0.5, 0) is None
        assert point_color(red_buffer, 0, -0.1) is None
        assert point_color(red_buffer, 9.5, 9.9) == RED

    def test_missing_buffer(self):
        assert point_color(None, 0, 0) is None


class TestRegionAverage:
    """Test square region averaging"""

    def test_whole_solid_buffer(self, red_buffer):
        assert region_average(red_buffer, 5, 5, 10) == RED

    def test_clipped_at_corner(self, red_buffer):
        assert region_average(red_buffer, 9, 9, 2) == RED
        assert region_average(red_buffer, 0, 0) == RED

    def test_mixed_region(self, two_tone_buffer):
        # Rows 5..7 by columns 4..6: six blue pixels and three yellow
        assert region_average(two_tone_buffer, 5, 6, 1) == ColorSample(85, 85, 170, 255)

    def test_zero_radius_is_point(self, two_tone_buffer):
        assert region_average(two_tone_buffer, 3, 8, 0) == YELLOW

    def test_center_out_of_bounds(self, red_buffer):
        assert region_average(red_buffer, -1, 0, 2) is None
        assert region_average(red_buffer, -0.5, 0, 2) is None
        assert region_average(red_buffer, 10, 10, 2) is None

    def test_averages_alpha(self, buffer_factory):
        buffer = buffer_factory(2, 1, (10, 20, 30, 101))
        assert region_average(buffer, 0, 0, 1).a == 101


class TestGridSample:
    """Test evenly spaced grid sampling"""

    def test_default_grid(self, red_buffer):
        colors = grid_sample(red_buffer)
        assert len(colors) == 9
        assert all(color == RED for color in colors)

    def test_columns_are_outer_loop(self, two_tone_buffer):
        # step = 10 // 5 = 2, so rows 2, 4, 6, 8 are visited for each column
        colors = grid_sample(two_tone_buffer, 4)
        assert len(colors) == 16
        assert colors[:4] == [BLUE, BLUE, BLUE, YELLOW]

    def test_empty_grid(self, red_buffer):
        assert grid_sample(red_buffer, 0) == []
        assert grid_sample(None, 3) == []


class TestCenterColor:
    """Test center pixel reads"""

    def test_center(self, two_tone_buffer):
        assert center_color(two_tone_buffer) == BLUE

    def test_missing_buffer(self):
        assert center_color(None) is None
