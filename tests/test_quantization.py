import unittest

from quantization import (
    clamp_step_index,
    format_step_value,
    nearest_step_index,
    percent,
    slider_position,
    slider_resolution,
    slider_value,
    step_delta,
    step_values,
)


class TestPercent(unittest.TestCase):
    def test_midpoint(self):
        self.assertEqual(percent(5, 0, 10), 50)

    def test_clamped_below_and_above(self):
        self.assertEqual(percent(-1, 0, 10), 0)
        self.assertEqual(percent(11, 0, 10), 100)

    def test_degenerate_range_is_zero(self):
        self.assertEqual(percent(3, 3, 3), 0)

    def test_negative_range(self):
        self.assertAlmostEqual(percent(-2.5, -5, 5), 25.0, places=6)


class TestSteps(unittest.TestCase):
    def test_step_delta(self):
        self.assertAlmostEqual(step_delta(0, 10, 5), 2.5, places=6)
        self.assertAlmostEqual(step_delta(-1, 1, 3), 1.0, places=6)

    def test_step_values_include_endpoints(self):
        values = step_values(0, 10, 5)
        self.assertEqual(len(values), 5)
        self.assertAlmostEqual(values[0], 0.0, places=6)
        self.assertAlmostEqual(values[-1], 10.0, places=6)
        self.assertAlmostEqual(values[2], 5.0, places=6)

    def test_nearest_step_index(self):
        self.assertEqual(nearest_step_index(5.0, 0, 2.5), 2)
        self.assertEqual(nearest_step_index(6.0, 0, 2.5), 2)
        self.assertEqual(nearest_step_index(6.3, 0, 2.5), 3)

    def test_nearest_step_index_rounds_half_up(self):
        self.assertEqual(nearest_step_index(1.25, 0, 2.5), 1)
        self.assertEqual(nearest_step_index(3.75, 0, 2.5), 2)

    def test_nearest_step_index_out_of_range_then_clamped(self):
        self.assertEqual(nearest_step_index(-3.0, 0, 2.5), -1)
        self.assertEqual(clamp_step_index(-1, 5), 0)
        self.assertEqual(clamp_step_index(nearest_step_index(14.0, 0, 2.5), 5), 4)

    def test_zero_delta_is_index_zero(self):
        self.assertEqual(nearest_step_index(7.0, 7.0, 0.0), 0)


class TestFormatStepValue(unittest.TestCase):
    def test_integers_without_decimals(self):
        self.assertEqual(format_step_value(3.0), "3")
        self.assertEqual(format_step_value(-2), "-2")

    def test_two_decimals_trailing_zeros_stripped(self):
        self.assertEqual(format_step_value(2.5), "2.5")
        self.assertEqual(format_step_value(0.126), "0.13")
        self.assertEqual(format_step_value(0.1 * 3), "0.3")

    def test_rounds_to_integer_text(self):
        self.assertEqual(format_step_value(100.001), "100")


class TestSliderMapping(unittest.TestCase):
    def test_resolution_from_steps(self):
        self.assertEqual(slider_resolution(5), 4)
        self.assertEqual(slider_resolution(2), 1)
        self.assertEqual(slider_resolution(1), 1000)
        self.assertEqual(slider_resolution(1, continuous_resolution=250), 250)

    def test_position_and_value(self):
        self.assertEqual(slider_position(0.5, 0, 1, 1000), 500)
        self.assertAlmostEqual(slider_value(250, 0, 1, 1000), 0.25, places=6)
        self.assertAlmostEqual(slider_value(2, -5, 5, 4), 0.0, places=6)

    def test_position_clamped_and_degenerate(self):
        self.assertEqual(slider_position(2.0, 0, 1, 100), 100)
        self.assertEqual(slider_position(-2.0, 0, 1, 100), 0)
        self.assertEqual(slider_position(4.0, 4.0, 4.0, 100), 0)


if __name__ == "__main__":
    unittest.main()
