import itertools
import unittest

from parameter_model import (
    ControlArchetype,
    ParameterSpec,
    classify,
    classify_parameter,
    display_name,
    is_on,
    next_toggle_value,
)


class TestClassify(unittest.TestCase):
    def test_examples(self):
        self.assertEqual(classify(0, 1, 2), ControlArchetype.BOOLEAN)
        self.assertEqual(classify(0, 10, 5), ControlArchetype.DISCRETE_STEPPED)
        self.assertEqual(classify(0, 10, 1), ControlArchetype.CONTINUOUS)
        self.assertEqual(classify(-5, 5, 2), ControlArchetype.CONTINUOUS)

    def test_boolean_requires_exact_shape(self):
        self.assertEqual(classify(0, 1, 1), ControlArchetype.CONTINUOUS)
        self.assertEqual(classify(0, 2, 2), ControlArchetype.CONTINUOUS)
        self.assertEqual(classify(0, 1, 3), ControlArchetype.DISCRETE_STEPPED)
        self.assertEqual(classify(0.0, 1.0, 2), ControlArchetype.BOOLEAN)

    def test_total_over_shapes(self):
        for mn, mx, steps in itertools.product([-1, 0, 1], [0, 1, 10], [1, 2, 3, 16]):
            self.assertIsInstance(classify(mn, mx, steps), ControlArchetype)

    def test_ignores_value_labels_name_and_id(self):
        a = ParameterSpec(id="a", name="Mode", min=0, max=4, steps=5, initial_value=0)
        b = ParameterSpec(id="zzz", name=None, min=0, max=4, steps=5, initial_value=3,
                          labels=("a", "b", "c", "d", "e"))
        self.assertEqual(classify_parameter(a), classify_parameter(b))
        self.assertEqual(classify_parameter(a), classify_parameter(a))


class TestHelpers(unittest.TestCase):
    def test_display_name_falls_back_to_id(self):
        self.assertEqual(display_name(ParameterSpec(id="gain", name="Gain")), "Gain")
        self.assertEqual(display_name(ParameterSpec(id="gain")), "gain")
        self.assertEqual(display_name(ParameterSpec(id="gain", name="")), "gain")

    def test_next_toggle_value_only_endpoints(self):
        self.assertEqual(next_toggle_value(1, 0, 1), 0)
        self.assertEqual(next_toggle_value(0, 0, 1), 1)
        self.assertEqual(next_toggle_value(0.4, 0, 1), 1)

    def test_is_on_threshold(self):
        self.assertTrue(is_on(1))
        self.assertTrue(is_on(1.5))
        self.assertFalse(is_on(0.999))


if __name__ == "__main__":
    unittest.main()
