import logging
import unittest

from params import Params
from projection import ProjectionInput
from validation import clamp_inputs, validate_inputs


class TestValidateInputs(unittest.TestCase):
    def test_valid_inputs(self):
        inputs = validate_inputs(30, 500, 3.0)
        self.assertEqual(inputs, ProjectionInput(30, 500.0, 3.0))

    def test_rate_defaults_to_2_5(self):
        self.assertEqual(validate_inputs(59, 100).annual_return_rate, 2.5)

    def test_whole_float_age_is_accepted(self):
        self.assertEqual(validate_inputs(45.0, 100).start_age, 45)

    def test_age_bounds(self):
        validate_inputs(15, 100)
        validate_inputs(59, 100)
        for age in (14, 60, 61, -1):
            with self.assertRaises(ValueError):
                validate_inputs(age, 100)

    def test_non_integer_age_rejected(self):
        for age in (30.5, "30", None, True):
            with self.assertRaises(ValueError):
                validate_inputs(age, 100)

    def test_savings_rejected(self):
        for savings in (-1, float("nan"), float("inf"), 2500.01, "abc", None, 10**400):
            with self.assertRaises(ValueError):
                validate_inputs(30, savings)

    def test_zero_and_max_savings_accepted(self):
        self.assertEqual(validate_inputs(30, 0).monthly_savings, 0.0)
        self.assertEqual(validate_inputs(30, 2500).monthly_savings, 2500.0)

    def test_rate_must_be_finite(self):
        with self.assertRaises(ValueError):
            validate_inputs(30, 100, float('nan'))
        # Loss scenarios are allowed through
        self.assertEqual(validate_inputs(30, 100, -2.0).annual_return_rate, -2.0)

    def test_custom_params(self):
        p = Params()
        p.max_monthly_savings = 50
        with self.assertRaises(ValueError):
            validate_inputs(30, 100, params=p)


class TestClampInputs(unittest.TestCase):
    def test_values_in_range_unchanged(self):
        self.assertEqual(clamp_inputs(40, 300, 2.5), ProjectionInput(40, 300.0, 2.5))

    def test_values_clamped(self):
        with self.assertLogs('validation', level=logging.WARNING):
            inputs = clamp_inputs(70, 5000, 25.0)
        self.assertEqual(inputs, ProjectionInput(59, 2500.0, 10.0))

        inputs = clamp_inputs(3, -10, -1.0)
        self.assertEqual(inputs, ProjectionInput(15, 0.0, 0.0))

    def test_non_finite_fallbacks(self):
        inputs = clamp_inputs(float('nan'), float('inf'), float('nan'))
        self.assertEqual(inputs, ProjectionInput(15, 0.0, 2.5))


if __name__ == '__main__':
    unittest.main()
