# ==============================================================================
# File: tests/test_gradients.py
# Purpose: Unit tests for the fixed gradient sets and their repeated tables.
# ==============================================================================
import unittest
import numpy as np

from simplex_field import config as DEFAULTS
from simplex_field.gradients import (
    GRADIENTS_2D,
    GRADIENTS_3D,
    GRADIENTS_4D,
    normalized_gradients,
    repeated_gradient_table,
    shared_gradient_table,
)


class TestGradientSets(unittest.TestCase):

    def test_set_sizes(self):
        self.assertEqual(GRADIENTS_2D.shape, (24, 2))
        self.assertEqual(GRADIENTS_3D.shape, (48, 3))
        self.assertEqual(GRADIENTS_4D.shape, (160, 4))

    def test_equal_lengths_within_each_set(self):
        for grads in (GRADIENTS_2D, GRADIENTS_3D, GRADIENTS_4D):
            lengths = np.linalg.norm(grads, axis=1)
            self.assertLess(lengths.max() - lengths.min(), 1e-9)

    def test_2d_and_3d_sets_are_symmetric(self):
        # Every direction has its opposite in the set. The 4D set is kept
        # exactly as published, including one row without an exact opposite.
        for grads in (GRADIENTS_2D, GRADIENTS_3D):
            rows = {tuple(np.round(g, 9) + 0.0) for g in grads}
            for g in grads:
                self.assertIn(tuple(np.round(-g, 9) + 0.0), rows)

    def test_raw_sets_are_read_only(self):
        with self.assertRaises(ValueError):
            GRADIENTS_2D[0, 0] = 0.0


class TestRepeatedTables(unittest.TestCase):

    def test_cyclic_repetition(self):
        norm = DEFAULTS.KERNEL_PROFILES["wide"]["n4"]
        table = repeated_gradient_table(4, norm)
        self.assertEqual(table.shape, (DEFAULTS.PSIZE, 4))
        np.testing.assert_array_equal(table[:160], normalized_gradients(4, norm))
        np.testing.assert_array_equal(table[160:320], table[:160])
        np.testing.assert_array_equal(table[DEFAULTS.PSIZE - 1], table[(DEFAULTS.PSIZE - 1) % 160])

    def test_normalization(self):
        norm = DEFAULTS.KERNEL_PROFILES["narrow"]["n2"]
        np.testing.assert_allclose(normalized_gradients(2, norm) * norm, GRADIENTS_2D)

    def test_shared_table_is_cached_and_read_only(self):
        norm = DEFAULTS.KERNEL_PROFILES["wide"]["n3"]
        first = shared_gradient_table(3, norm)
        self.assertIs(first, shared_gradient_table(3, norm))
        self.assertFalse(first.flags.writeable)


if __name__ == '__main__':
    unittest.main()
