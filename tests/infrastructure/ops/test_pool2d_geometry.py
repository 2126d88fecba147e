import math
import unittest

from keyinfer.domain._errors import DimensionError
from keyinfer.domain._pool_options import PaddingMode
from keyinfer.infrastructure.ops.pool2d_geometry import (
    PaddingSpec,
    check_pool2d_geometry,
    compute_pool2d_geometry,
    count_padding_cells,
)


class TestPool2dGeometryClosedForm(unittest.TestCase):
    def test_output_shape_matrix_matches_closed_form(self):
        """
        Validate output sizes and padding against the closed-form TF rules over
        a matrix of input sizes, windows and strides, for both padding modes.
        """
        for H in (1, 2, 5, 7, 8, 13):
            for W in (3, 4, 9):
                for k in ((1, 1), (2, 2), (3, 2), (2, 3)):
                    for s in ((1, 1), (2, 2), (3, 1), (1, 3)):
                        with self.subTest(H=H, W=W, k=k, s=s):
                            same = compute_pool2d_geometry(
                                H, W, window_size=k, stride=s, padding_mode=PaddingMode.SAME
                            )
                            self.assertEqual(
                                same.output_hw,
                                (math.ceil(H / s[0]), math.ceil(W / s[1])),
                            )
                            p = same.padding
                            self.assertGreaterEqual(min(p.as_tuple()), 0)
                            self.assertEqual(
                                p.total_rows,
                                max(0, (same.output_hw[0] - 1) * s[0] + k[0] - H),
                            )
                            self.assertIn(p.row_after - p.row_before, (0, 1))
                            self.assertIn(p.col_after - p.col_before, (0, 1))

                            valid = compute_pool2d_geometry(
                                H, W, window_size=k, stride=s, padding_mode=PaddingMode.VALID
                            )
                            self.assertEqual(
                                valid.output_hw,
                                ((H - k[0] + s[0]) // s[0], (W - k[1] + s[1]) // s[1]),
                            )
                            self.assertTrue(valid.padding.is_zero)

    def test_odd_total_padding_goes_after(self):
        cases = [
            # (n, k, s, before, after)
            (5, 2, 2, 0, 1),
            (6, 4, 1, 1, 2),
            (4, 3, 1, 1, 1),
            (7, 2, 1, 0, 1),
        ]
        for n, k, s, before, after in cases:
            with self.subTest(n=n, k=k, s=s):
                g = compute_pool2d_geometry(
                    n, n, window_size=(k, k), stride=(s, s), padding_mode=PaddingMode.SAME
                )
                self.assertEqual(g.padding.as_tuple(), (before, after, before, after))

    def test_five_by_five_same_scenario(self):
        g = compute_pool2d_geometry(
            5, 5, window_size=(2, 2), stride=(2, 2), padding_mode=PaddingMode.SAME
        )
        self.assertEqual(g.output_hw, (3, 3))
        self.assertEqual(g.padding, PaddingSpec(0, 1, 0, 1))
        self.assertEqual(g.padded_hw, (6, 6))

    def test_same_padding_never_negative_when_stride_exceeds_window(self):
        g = compute_pool2d_geometry(
            5, 5, window_size=(1, 1), stride=(3, 3), padding_mode=PaddingMode.SAME
        )
        self.assertEqual(g.output_hw, (2, 2))
        self.assertTrue(g.padding.is_zero)

    def test_valid_window_larger_than_input_gives_nonpositive_output(self):
        g = compute_pool2d_geometry(
            1, 1, window_size=(2, 2), stride=(2, 2), padding_mode=PaddingMode.VALID
        )
        self.assertEqual(g.output_hw, (0, 0))


class TestCheckPool2dGeometry(unittest.TestCase):
    def test_rejects_degenerate_geometry(self):
        g = compute_pool2d_geometry(
            3, 3, window_size=(5, 5), stride=(5, 5), padding_mode=PaddingMode.VALID
        )
        with self.assertRaises(DimensionError):
            check_pool2d_geometry(g, window_size=(5, 5))

    def test_accepts_same_padding_with_large_window(self):
        g = compute_pool2d_geometry(
            3, 3, window_size=(5, 5), stride=(5, 5), padding_mode=PaddingMode.SAME
        )
        check_pool2d_geometry(g, window_size=(5, 5))
        self.assertEqual(g.output_hw, (1, 1))
        self.assertEqual(g.padded_hw, (5, 5))


class TestCountPaddingCells(unittest.TestCase):
    def test_interior_window(self):
        self.assertEqual(count_padding_cells(1, 2, 6, 1, 1), 0)

    def test_leading_band(self):
        self.assertEqual(count_padding_cells(0, 3, 6, 2, 0), 2)

    def test_trailing_band(self):
        self.assertEqual(count_padding_cells(4, 2, 6, 0, 1), 1)

    def test_window_covering_both_bands(self):
        # extent 3 = 1 real cell padded by one on each side
        self.assertEqual(count_padding_cells(0, 3, 3, 1, 1), 2)


if __name__ == "__main__":
    unittest.main()
