import unittest

import numpy as np

from keyinfer.domain._errors import DimensionError, InvalidConfigurationError
from keyinfer.domain._pool_options import ChannelOrder, PaddingMode, PoolReducer
from keyinfer.infrastructure.ops.pool2d_geometry import PaddingSpec
from keyinfer.infrastructure.pooling import AveragePooling2D, MaxPooling2D, Pool2dMeta
from keyinfer.infrastructure.pooling._pooling_layer import _Pooling2D
from keyinfer.infrastructure.tensor import Tensor


def _row_index_input() -> Tensor:
    x = np.repeat(np.arange(5, dtype=np.float32)[:, None], 5, axis=1)[:, :, None]
    return Tensor(x)


class TestPool2dMeta(unittest.TestCase):
    def test_defaults(self):
        meta = Pool2dMeta.create()
        self.assertEqual(meta.window_size, (2, 2))
        self.assertEqual(meta.stride, (2, 2))
        self.assertIs(meta.padding_mode, PaddingMode.VALID)
        self.assertIs(meta.channel_order, ChannelOrder.CHANNELS_LAST)

    def test_stride_defaults_to_window(self):
        meta = Pool2dMeta.create(window_size=(3, 2))
        self.assertEqual(meta.stride, (3, 2))

    def test_scalar_window_and_stride(self):
        meta = Pool2dMeta.create(window_size=3, stride=1)
        self.assertEqual(meta.window_size, (3, 3))
        self.assertEqual(meta.stride, (1, 1))

    def test_numpy_integer_window_and_stride(self):
        meta = Pool2dMeta.create(
            window_size=tuple(np.array([2, 3])), stride=np.int64(1)
        )
        self.assertEqual(meta.window_size, (2, 3))
        self.assertEqual(meta.stride, (1, 1))
        for v in meta.window_size + meta.stride:
            self.assertIs(type(v), int)

        layer = MaxPooling2D(tuple(np.array([2, 2])))
        self.assertEqual(layer.window_size, (2, 2))
        self.assertEqual(layer.get_config()["window_size"], [2, 2])
        y = layer(Tensor(np.arange(16, dtype=np.float32).reshape(4, 4, 1)))
        self.assertTrue(np.array_equal(y.data[:, :, 0], [[5.0, 7.0], [13.0, 15.0]]))

    def test_invalid_window_and_stride(self):
        bad = [
            {"window_size": 0},
            {"window_size": (2,)},
            {"window_size": (2, 2, 2)},
            {"window_size": (2.0, 2)},
            {"window_size": True},
            {"window_size": (np.int64(2), np.int64(0))},
            {"window_size": (2, 2), "stride": (1, -1)},
        ]
        for kwargs in bad:
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(InvalidConfigurationError):
                    Pool2dMeta.create(**kwargs)

    def test_is_immutable(self):
        meta = Pool2dMeta.create()
        with self.assertRaises(Exception):
            meta.window_size = (3, 3)  # type: ignore[misc]


class TestPoolingLayerScenarios(unittest.TestCase):
    def test_all_ones_valid_average(self):
        x = Tensor(np.ones((4, 4, 1), dtype=np.float32))
        y = AveragePooling2D((2, 2), stride=(2, 2), padding_mode="valid")(x)
        self.assertEqual(y.shape, (2, 2, 1))
        self.assertTrue(np.allclose(y.data, 1.0))

    def test_row_index_same_max(self):
        layer = MaxPooling2D((2, 2), stride=(2, 2), padding_mode="same")
        x = _row_index_input()
        self.assertEqual(layer.compute_padding(x.shape), PaddingSpec(0, 1, 0, 1))
        y = layer(x)
        self.assertEqual(y.shape, (3, 3, 1))
        expected = np.array([[1, 1, 1], [3, 3, 3], [4, 4, 4]], dtype=np.float32)
        self.assertTrue(np.array_equal(y.data[:, :, 0], expected))

    def test_row_index_same_average(self):
        layer = AveragePooling2D((2, 2), padding_mode="same")
        y = layer(_row_index_input())
        expected = np.array(
            [[0.5, 0.5, 0.5], [2.5, 2.5, 2.5], [4.0, 4.0, 4.0]], dtype=np.float32
        )
        self.assertTrue(np.allclose(y.data[:, :, 0], expected))

    def test_reducer_is_fixed_per_class(self):
        self.assertIs(MaxPooling2D().reducer, PoolReducer.MAX)
        self.assertIs(AveragePooling2D().reducer, PoolReducer.AVERAGE)


class TestPoolingLayerChannelOrder(unittest.TestCase):
    def setUp(self) -> None:
        np.random.seed(0)

    def test_channels_first_keeps_channels_leading(self):
        x_np = np.zeros((2, 4, 4), dtype=np.float32)
        x_np[0] = 1.0
        x_np[1] = 2.0
        layer = MaxPooling2D((2, 2), channel_order="channelsFirst")
        y = layer(Tensor(x_np))
        self.assertEqual(y.shape, (2, 2, 2))
        self.assertTrue(np.all(y.data[0] == 1.0))
        self.assertTrue(np.all(y.data[1] == 2.0))

    def test_channels_first_matches_channels_last(self):
        x_hwc = np.random.randn(7, 6, 3).astype(np.float32)
        x_chw = np.ascontiguousarray(x_hwc.transpose(2, 0, 1))
        for cls in (MaxPooling2D, AveragePooling2D):
            with self.subTest(layer=cls.__name__):
                last = cls((3, 2), stride=(2, 2), padding_mode="same")
                first = cls((3, 2), stride=(2, 2), padding_mode="same", channel_order="th")
                y_last = last(Tensor(x_hwc)).data
                y_first = first(Tensor(x_chw)).data
                self.assertEqual(y_first.shape, (3, 4, 3))
                self.assertTrue(np.allclose(y_first, y_last.transpose(2, 0, 1), atol=1e-6))

    def test_compute_output_shape_follows_channel_order(self):
        self.assertEqual(
            MaxPooling2D((2, 2), padding_mode="same").compute_output_shape((5, 7, 3)),
            (3, 4, 3),
        )
        self.assertEqual(
            MaxPooling2D((2, 2), channel_order="channelsFirst").compute_output_shape((3, 5, 7)),
            (3, 2, 3),
        )


class TestPoolingLayerErrors(unittest.TestCase):
    def test_invalid_reducer_fails_on_call(self):
        class MedianPooling2D(_Pooling2D):
            _reducer = "median"

        layer = MedianPooling2D((2, 2))
        with self.assertRaises(InvalidConfigurationError):
            layer(Tensor(np.ones((4, 4, 1), dtype=np.float32)))

    def test_window_larger_than_input_raises(self):
        layer = MaxPooling2D((5, 5))
        with self.assertRaises(DimensionError):
            layer(Tensor(np.ones((3, 3, 1), dtype=np.float32)))
        with self.assertRaises(DimensionError):
            layer.compute_output_shape((3, 3, 1))

    def test_same_padding_accepts_window_larger_than_input(self):
        y = AveragePooling2D((5, 5), padding_mode="same")(
            Tensor(np.full((3, 3, 2), 2.0, dtype=np.float32))
        )
        self.assertEqual(y.shape, (1, 1, 2))
        self.assertTrue(np.allclose(y.data, 2.0))

    def test_non_3d_input_raises(self):
        layer = MaxPooling2D((2, 2))
        with self.assertRaises(DimensionError):
            layer(Tensor(np.ones((1, 4, 4, 1), dtype=np.float32)))
        with self.assertRaises(DimensionError):
            layer(Tensor(np.ones((4, 4), dtype=np.float32)))

    def test_invalid_options(self):
        with self.assertRaises(InvalidConfigurationError):
            MaxPooling2D((2, 2), padding_mode="full")
        with self.assertRaises(InvalidConfigurationError):
            MaxPooling2D((2, 2), channel_order="nchw")
        with self.assertRaises(InvalidConfigurationError):
            AveragePooling2D((0, 2))


class TestPoolingLayerOwnership(unittest.TestCase):
    def test_input_is_not_mutated_and_output_is_fresh(self):
        x_np = np.random.RandomState(1).randn(5, 5, 2).astype(np.float32)
        for backend in ("reference", "numpy"):
            for cls in (MaxPooling2D, AveragePooling2D):
                with self.subTest(backend=backend, layer=cls.__name__):
                    x = Tensor(x_np.copy())
                    y = cls((2, 2), padding_mode="same", backend=backend)(x)
                    self.assertEqual(x.shape, (5, 5, 2))
                    self.assertTrue(np.array_equal(x.data, x_np))
                    self.assertFalse(np.shares_memory(x.data, y.data))

    def test_repeated_calls_with_varying_input_sizes(self):
        layer = MaxPooling2D((2, 2), padding_mode="same")
        self.assertEqual(layer(Tensor(shape=(5, 5, 1))).shape, (3, 3, 1))
        self.assertEqual(layer(Tensor(shape=(8, 6, 1))).shape, (4, 3, 1))
        self.assertEqual(layer(Tensor(shape=(5, 5, 1))).shape, (3, 3, 1))


if __name__ == "__main__":
    unittest.main()
