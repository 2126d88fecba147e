import unittest

from keyinfer.domain._errors import InvalidConfigurationError
from keyinfer.domain._pool_options import ChannelOrder, PaddingMode, PoolReducer


class TestPaddingModeParse(unittest.TestCase):
    def test_accepts_members_and_spellings(self):
        self.assertIs(PaddingMode.parse(PaddingMode.SAME), PaddingMode.SAME)
        self.assertIs(PaddingMode.parse("valid"), PaddingMode.VALID)
        self.assertIs(PaddingMode.parse("SAME"), PaddingMode.SAME)

    def test_rejects_unknown(self):
        with self.assertRaises(InvalidConfigurationError) as cm:
            PaddingMode.parse("full")
        self.assertEqual(cm.exception.option, "padding_mode")
        self.assertEqual(cm.exception.value, "full")


class TestChannelOrderParse(unittest.TestCase):
    def test_keras_spellings(self):
        cases = {
            "channelsLast": ChannelOrder.CHANNELS_LAST,
            "channels_last": ChannelOrder.CHANNELS_LAST,
            "tf": ChannelOrder.CHANNELS_LAST,
            "channelsFirst": ChannelOrder.CHANNELS_FIRST,
            "channels_first": ChannelOrder.CHANNELS_FIRST,
            "th": ChannelOrder.CHANNELS_FIRST,
        }
        for spelling, expected in cases.items():
            with self.subTest(spelling=spelling):
                self.assertIs(ChannelOrder.parse(spelling), expected)

    def test_rejects_unknown(self):
        with self.assertRaises(InvalidConfigurationError):
            ChannelOrder.parse("nchw")


class TestPoolReducerParse(unittest.TestCase):
    def test_aliases(self):
        self.assertIs(PoolReducer.parse("max"), PoolReducer.MAX)
        self.assertIs(PoolReducer.parse("average"), PoolReducer.AVERAGE)
        self.assertIs(PoolReducer.parse("avg"), PoolReducer.AVERAGE)
        self.assertIs(PoolReducer.parse("mean"), PoolReducer.AVERAGE)

    def test_rejects_other_reducers(self):
        """Only max and average pooling exist; anything else is a config error."""
        with self.assertRaises(InvalidConfigurationError) as cm:
            PoolReducer.parse("median")
        self.assertIn("max or average", str(cm.exception))
        self.assertIsInstance(cm.exception, ValueError)


if __name__ == "__main__":
    unittest.main()
