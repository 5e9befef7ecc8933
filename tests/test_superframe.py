from unittest import TestCase

from vp9parser.exceptions import SuperframeMarkerMismatch
from vp9parser.superframe import SuperframeIndex, is_superframe_marker, split_superframe

from .utils import corrupt, load


class SuperframeIndexTest(TestCase):
    def test_marker(self) -> None:
        self.assertTrue(is_superframe_marker(0xC0))
        self.assertTrue(is_superframe_marker(0xC9))
        self.assertTrue(is_superframe_marker(0xDF))
        self.assertFalse(is_superframe_marker(0x88))
        self.assertFalse(is_superframe_marker(0xE0))
        self.assertFalse(is_superframe_marker(0x80))

    def test_no_index(self) -> None:
        self.assertIsNone(SuperframeIndex.parse(b""))
        self.assertIsNone(SuperframeIndex.parse(b"\x88"))
        self.assertIsNone(SuperframeIndex.parse(load("vp9_interframe.bin")))

    def test_parse(self) -> None:
        index = SuperframeIndex.parse(load("vp9_superframe.bin"))
        self.assertEqual(
            index, SuperframeIndex(bytes_per_frame_size=2, frame_sizes=[60, 72])
        )
        self.assertEqual(index.index_size, 6)

    def test_parse_one_byte_sizes(self) -> None:
        # 110 00 010: one byte per size, three frames
        data = b"\x01" * 6 + b"\xc2\x01\x02\x03\xc2"
        index = SuperframeIndex.parse(data)
        self.assertEqual(
            index, SuperframeIndex(bytes_per_frame_size=1, frame_sizes=[1, 2, 3])
        )
        self.assertEqual(index.index_size, 5)

    def test_parse_four_byte_sizes(self) -> None:
        # 110 11 000: four bytes per size, one frame
        data = b"\x00" * 3 + b"\xd8\x03\x00\x00\x00\xd8"
        index = SuperframeIndex.parse(data)
        self.assertEqual(
            index, SuperframeIndex(bytes_per_frame_size=4, frame_sizes=[3])
        )
        self.assertEqual(index.index_size, 6)

    def test_parse_corrupted_marker(self) -> None:
        data = load("vp9_superframe.bin")
        with self.assertRaises(SuperframeMarkerMismatch) as cm:
            SuperframeIndex.parse(corrupt(data, len(data) - 6, 0xC0))
        self.assertEqual(
            str(cm.exception), "Superframe index starts with 0xc0, expected 0xc9"
        )

    def test_parse_truncated(self) -> None:
        with self.assertRaises(SuperframeMarkerMismatch) as cm:
            SuperframeIndex.parse(b"\x3c\x00\xc9")
        self.assertEqual(
            str(cm.exception), "Superframe index of 6 bytes does not fit in 3 bytes"
        )


class SplitSuperframeTest(TestCase):
    def test_single_frame(self) -> None:
        data = load("vp9_keyframe_420.bin")
        self.assertEqual(split_superframe(data), ([(0, 80)], 0))

    def test_superframe(self) -> None:
        data = load("vp9_superframe.bin")
        ranges, index_size = split_superframe(data)
        self.assertEqual(ranges, [(0, 60), (60, 72)])
        self.assertEqual(index_size, 6)
        self.assertEqual(sum(size for _, size in ranges) + index_size, len(data))

    def test_superframe_sizes_not_validated(self) -> None:
        # claims two frames of 16 bytes, only 2 bytes precede the index
        data = b"\x88\x88" + b"\xc1\x10\x10\xc1"
        self.assertEqual(split_superframe(data), ([(0, 16), (16, 16)], 4))
