# gapfinder/tests/unit/test_block_link.py
import sys
import os
import unittest

# --- AJUSTE DE RUTA ---
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.abspath(os.path.join(current_dir, '../../..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from gapfinder.core.models.block_link import BlockLink
from gapfinder.core.models.chain_segment import ChainSegment

class TestBlockLink(unittest.TestCase):

    def test_from_dict_flat_format(self):
        block = BlockLink.from_dict({"hash": "h1", "prev_hash": "h0", "timestamp": "1700000000"})
        self.assertEqual(block.block_hash, "h1")
        self.assertEqual(block.hash, "h1")
        self.assertEqual(block.prev_hash, "h0")
        self.assertEqual(block.timestamp, 1700000000)

    def test_from_dict_node_header_format(self):
        data = {
            "header": {"index": 4, "hash": "abc", "previous_hash": "def", "timestamp": 12},
            "transactions": []
        }
        block = BlockLink.from_dict(data)
        self.assertEqual((block.block_hash, block.prev_hash, block.timestamp), ("abc", "def", 12))

    def test_from_dict_without_timestamp(self):
        block = BlockLink.from_dict({"block_hash": "h1", "previous_hash": "h0"})
        self.assertIsNone(block.timestamp)

    def test_from_dict_rejects_missing_fields(self):
        with self.assertRaises(ValueError):
            BlockLink.from_dict({"hash": "h1"})
        with self.assertRaises(ValueError):
            BlockLink.from_dict(["h1", "h0"]) # type: ignore

    def test_to_dict_round_trip(self):
        block = BlockLink("h1", "h0", 5)
        self.assertEqual(BlockLink.from_dict(block.to_dict()), block)

    def test_equality_ignores_timestamp(self):
        self.assertEqual(BlockLink("h1", "h0", 1), BlockLink("h1", "h0", 2))
        self.assertNotEqual(BlockLink("h1", "h0"), BlockLink("h1", "hX"))
        self.assertEqual(len({BlockLink("h1", "h0"), BlockLink("h1", "h0")}), 1)

class TestChainSegment(unittest.TestCase):

    def test_singleton_segment(self):
        block = BlockLink("h1", "h0", 100)
        segment = ChainSegment(head=block, tail=block)

        self.assertEqual(segment.length, 1)
        self.assertEqual(segment.gap_hash, "h0")
        self.assertEqual(segment.to_dict(), {
            "gap_hash": "h0",
            "length": 1,
            "head_hash": "h1",
            "head_timestamp": 100,
            "tail_hash": "h1",
            "tail_timestamp": 100
        })

if __name__ == "__main__":
    unittest.main()
