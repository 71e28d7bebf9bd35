# gapfinder/tests/unit/test_block_gaps_finder.py
'''
Test Suite para el índice incremental de tramos (BlockGapsFinder).
    Verifica el enlace por head y por tail, la fusión de tramos adyacentes,
    la detección de ciclos y bifurcaciones y la independencia del orden.
'''

import sys
import os
import random
import unittest
from typing import List, Set, Tuple

# --- AJUSTE DE RUTA ---
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.abspath(os.path.join(current_dir, '../../..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from gapfinder.core.managers.block_gaps_finder import BlockGapsFinder
from gapfinder.core.models.block_link import BlockLink
from gapfinder.core.exceptions.chain_errors import (
    ChainStructureError, CycleDetectedError, ForkDetectedError
)

def B(block_hash: str, prev_hash: str) -> BlockLink:
    return BlockLink(block_hash, prev_hash)

def first_batch() -> List[BlockLink]:
    return [
        B("h1", "h0"), B("h2", "h1"), B("h3", "h2"), B("h4", "h3"), B("h5", "h4"),
        B("b1", "b0"), B("b2", "b1"),
        B("h7", "h6"), B("h8", "h7"),
        B("c1", "c0"),
    ]

def second_batch() -> List[BlockLink]:
    return [
        B("h6", "h5"), B("h9", "h8"), B("h10", "h9"), B("h0", "h-1"),
        B("c2", "c1"), B("c3", "c2"),
        B("h12", "h11"),
    ]

def third_batch() -> List[BlockLink]:
    return [B("h11", "h10")]

Signature = Set[Tuple[str, str, str, int]]

def signature(finder: BlockGapsFinder) -> Signature:
    return {
        (gap, c.head.block_hash, c.tail.block_hash, c.length)
        for gap, c in finder.chains().items()
    }

EXPECTED: Signature = {
    ("h-1", "h0", "h12", 13),
    ("b0", "b1", "b2", 2),
    ("c0", "c1", "c3", 3),
}

class TestBlockGapsFinder(unittest.TestCase):

    def setUp(self):
        self.rng = random.Random(20240611)
        self.finder = BlockGapsFinder(tail_index=False)

    def _shuffled(self, blocks: List[BlockLink]) -> List[BlockLink]:
        blocks = list(blocks)
        self.rng.shuffle(blocks)
        return blocks

    def test_three_shuffled_batches(self):
        print("\n>> Ejecutando: test_three_shuffled_batches...")

        self.finder.append(self._shuffled(first_batch()))
        self.finder.append(self._shuffled(second_batch()))
        self.finder.append(third_batch())

        chains = self.finder.chains()
        self.assertEqual(len(chains), 3)

        first = chains["h-1"]
        self.assertEqual((first.length, first.head.block_hash, first.tail.block_hash), (13, "h0", "h12"))

        second = chains["b0"]
        self.assertEqual((second.length, second.head.block_hash, second.tail.block_hash), (2, "b1", "b2"))

        third = chains["c0"]
        self.assertEqual((third.length, third.head.block_hash, third.tail.block_hash), (3, "c1", "c3"))

        self.assertEqual(self.finder.total_blocks, 18)
        print("[SUCCESS] Tres tramos reconstruidos.")

    def test_order_independence_single_batch(self):
        print(">> Ejecutando: test_order_independence_single_batch...")

        stream = first_batch() + second_batch() + third_batch()
        for _ in range(50):
            finder = BlockGapsFinder(tail_index=False)
            finder.append(self._shuffled(stream))
            self.assertEqual(signature(finder), EXPECTED)

        print("[SUCCESS] Mismo resultado en 50 permutaciones.")

    def test_incremental_equivalence(self):
        print(">> Ejecutando: test_incremental_equivalence...")

        stream = self._shuffled(first_batch() + second_batch() + third_batch())

        whole = BlockGapsFinder(tail_index=False)
        whole.append(stream)

        for batch_size in (1, 2, 3, 5, 7, len(stream)):
            finder = BlockGapsFinder(tail_index=False)
            for i in range(0, len(stream), batch_size):
                finder.append(stream[i:i + batch_size])
            self.assertEqual(signature(finder), signature(whole), f"batch_size={batch_size}")

        self.assertEqual(signature(whole), EXPECTED)
        print("[SUCCESS] Particionar en lotes no cambia el resultado.")

    def test_length_conservation_and_no_residual_adjacency(self):
        print(">> Ejecutando: test_length_conservation_and_no_residual_adjacency...")

        # 5 cadenas independientes de 40 bloques, entregadas en lotes desordenados
        stream: List[BlockLink] = []
        for chain_id in range(5):
            prev = f"root{chain_id}"
            for n in range(40):
                current = f"x{chain_id}_{n}"
                stream.append(B(current, prev))
                prev = current
        stream = self._shuffled(stream)

        for i in range(0, len(stream), 17):
            self.finder.append(stream[i:i + 17])

            chains = self.finder.chains()
            seen = self.finder.total_blocks
            self.assertEqual(sum(c.length for c in chains.values()), seen)
            for c in chains.values():
                self.assertNotIn(c.tail.block_hash, chains)

        self.assertEqual(len(self.finder), 5)
        print("[SUCCESS] Longitudes conservadas y sin tramos adyacentes.")

    def test_tail_index_matches_scan(self):
        print(">> Ejecutando: test_tail_index_matches_scan...")

        indexed = BlockGapsFinder(tail_index=True)
        self.assertTrue(indexed.uses_tail_index)
        self.assertFalse(self.finder.uses_tail_index)

        for batch in (first_batch(), second_batch(), third_batch()):
            shuffled = self._shuffled(batch)
            indexed.append(shuffled)
            self.finder.append(shuffled)

        self.assertEqual(signature(indexed), signature(self.finder))
        self.assertEqual(signature(indexed), EXPECTED)
        print("[SUCCESS] Índice de tails equivalente al escaneo.")

    def test_tail_index_matches_scan_on_resent_tail(self):
        print(">> Ejecutando: test_tail_index_matches_scan_on_resent_tail...")

        batches = [[B("a1", "a0"), B("a2", "a1")], [B("a2", "a1")], [B("a3", "a2")]]
        indexed = BlockGapsFinder(tail_index=True)
        for batch in batches:
            indexed.append(batch)
            self.finder.append(batch)

        self.assertEqual(signature(indexed), signature(self.finder))
        self.assertEqual(signature(indexed), {("a0", "a1", "a3", 3), ("a1", "a2", "a2", 1)})
        print("[SUCCESS] Tail reenviado: índice y escaneo coinciden.")

    def test_empty_append_is_noop(self):
        self.finder.append([])
        self.assertEqual(self.finder.total_blocks, 0)
        self.assertEqual(self.finder.took, 0.0)
        self.assertEqual(len(self.finder), 0)

    def test_snapshots_are_copies(self):
        self.finder.append([B("a1", "a0")])
        snapshot = self.finder.chains()
        snapshot.clear()
        self.finder.chains_as_list().clear()
        self.assertEqual(len(self.finder), 1)

    def test_head_extension_rekeys_index(self):
        self.finder.append([B("a2", "a1")])
        self.finder.append([B("a1", "a0")])

        chains = self.finder.chains()
        self.assertEqual(list(chains.keys()), ["a0"])
        self.assertEqual(chains["a0"].head.block_hash, "a1")
        self.assertEqual(chains["a0"].tail.block_hash, "a2")
        self.assertEqual(chains["a0"].gap_hash, "a0")

    def test_duplicate_block_is_ignored(self):
        self.finder.append([B("a1", "a0")])
        self.finder.append([B("a1", "a0")])

        self.assertEqual(len(self.finder), 1)
        self.assertEqual(self.finder.chains()["a0"].length, 1)
        self.assertEqual(self.finder.total_blocks, 2)

class TestBlockGapsFinderErrors(unittest.TestCase):

    def test_cycle_across_batches(self):
        print("\n>> Ejecutando: test_cycle_across_batches...")

        finder = BlockGapsFinder(tail_index=False)
        # h1 apunta a h4 (ciclo)
        finder.append([B("h1", "h4"), B("h2", "h1"), B("b1", "b0")])

        with self.assertRaises(CycleDetectedError):
            finder.append([B("h3", "h2"), B("h4", "h3"), B("b2", "b1")])
        print("[SUCCESS] Ciclo detectado en el lote que lo cierra.")

    def test_cycle_any_order(self):
        for order in ([0, 1, 2], [2, 1, 0], [1, 0, 2], [1, 2, 0], [0, 2, 1], [2, 0, 1]):
            for tail_index in (False, True):
                finder = BlockGapsFinder(tail_index=tail_index)
                finder.append([B("h1", "h4"), B("h2", "h1")])
                closing = [B("h3", "h2"), B("h4", "h3"), B("b2", "b1")]
                with self.assertRaises(CycleDetectedError):
                    finder.append([closing[i] for i in order])

    def test_three_block_loop(self):
        # A -> B -> C -> A
        finder = BlockGapsFinder(tail_index=False)
        with self.assertRaises(CycleDetectedError) as ctx:
            finder.append([B("B", "A"), B("C", "B"), B("A", "C")])

        err = ctx.exception
        self.assertIsInstance(err, ChainStructureError)
        self.assertIsNotNone(err.head)
        self.assertIsNotNone(err.tail)

    def test_self_referencing_block(self):
        finder = BlockGapsFinder(tail_index=False)
        with self.assertRaises(CycleDetectedError):
            finder.append([B("x", "x")])

    def test_fork_in_same_batch(self):
        print(">> Ejecutando: test_fork_in_same_batch...")

        finder = BlockGapsFinder(tail_index=False)
        with self.assertRaises(ForkDetectedError) as ctx:
            finder.append([B("h1", "h0"), B("h2", "h0")])

        self.assertEqual(ctx.exception.block_hash, "h2")
        print("[SUCCESS] Bifurcación detectada.")

    def test_fork_across_batches(self):
        finder = BlockGapsFinder(tail_index=False)
        finder.append([B("h1", "h0"), B("h2", "h1")])

        with self.assertRaises(ForkDetectedError) as ctx:
            finder.append([B("b1", "h0")])

        self.assertEqual(ctx.exception.block_hash, "b1")

    def test_fork_on_head_extension(self):
        # x1 es el previo de x2 y además reclama el mismo previo que y1
        finder = BlockGapsFinder(tail_index=False)
        finder.append([B("y1", "p"), B("x2", "x1")])

        with self.assertRaises(ForkDetectedError):
            finder.append([B("x1", "p")])

        # Ningún tramo se pierde ni queda con dos claves
        chains = finder.chains()
        self.assertEqual(set(chains.keys()), {"p", "x1"})

    def test_error_keeps_already_linked_blocks(self):
        finder = BlockGapsFinder(tail_index=False)
        finder.append([B("a1", "a0")])

        with self.assertRaises(ForkDetectedError):
            finder.append([B("a2", "a1"), B("z1", "a0"), B("a3", "a2")])

        chains = finder.chains()
        self.assertEqual(chains["a0"].tail.block_hash, "a2")
        self.assertEqual(chains["a0"].length, 2)
        self.assertEqual(finder.total_blocks, 4)

if __name__ == "__main__":
    unittest.main()
