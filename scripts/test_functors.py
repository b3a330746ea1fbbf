from __future__ import annotations
import random
import threading
import unittest
from subhash import functors
from subhash.functors import COMBINE_CONSTANT, MASK64, int_hash, key_hash, pair_hash, sequence_hash, splitmix64


class TestFunctors(unittest.TestCase):
    def setUp(self):
        self.rng = random.Random(7)

    def test_splitmix64_reference_value(self):
        # First output of the reference splitmix64 generator seeded with 0
        self.assertEqual(splitmix64(0), 0xE220A8397B1DCDAF)

    def test_int_hash_is_deterministic_and_64_bit(self):
        for x in [0, 1, -1, 2**63, 10**18, -(10**18)]:
            h = int_hash(x)
            self.assertEqual(int_hash(x), h)
            self.assertTrue(0 <= h <= MASK64)
        # -1 and 2^64 - 1 are the same 64-bit word
        self.assertEqual(int_hash(-1), int_hash(MASK64))

    def test_int_hash_avalanche(self):
        flipped = []
        for _ in range(500):
            x = self.rng.getrandbits(64)
            bit = 1 << self.rng.randrange(64)
            flipped.append(bin(int_hash(x) ^ int_hash(x ^ bit)).count("1"))
        average = sum(flipped) / len(flipped)
        self.assertTrue(28 <= average <= 36, average)

    def test_int_hash_spreads_consecutive_keys(self):
        buckets = [0] * 64
        for x in range(64 * 100):
            buckets[int_hash(x) % 64] += 1
        self.assertLess(max(buckets), 200)

    def test_pair_hash_is_order_sensitive(self):
        for _ in range(200):
            a, b = self.rng.getrandbits(40), self.rng.getrandbits(40)
            if a == b:
                continue
            self.assertNotEqual(pair_hash((a, b)), pair_hash((b, a)))
        self.assertEqual(pair_hash((3, 5)), pair_hash((3, 5)))

    def test_sequence_hash(self):
        self.assertEqual(sequence_hash([]), 0)
        self.assertEqual(sequence_hash(()), 0)
        x = 123456789
        self.assertEqual(sequence_hash([x]), (int_hash(x) + COMBINE_CONSTANT) & MASK64)
        self.assertNotEqual(sequence_hash([1, 2, 3]), sequence_hash([3, 2, 1]))
        self.assertEqual(sequence_hash([1, 2, 3]), sequence_hash((1, 2, 3)))

    def test_key_hash_dispatch(self):
        self.assertEqual(key_hash(42), int_hash(42))
        self.assertEqual(key_hash((4, 2)), pair_hash((4, 2)))
        self.assertEqual(key_hash((4, 2, 0)), sequence_hash((4, 2, 0)))
        self.assertEqual(key_hash([4, 2]), sequence_hash([4, 2]))

    def test_seed_is_established_once_under_contention(self):
        saved = functors._seed
        functors._seed = None
        try:
            n_threads = 16
            barrier = threading.Barrier(n_threads)
            seen = []

            def first_use():
                barrier.wait()
                seen.append(functors._process_seed())

            threads = [threading.Thread(target=first_use) for _ in range(n_threads)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()
            self.assertEqual(len(seen), n_threads)
            self.assertEqual(len(set(seen)), 1)
            self.assertEqual(functors._process_seed(), seen[0])
        finally:
            functors._seed = saved


if __name__ == "__main__":
    unittest.main()
