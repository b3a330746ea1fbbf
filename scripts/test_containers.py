from __future__ import annotations
import unittest
from subhash.containers import HashedDict, HashedSet, counter
from subhash.functors import pair_hash, sequence_hash
from subhash.hashing import Hashing


class TestHashedSet(unittest.TestCase):
    def test_deduplicates_substring_hashes(self):
        hs = Hashing("abacaba")
        # aba, bac, aca, cab, aba
        seen = HashedSet((hs.substring_hash_pair(i, i + 2) for i in range(5)), hash_fn=pair_hash)
        self.assertEqual(len(seen), 4)
        self.assertIn(hs.substring_hash_pair(4, 6), seen)
        self.assertNotIn(hs.substring_hash_pair(0, 3), seen)

    def test_list_keys(self):
        seen = HashedSet([[1, 2], [1, 2], [2, 1]], hash_fn=sequence_hash)
        self.assertEqual(len(seen), 2)
        self.assertIn([2, 1], seen)

    def test_add_discard_remove(self):
        s = HashedSet()
        s.add(5)
        s.add(5)
        self.assertEqual(len(s), 1)
        s.discard(7)
        s.remove(5)
        self.assertEqual(len(s), 0)
        with self.assertRaises(KeyError):
            s.remove(5)

    def test_set_operators_keep_hash_fn(self):
        a = HashedSet([(1, 2), (3, 4)], hash_fn=pair_hash)
        b = HashedSet([(3, 4), (5, 6)], hash_fn=pair_hash)
        both = a & b
        self.assertIsInstance(both, HashedSet)
        self.assertEqual(set(both), {(3, 4)})
        self.assertEqual(set(a | b), {(1, 2), (3, 4), (5, 6)})
        self.assertEqual(set(a - b), {(1, 2)})

    def test_correct_under_total_collision(self):
        s = HashedSet(range(50), hash_fn=lambda k: 0)
        self.assertEqual(len(s), 50)
        self.assertIn(49, s)
        self.assertNotIn(50, s)


class TestHashedDict(unittest.TestCase):
    def test_mapping_protocol(self):
        d = HashedDict({(1, 2): "a"})
        d[(3, 4)] = "b"
        d[(1, 2)] = "c"
        self.assertEqual(len(d), 2)
        self.assertEqual(d[(1, 2)], "c")
        self.assertEqual(d.get((9, 9), "missing"), "missing")
        self.assertEqual(sorted(d), [(1, 2), (3, 4)])
        del d[(1, 2)]
        with self.assertRaises(KeyError):
            d[(1, 2)]
        with self.assertRaises(KeyError):
            del d[(1, 2)]

    def test_increment_and_counter(self):
        d = HashedDict()
        self.assertEqual(d.increment(7), 1)
        self.assertEqual(d.increment(7, 2), 3)
        freq = counter([(1, 1), (2, 2), (1, 1)])
        self.assertEqual(freq[(1, 1)], 2)
        self.assertEqual(freq[(2, 2)], 1)

    def test_sequence_keys(self):
        hs = Hashing("abacaba", moduli=(1000000009, 100000007, 998244353))
        freq = counter((list(hs.substring_hash(i, i + 2)) for i in range(5)), hash_fn=sequence_hash)
        self.assertEqual(len(freq), 4)
        self.assertEqual(freq[list(hs.substring_hash(0, 2))], 2)


if __name__ == "__main__":
    unittest.main()
