import unittest

from thompson_regex.utils.pattern_cache import LRUPatternCache, get_cache_key


class TestLRUPatternCache(unittest.TestCase):
    def setUp(self):
        self.cache = LRUPatternCache(max_size=2)

    def test_miss_then_hit(self):
        self.assertIsNone(self.cache.get("k"))
        self.cache.put("k", "automaton", 0.5)
        self.assertEqual(self.cache.get("k"), ("automaton", 0.5))
        stats = self.cache.get_stats()
        self.assertEqual(stats["hits"], 1)
        self.assertEqual(stats["misses"], 1)
        self.assertAlmostEqual(stats["compilation_time_saved"], 0.5)
        self.assertAlmostEqual(stats["cache_efficiency"], 50.0)

    def test_evicts_least_recently_used(self):
        self.cache.put("a", 1, 0.0)
        self.cache.put("b", 2, 0.0)
        self.cache.get("a")
        self.cache.put("c", 3, 0.0)
        self.assertIsNone(self.cache.get("b"))
        self.assertIsNotNone(self.cache.get("a"))
        self.assertIsNotNone(self.cache.get("c"))
        self.assertEqual(self.cache.get_stats()["evictions"], 1)

    def test_put_existing_key_does_not_evict(self):
        self.cache.put("a", 1, 0.0)
        self.cache.put("b", 2, 0.0)
        self.cache.put("a", 3, 0.0)
        self.assertEqual(len(self.cache), 2)
        self.assertEqual(self.cache.get("a"), (3, 0.0))

    def test_resize(self):
        self.cache.put("a", 1, 0.0)
        self.cache.put("b", 2, 0.0)
        self.cache.resize(1)
        self.assertEqual(len(self.cache), 1)
        self.assertIsNotNone(self.cache.get("b"))
        with self.assertRaises(ValueError):
            self.cache.resize(0)

    def test_clear_resets_stats(self):
        self.cache.put("a", 1, 0.0)
        self.cache.get("a")
        self.cache.clear()
        stats = self.cache.get_stats()
        self.assertEqual(stats["size"], 0)
        self.assertEqual(stats["hits"], 0)
        self.assertEqual(stats["max_size"], 2)

    def test_cache_key(self):
        self.assertEqual(get_cache_key("a*", 64), get_cache_key("a*", 64))
        self.assertNotEqual(get_cache_key("a*", 64), get_cache_key("a*", 65))
        self.assertNotEqual(get_cache_key("a*", 64), get_cache_key("a+", 64))


if __name__ == "__main__":
    unittest.main()
