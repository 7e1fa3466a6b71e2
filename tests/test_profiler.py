import unittest

from samples import make_sentence, metamorphosed_sentence
from srl_extent.core.tree import build_tree
from srl_extent.profiler import SentenceProfiler


class TestProfiler(unittest.TestCase):
    def setUp(self):
        self.profiler = SentenceProfiler()

    def test_canonical_profile(self):
        profile = self.profiler.profile_sentence(metamorphosed_sentence())

        self.assertEqual(profile["id"], "1")
        self.assertEqual(profile["text_len"], 20)
        self.assertEqual(profile["predicates"], 3)
        self.assertEqual(profile["roots"], 1)
        self.assertEqual(profile["tree_depth"], 5)
        self.assertFalse(profile["non_projectivity"])
        self.assertFalse(profile["has_cycle"])

    def test_non_projectivity(self):
        # Синтетический пример пересечения дуг:
        # A -> C, B -> D, D -> C (0-based: 0-2 и 1-3 пересекаются)
        sentence = make_sentence(["A", "B", "C", "D"], [2, 3, 2, 2])
        self.assertTrue(self.profiler._is_non_projective(sentence))

    def test_tree_depth(self):
        # Root -> Child -> Grandchild: 2 ребра
        sentence = make_sentence(["Root", "Child", "Grandchild"], [0, 0, 1])
        self.assertEqual(self.profiler._calculate_tree_depth(build_tree(sentence)), 2)

    def test_cycle_detection(self):
        # 0 <-> 1 без пути от корня
        sentence = make_sentence(["a", "b", "c"], [1, 0, 2])
        profile = self.profiler.profile_sentence(sentence)

        self.assertTrue(profile["has_cycle"])
        self.assertEqual(profile["tree_depth"], 0)

    def test_no_root(self):
        sentence = make_sentence(["a", "b"], [1, 0])
        self.assertEqual(self.profiler._calculate_tree_depth(build_tree(sentence)), -1)


if __name__ == '__main__':
    unittest.main()
