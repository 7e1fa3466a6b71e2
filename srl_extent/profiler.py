import logging
from typing import Optional

import networkx as nx

from srl_extent.core.data_structures import Sentence
from srl_extent.core.tree import DependencyTree, build_tree

logger = logging.getLogger(__name__)


class SentenceProfiler:
    """
    Диагностика предложения: насколько безопасно допущение о проективности
    для восстановления спанов.
    """

    def profile_sentence(self, sentence: Sentence, tree: Optional[DependencyTree] = None) -> dict:
        """
        Вычисляет набор метрик для одного предложения.
        """
        if tree is None:
            tree = build_tree(sentence)

        return {
            "id": sentence.sent_id,
            "text_len": len(sentence),
            "predicates": len(sentence.predicate_slots()),
            "roots": len(tree.roots),
            "tree_depth": self._calculate_tree_depth(tree),
            "non_projectivity": self._is_non_projective(sentence),
            "has_cycle": self._has_cycle(tree),
        }

    def _calculate_tree_depth(self, tree: DependencyTree) -> int:
        """
        Максимальная глубина дерева в ребрах от корня. -1, если корней нет.
        """
        if not tree.roots:
            return -1

        g = tree.to_graph()
        max_depth = 0
        for root in tree.roots:
            # shortest_path в невзвешенном графе дает BFS уровни
            lengths = nx.shortest_path_length(g, source=root)
            max_depth = max(max_depth, max(lengths.values()))
        return max_depth

    def _has_cycle(self, tree: DependencyTree) -> bool:
        return not nx.is_directed_acyclic_graph(tree.to_graph())

    def _is_non_projective(self, sentence: Sentence) -> bool:
        """
        Проверка на пересечение дуг (start < end < start < end).
        """
        arcs = []
        for t in sentence.tokens:
            if t.is_root:
                continue
            # Дуга всегда от min к max для проверки пересечений
            arcs.append(tuple(sorted((t.index, t.head_index))))

        for i in range(len(arcs)):
            for j in range(i + 1, len(arcs)):
                s1, e1 = arcs[i]
                s2, e2 = arcs[j]

                # Одна дуга начинается внутри другой, но заканчивается снаружи
                if s1 < s2 < e1 < e2:
                    return True
                if s2 < s1 < e2 < e1:
                    return True

        return False
