import logging
from collections import deque
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Set, Tuple

import networkx as nx

from .data_structures import Sentence
from .exceptions import InvalidHeadError, NodeOutOfRangeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencyTree:
    """
    Неизменяемое отображение родитель -> упорядоченные дети.
    Собирается заново для каждого предложения и не переиспользуется.
    """
    size: int
    children_map: Mapping[int, Tuple[int, ...]]
    roots: Tuple[int, ...] = ()
    sent_id: Optional[str] = None

    @classmethod
    def from_children(cls, size: int, children: Dict[int, List[int]], roots=(), sent_id=None) -> "DependencyTree":
        frozen = {node: tuple(children.get(node, ())) for node in range(size)}
        return cls(size=size, children_map=MappingProxyType(frozen), roots=tuple(roots), sent_id=sent_id)

    def children(self, node: int) -> Tuple[int, ...]:
        return self.children_map.get(node, ())

    @property
    def edge_count(self) -> int:
        return sum(len(c) for c in self.children_map.values())

    def to_graph(self) -> nx.DiGraph:
        """Представление в networkx для диагностики (глубина, циклы)."""
        g = nx.DiGraph()
        g.add_nodes_from(range(self.size))
        for parent, kids in self.children_map.items():
            for child in kids:
                g.add_edge(parent, child)
        return g


def build_tree(sentence: Sentence) -> DependencyTree:
    """
    Строит дерево зависимостей по head_index каждого токена.
    Корень (head_index == index) не получает петлю на себя.
    """
    size = len(sentence)
    children: Dict[int, List[int]] = {}
    roots = []

    for token in sentence.tokens:
        head = token.head_index
        if not 0 <= head < size:
            raise InvalidHeadError(sentence.sent_id, token.index, head, size)

        if head == token.index:
            roots.append(token.index)
            continue

        children.setdefault(head, []).append(token.index)

    if len(roots) != 1:
        logger.debug(f"Sentence {sentence.sent_id}: {len(roots)} roots found")

    return DependencyTree.from_children(size, children, roots=roots, sent_id=sentence.sent_id)


def descendants(tree: DependencyTree, start: int) -> Set[int]:
    """
    BFS от start по ребрам к детям. Возвращает все достижимые индексы, включая сам start.
    Каждый узел посещается не более одного раза (петли и циклы не зацикливают обход).
    """
    if not 0 <= start < tree.size:
        raise NodeOutOfRangeError(tree.sent_id, start, tree.size)

    visited = {start}
    queue = deque([start])

    while queue:
        node = queue.popleft()
        for child in tree.children(node):
            if child in visited:
                continue
            visited.add(child)
            queue.append(child)

    return visited
