from dataclasses import dataclass
from typing import FrozenSet, Sequence, Tuple

from .exceptions import DegenerateSpanError
from .tree import DependencyTree, descendants


@dataclass(frozen=True)
class Extent:
    start: int  # Включительно
    end: int  # Включительно
    text: str
    members: FrozenSet[int]
    # Позиции внутри [start, end], не подчиненные голове (непроективные вставки)
    gaps: Tuple[int, ...] = ()

    @property
    def is_projective(self) -> bool:
        return not self.gaps


def resolve_extent(
        tree: DependencyTree,
        head_index: int,
        words: Sequence[str],
        singleton_policy: str = "allow"
) -> Extent:
    """
    Спан аргумента = все слова с позициями в [min, max] поддерева головы.

    Предполагается проективность: токены внутри диапазона, не входящие
    в поддерево, все равно попадают в текст (они лишь перечисляются в gaps).
    """
    members = descendants(tree, head_index)
    start, end = min(members), max(members)

    if start == end and singleton_policy == "strict":
        raise DegenerateSpanError(tree.sent_id, head_index)

    text = " ".join(words[start:end + 1])
    gaps = tuple(i for i in range(start, end + 1) if i not in members)
    return Extent(start, end, text, frozenset(members), gaps)


def span_text(tree: DependencyTree, head_index: int, words: Sequence[str], singleton_policy: str = "allow") -> str:
    return resolve_extent(tree, head_index, words, singleton_policy).text
