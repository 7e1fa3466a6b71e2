import logging
from typing import Dict, Iterable, Optional

from srl_extent.core.data_structures import PredicateRoles, Sentence
from srl_extent.core.span import resolve_extent
from srl_extent.core.tree import DependencyTree, build_tree

logger = logging.getLogger(__name__)

DEFAULT_ROLES = ("A0", "A1")


class RoleExtractor:
    """
    По головам аргументов, отмеченным SRL-разметчиком, восстанавливает
    полные спаны ролей для каждого предиката предложения.

    Хранит только настройки; дерево строится заново на каждый вызов extract().
    """

    def __init__(self, roles: Iterable[str] = DEFAULT_ROLES, singleton_policy: str = "allow"):
        self.roles = frozenset(roles)
        self.singleton_policy = singleton_policy

    def collect_arguments(self, sentence: Sentence) -> Dict[int, Dict[str, int]]:
        """
        predicate token index -> {роль: индекс головы}.
        Если роль встречается несколько раз, побеждает последнее вхождение.
        """
        arguments = {}
        for slot, pred_index in sentence.predicate_slots():
            assignment = {}
            for token in sentence.tokens:
                role = token.roles[slot]
                if role not in self.roles:
                    continue
                if role in assignment:
                    logger.debug(
                        f"Sentence {sentence.sent_id}: role {role} of predicate {pred_index} "
                        f"repeated at token {token.index}, keeping the later head"
                    )
                assignment[role] = token.index
            arguments[pred_index] = assignment
        return arguments

    def extract(self, sentence: Sentence, tree: Optional[DependencyTree] = None) -> Dict[int, PredicateRoles]:
        words = sentence.words
        logger.debug(f"Sentence {sentence.sent_id} tokens: {words}")

        # Дерево строится один раз на предложение
        if tree is None:
            tree = build_tree(sentence)

        result = {}
        for pred_index, assignment in self.collect_arguments(sentence).items():
            token = sentence.tokens[pred_index]
            spans = {}
            for role, head_index in assignment.items():
                extent = resolve_extent(tree, head_index, words, self.singleton_policy)
                if not extent.is_projective:
                    logger.debug(
                        f"Sentence {sentence.sent_id}: {role} of '{token.word}' spans "
                        f"non-dominated tokens {list(extent.gaps)}"
                    )
                spans[role] = extent.text

            result[pred_index] = PredicateRoles(
                index=pred_index,
                word=token.word,
                frame=token.predicate,
                roles=spans
            )

        return result


def extract_roles(sentence: Sentence, roles: Iterable[str] = DEFAULT_ROLES,
                  singleton_policy: str = "allow") -> Dict[int, PredicateRoles]:
    return RoleExtractor(roles, singleton_policy).extract(sentence)


def as_word_mapping(result: Dict[int, PredicateRoles]) -> Dict[str, Dict[str, str]]:
    """
    Плоский вид {слово предиката: {роль: спан}}.
    Одинаковые словоформы перезаписывают друг друга - более поздний предикат побеждает.
    """
    mapping = {}
    for pred in result.values():
        if pred.word in mapping:
            logger.warning(f"Predicate word '{pred.word}' occurs more than once; token {pred.index} overwrites it")
        mapping[pred.word] = dict(pred.roles)
    return mapping
