import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Union

from tqdm import tqdm

from srl_extent.config import load_config
from srl_extent.core.data_structures import PredicateRoles, Sentence
from srl_extent.core.exceptions import SrlExtentError
from srl_extent.core.tree import build_tree
from srl_extent.extractor import RoleExtractor, as_word_mapping
from srl_extent.ingestion.reader import DocumentReader
from srl_extent.profiler import SentenceProfiler

logger = logging.getLogger(__name__)


@dataclass
class SentenceResult:
    sent_id: str
    words: List[str] = field(default_factory=list)
    predicates: Dict[int, PredicateRoles] = field(default_factory=dict)
    profile: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sent_id": self.sent_id,
            "text": " ".join(self.words),
            "predicates": [p.model_dump() for p in self.predicates.values()],
            "extents": as_word_mapping(self.predicates),
            "profile": self.profile,
            "error": self.error,
        }


class ExtentPipeline:
    """
    Главный класс-оркестратор.
    Чтение таблицы -> дерево зависимостей -> спаны ролей для каждого предиката.
    Ошибки одного предложения не останавливают обработку документа (кроме fail_fast).
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or load_config()
        self.reader = DocumentReader(
            layout=self.config["format"],
            max_predicates=self.config["max_predicates"],
            strict=self.config["validation_level"] == "strict"
        )
        self.extractor = RoleExtractor(self.config["roles"], self.config["singleton_policy"])
        self.profiler = SentenceProfiler() if self.config["profile"] else None

        logger.info(
            f"Initializing pipeline: format='{self.config['format']}', "
            f"roles={self.config['roles']}, singleton_policy='{self.config['singleton_policy']}'"
        )

    def process_sentence(self, sentence: Sentence) -> SentenceResult:
        tree = build_tree(sentence)
        predicates = self.extractor.extract(sentence, tree)
        profile = self.profiler.profile_sentence(sentence, tree) if self.profiler else None
        return SentenceResult(sentence.sent_id, sentence.words, predicates, profile)

    def process_file(self, source: Union[str, Path, TextIO], progress: bool = False) -> List[SentenceResult]:
        results = []
        blocks = self.reader.iter_blocks(source)

        for ordinal, block in tqdm(blocks, desc="sentences", disable=not progress):
            token_list = None
            try:
                sent_id, token_list = self.reader.parse_block(block, ordinal)
                sentence = self.reader.to_sentence(token_list, sent_id)
                results.append(self.process_sentence(sentence))
            except SrlExtentError as e:
                if self.config["fail_fast"]:
                    raise
                # Логируем, но не падаем: предложение пропускается
                logger.warning(f"Skipped sentence {e.sent_id}: {e}")
                words = [str(t.get(self.reader.layout["word_field"], "")) for t in token_list or []]
                results.append(SentenceResult(str(e.sent_id), words, error=str(e)))

        logger.info(f"Processed {len(results)} sentences")
        return results

    @staticmethod
    def summary(results: List[SentenceResult]) -> Dict[str, int]:
        """Агрегированная статистика по документу."""
        stats = {
            "sentences": len(results),
            "failed": 0,
            "predicates": 0,
            "roles": 0,
        }
        for res in results:
            if not res.ok:
                stats["failed"] += 1
                continue
            stats["predicates"] += len(res.predicates)
            stats["roles"] += sum(len(p.roles) for p in res.predicates.values())
        return stats
