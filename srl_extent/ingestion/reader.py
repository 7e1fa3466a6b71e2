import io
import logging
import re
from itertools import chain
from pathlib import Path
from typing import Generator, List, Optional, TextIO, Tuple, Union

from conllu import TokenList, parse
from conllu.exceptions import ParseException

from srl_extent.config import get_layout
from srl_extent.core.data_structures import PLACEHOLDER, Sentence, Token
from srl_extent.core.exceptions import MalformedRowError
from srl_extent.ingestion.validators import OVERFLOW_FIELD, DataValidator, role_field

logger = logging.getLogger(__name__)

# conllu делит колонки по табу или по двум и более пробелам
COLUMN_SEPARATOR = re.compile(r"\t| {2,}")
SPACE_RUN = re.compile(r" {2,}")
SENT_ID_COMMENT = re.compile(r"^#\s*sent_id\s*=\s*(.*?)\s*$", re.MULTILINE)


def _raw(line, i):
    # ID и HEAD оставляем строками: числа разбирает DataValidator с номером строки
    return line[i]


class DocumentReader:
    """
    Читает табличный вывод SRL-разметчика (одна строка на токен,
    пустая строка между предложениями) и превращает его в Sentence.
    """

    def __init__(self, layout: str = "conll2008", max_predicates: int = 64, strict: bool = True):
        self.layout = get_layout(layout)
        self.max_predicates = max_predicates
        self.strict = strict

        # Колонки ролей + одна "лишняя", чтобы поймать строки с переполнением
        role_fields = [role_field(k) for k in range(max_predicates)]
        self.fields = tuple(self.layout["fields"] + role_fields + [OVERFLOW_FIELD])
        self.field_parsers = {"id": _raw, self.layout["head_field"]: _raw}

    def iter_blocks(self, source: Union[str, Path, TextIO]) -> Generator[Tuple[int, str], None, None]:
        """
        Режет поток на блоки по пустым строкам: (порядковый номер с 1, текст блока).
        Блоки из одних комментариев пропускаются.
        """
        if isinstance(source, (str, Path)):
            path = Path(source)
            logger.info(f"Parsing file: {path.name}")
            with open(path, "r", encoding="utf-8") as f:
                yield from self.iter_blocks(f)
            return

        block: List[str] = []
        ordinal = 0
        for line in chain(source, [""]):
            if line.strip():
                block.append(line.rstrip("\r\n"))
                continue
            if any(not l.lstrip().startswith("#") for l in block):
                ordinal += 1
                yield ordinal, "\n".join(block) + "\n"
            block = []

    def parse_block(self, block: str, ordinal: int) -> Tuple[str, TokenList]:
        """
        Разбирает один блок в TokenList. sent_id берется из комментария '# sent_id = ...',
        иначе - порядковый номер блока. Ошибка разбора касается только этого блока.
        """
        match = SENT_ID_COMMENT.search(block)
        sent_id = match.group(1) if match else str(ordinal)

        rows = [l.strip() for l in block.splitlines() if not l.lstrip().startswith("#")]
        for row, line in enumerate(rows, start=1):
            if not COLUMN_SEPARATOR.search(line):
                raise MalformedRowError(sent_id, row, f"Row {row}: no column separators in '{line}'")
            if "\t" in line and SPACE_RUN.search(line):
                raise MalformedRowError(
                    sent_id, row, f"Row {row}: run of spaces inside a tab-separated row would split a column"
                )

        try:
            token_list = parse(block, fields=self.fields, field_parsers=self.field_parsers)[0]
        except ParseException as e:
            raise MalformedRowError(sent_id, None, str(e)) from e
        return sent_id, token_list

    def iter_token_lists(self, source: Union[str, Path, TextIO]) -> Generator[Tuple[str, TokenList], None, None]:
        """Потоковый генератор сырых предложений: (sent_id, TokenList)."""
        for ordinal, block in self.iter_blocks(source):
            yield self.parse_block(block, ordinal)

    def to_sentence(self, token_list: TokenList, sent_id: str) -> Sentence:
        """
        Конвертирует сырые строки в Sentence: HEAD 1-based/0=ROOT -> 0-based, корень ссылается на себя.
        """
        result = DataValidator.validate_sentence(token_list, self.layout, strict=self.strict)
        if not result.is_valid:
            raise MalformedRowError(sent_id, result.first_row, result.errors[0], result.errors)

        pred_field = self.layout["predicate_field"]
        n_predicates = sum(1 for t in token_list if t[pred_field] != PLACEHOLDER)
        role_fields = [role_field(k) for k in range(n_predicates)]

        tokens = []
        for i, raw in enumerate(token_list):
            head = int(raw[self.layout["head_field"]])
            tokens.append(Token(
                index=i,
                word=raw[self.layout["word_field"]],
                head_index=i if head == 0 else head - 1,
                predicate=raw[pred_field],
                roles=[raw[f] for f in role_fields]
            ))

        return Sentence(sent_id=sent_id, tokens=tokens)

    def read(self, source: Union[str, Path, TextIO]) -> Generator[Sentence, None, None]:
        """Читает все предложения; на первой некорректной строке бросает MalformedRowError."""
        for sent_id, token_list in self.iter_token_lists(source):
            yield self.to_sentence(token_list, sent_id)

    def read_text(self, text: str) -> List[Sentence]:
        return list(self.read(io.StringIO(text)))


def read_document(path: Union[str, Path], layout: str = "conll2008", strict: bool = True,
                  max_predicates: Optional[int] = None) -> List[Sentence]:
    reader = DocumentReader(layout, max_predicates or 64, strict)
    return list(reader.read(path))
