import logging
import re
from typing import Any, Dict, List, Optional

from conllu import TokenList

from srl_extent.core.data_structures import PLACEHOLDER

logger = logging.getLogger(__name__)

INTEGER = re.compile(r"-?\d+")
OVERFLOW_FIELD = "overflow"


def role_field(slot: int) -> str:
    """Имя колонки ролей для предиката номер slot (0-based)."""
    return f"apred{slot + 1}"


class ValidationResult:
    """DTO для результатов валидации."""

    def __init__(self, is_valid: bool, errors: List[str], rows: Optional[List[int]] = None):
        self.is_valid = is_valid
        self.errors = errors
        # Номера проблемных строк (1-based внутри предложения), в порядке ошибок
        self.rows = rows or []

    @property
    def first_row(self) -> Optional[int]:
        return self.rows[0] if self.rows else None


class DataValidator:
    """
    Валидатор предложений в табличном формате SRL-разметки (CoNLL-2008/2009).
    Проверяет число колонок, поле HEAD, форму слова и количество корней.
    Границы HEAD проверяются позже, при построении дерева.
    """

    @staticmethod
    def validate_sentence(token_list: TokenList, layout: Dict[str, Any], strict: bool = True) -> ValidationResult:
        errors = []
        rows = []

        def report(row: int, message: str):
            rows.append(row)
            errors.append(f"Row {row}: {message}")

        base_columns = layout["first_role_column"]
        pred_field = layout["predicate_field"]
        n_predicates = sum(
            1 for t in token_list
            if t.get(pred_field) is not None and t[pred_field] != PLACEHOLDER
        )
        expected_columns = base_columns + n_predicates

        roots = 0
        for position, token in enumerate(token_list):
            row = position + 1

            # 1. Число колонок
            if OVERFLOW_FIELD in token:
                report(row, "more role columns than the configured maximum")
                continue
            if len(token) != expected_columns:
                report(row, f"expected {expected_columns} columns ({n_predicates} predicates), got {len(token)}")
                continue

            # 2. ID
            raw_id = token["id"]
            if not INTEGER.fullmatch(raw_id):
                report(row, f"ID {raw_id!r} is not an integer")
            elif strict and int(raw_id) != row:
                report(row, f"ID {raw_id} is out of sequence")

            # 3. Форма
            if not token[layout["word_field"]]:
                report(row, "empty FORM")

            # 4. HEAD
            raw_head = token[layout["head_field"]]
            if not INTEGER.fullmatch(raw_head):
                report(row, f"HEAD {raw_head!r} is not an integer")
            elif int(raw_head) < 0:
                report(row, f"HEAD {raw_head} is negative")
            elif int(raw_head) == 0:
                roots += 1

        # 5. Структурная проверка: ровно один корень
        if not errors and roots != 1:
            if strict:
                rows.append(None)
                errors.append(f"Found {roots} roots (expected 1)")
            else:
                logger.debug(f"Lenient mode: sentence has {roots} roots")

        return ValidationResult(len(errors) == 0, errors, rows)
