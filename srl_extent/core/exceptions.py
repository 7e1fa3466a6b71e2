from typing import List, Optional


class SrlExtentError(ValueError):
    """Базовая ошибка обработки одного предложения."""

    def __init__(self, sent_id: Optional[str], message: str):
        self.sent_id = sent_id
        super().__init__(f"[sent {sent_id}] {message}" if sent_id is not None else message)


class MalformedRowError(SrlExtentError):
    """Строка таблицы разметки не соответствует формату (колонки, HEAD, пустая форма)."""

    def __init__(self, sent_id: Optional[str], row: Optional[int], message: str, errors: Optional[List[str]] = None):
        # message уже содержит номер строки (см. DataValidator)
        self.row = row
        self.errors = errors or [message]
        super().__init__(sent_id, message)


class InvalidHeadError(SrlExtentError):
    """HEAD токена ссылается за пределы предложения."""

    def __init__(self, sent_id: Optional[str], token_index: int, head_index: int, size: int):
        self.token_index = token_index
        self.head_index = head_index
        self.size = size
        super().__init__(
            sent_id,
            f"token {token_index}: head {head_index} is outside the sentence (0..{size - 1})"
        )


class DegenerateSpanError(SrlExtentError):
    """Голова аргумента - лист дерева, а политика запрещает спаны из одного токена."""

    def __init__(self, sent_id: Optional[str], head_index: int):
        self.head_index = head_index
        super().__init__(sent_id, f"head {head_index} dominates only itself (singleton span)")


class NodeOutOfRangeError(InvalidHeadError):
    """Стартовый узел обхода не является токеном предложения."""

    def __init__(self, sent_id: Optional[str], node: int, size: int):
        self.token_index = None
        self.head_index = node
        self.size = size
        SrlExtentError.__init__(self, sent_id, f"start node {node} is outside the sentence (0..{size - 1})")
