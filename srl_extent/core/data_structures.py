from typing import Dict, List, NamedTuple

from pydantic import BaseModel, Field, model_validator

# Значение-заглушка CoNLL: "нет предиката" / "нет роли"
PLACEHOLDER = "_"


class Token(BaseModel):
    """
    Строка таблицы разметки после конвертации ридером.
    Корень ссылается сам на себя: head_index == index.
    """
    index: int  # 0-based позиция в предложении
    word: str
    head_index: int  # 0-based индекс родителя
    predicate: str = PLACEHOLDER  # Колонка PRED (например, "metamorphose.01")
    roles: List[str] = Field(default_factory=list)  # По одной колонке на предикат

    @property
    def is_root(self) -> bool:
        return self.head_index == self.index

    @property
    def is_predicate(self) -> bool:
        return self.predicate != PLACEHOLDER


class PredicateSlot(NamedTuple):
    slot: int  # Номер колонки ролей этого предиката
    token_index: int


class Sentence(BaseModel):
    sent_id: str
    tokens: List[Token]

    @model_validator(mode='after')
    def check_table(self):
        for position, token in enumerate(self.tokens):
            if token.index != position:
                raise ValueError(f"Token '{token.word}' has index {token.index}, expected {position}")

        n_predicates = sum(1 for t in self.tokens if t.is_predicate)
        for token in self.tokens:
            if len(token.roles) != n_predicates:
                raise ValueError(
                    f"Token {token.index} '{token.word}' has {len(token.roles)} role columns "
                    f"for {n_predicates} predicates"
                )
        return self

    def __len__(self) -> int:
        return len(self.tokens)

    @property
    def words(self) -> List[str]:
        return [t.word for t in self.tokens]

    @property
    def heads(self) -> List[int]:
        return [t.head_index for t in self.tokens]

    def predicate_slots(self) -> List[PredicateSlot]:
        """Предикаты в порядке строк; i-й предикат читает i-ю колонку ролей."""
        indices = [t.index for t in self.tokens if t.is_predicate]
        return [PredicateSlot(slot, index) for slot, index in enumerate(indices)]


class PredicateRoles(BaseModel):
    """Результат для одного предиката: роль -> восстановленный спан."""
    index: int
    word: str
    frame: str
    roles: Dict[str, str] = Field(default_factory=dict)
