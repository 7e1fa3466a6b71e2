import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

# Определение базовых путей относительно корня проекта
BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = BASE_DIR / "config" / "extractor.yaml"

# Спецификация колонок для поддерживаемых форматов разметки.
# Роли (APRED) идут после колонки предиката, по одной на каждый предикат предложения.
FORMATS_CONFIG = {
    "conll2008": {
        "fields": [
            "id", "form", "lemma", "gpos", "ppos",
            "split_form", "split_lemma", "pposs", "head", "deprel", "pred"
        ],
        "word_field": "form",
        "head_field": "head",
        "predicate_field": "pred",
        "description": "CoNLL-2008 shared task: PRED в колонке 10, аргументы с 11."
    },
    "conll2009": {
        "fields": [
            "id", "form", "lemma", "plemma", "pos", "ppos", "feat", "pfeat",
            "head", "phead", "deprel", "pdeprel", "fillpred", "pred"
        ],
        "word_field": "form",
        "head_field": "head",
        "predicate_field": "pred",
        "description": "CoNLL-2009 (вывод LTH/mate-tools): PRED в колонке 13, аргументы с 14."
    }
}

SINGLETON_POLICIES = ("allow", "strict")
VALIDATION_LEVELS = ("strict", "lenient")

DEFAULT_CONFIG: Dict[str, Any] = {
    "format": "conll2008",
    # Извлекаем только A0 и A1, остальные теги (A2, AM-*) отбрасываются
    "roles": ["A0", "A1"],
    "singleton_policy": "allow",
    "max_predicates": 64,
    "validation_level": "strict",
    "profile": False,
    "fail_fast": False,
}


def get_layout(name: str) -> Dict[str, Any]:
    """Возвращает описание колонок формата с вычисленной позицией первой роли."""
    if name not in FORMATS_CONFIG:
        raise ValueError(f"Unknown annotation format: {name!r}. Expected one of {sorted(FORMATS_CONFIG)}")
    layout = dict(FORMATS_CONFIG[name])
    layout["name"] = name
    layout["first_role_column"] = len(layout["fields"])
    return layout


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    get_layout(cfg["format"])

    if cfg["singleton_policy"] not in SINGLETON_POLICIES:
        raise ValueError(f"singleton_policy must be one of {SINGLETON_POLICIES}, got {cfg['singleton_policy']!r}")
    if cfg["validation_level"] not in VALIDATION_LEVELS:
        raise ValueError(f"validation_level must be one of {VALIDATION_LEVELS}, got {cfg['validation_level']!r}")
    if not cfg["roles"]:
        raise ValueError("roles must list at least one role tag")
    if int(cfg["max_predicates"]) < 1:
        raise ValueError("max_predicates must be positive")

    cfg["roles"] = [str(r) for r in cfg["roles"]]
    cfg["max_predicates"] = int(cfg["max_predicates"])
    return cfg


def load_config(path: Optional[Union[str, Path]] = None, **overrides) -> Dict[str, Any]:
    """
    Загружает YAML-конфиг и накладывает его на значения по умолчанию.
    Аргументы overrides (например, из CLI) имеют наивысший приоритет; None игнорируется.
    """
    cfg = dict(DEFAULT_CONFIG)

    if path is not None:
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config {path} must be a mapping, got {type(loaded).__name__}")

        unknown = set(loaded) - set(DEFAULT_CONFIG)
        if unknown:
            logger.warning(f"Ignoring unknown config keys in {path.name}: {sorted(unknown)}")
        cfg.update({k: v for k, v in loaded.items() if k in DEFAULT_CONFIG})

    cfg.update({k: v for k, v in overrides.items() if v is not None})
    return validate_config(cfg)
