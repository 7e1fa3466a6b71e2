"""Восстановление полных спанов семантических ролей по головам аргументов."""

from .core.data_structures import PredicateRoles, PredicateSlot, Sentence, Token
from .core.exceptions import (DegenerateSpanError, InvalidHeadError, MalformedRowError, NodeOutOfRangeError,
                              SrlExtentError)
from .core.span import Extent, resolve_extent, span_text
from .core.tree import DependencyTree, build_tree, descendants
from .extractor import RoleExtractor, as_word_mapping, extract_roles

__version__ = "0.1.0"

__all__ = [
    "Token",
    "Sentence",
    "PredicateSlot",
    "PredicateRoles",
    "SrlExtentError",
    "MalformedRowError",
    "InvalidHeadError",
    "NodeOutOfRangeError",
    "DegenerateSpanError",
    "DependencyTree",
    "build_tree",
    "descendants",
    "Extent",
    "resolve_extent",
    "span_text",
    "RoleExtractor",
    "extract_roles",
    "as_word_mapping",
]
