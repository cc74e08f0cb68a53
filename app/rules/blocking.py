# app/rules/blocking.py

from __future__ import annotations
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple

from schemas import BlockingOutcome, HeirComposition
from app.rules.taxonomy import (
    HeirCategory,
    full_sister_maal_ghair,
    paternal_sister_maal_ghair,
)

Predicate = Callable[[HeirComposition], bool]
Rule = Tuple[Tuple[str, Predicate], ...]

# =========================
# Penghalang (hājib) dasar
# =========================
_FATHER = ("father", lambda c: c.father)
_MOTHER = ("mother", lambda c: c.mother)
_SONS = ("sons", lambda c: c.sons > 0)
_DAUGHTERS = ("daughters", lambda c: c.daughters > 0)
_GRANDSONS = ("grandsons_from_son", lambda c: c.grandsons_from_son > 0)
_GRANDDAUGHTERS = ("granddaughters_from_son", lambda c: c.granddaughters_from_son > 0)
_GRANDFATHER = ("paternal_grandfather", lambda c: c.paternal_grandfather)
_FULL_BROTHERS = ("full_brothers", lambda c: c.full_brothers > 0)
_PATERNAL_BROTHERS = ("paternal_brothers", lambda c: c.paternal_brothers > 0)
_FULL_SISTER_MAAL_GHAIR = ("full_sister_maal_ghair", full_sister_maal_ghair)
_PATERNAL_SISTER_MAAL_GHAIR = ("paternal_sister_maal_ghair", paternal_sister_maal_ghair)
_NEPHEWS_FULL = ("nephews_full_brother", lambda c: c.nephews_full_brother > 0)
_NEPHEWS_PATERNAL = ("nephews_paternal_brother", lambda c: c.nephews_paternal_brother > 0)
_UNCLES_FULL = ("uncles_full", lambda c: c.uncles_full > 0)

_SIBLING_RULE: Rule = (_FATHER, _SONS, _GRANDSONS)
_PATERNAL_SIBLING_RULE: Rule = _SIBLING_RULE + (_FULL_BROTHERS, _FULL_SISTER_MAAL_GHAIR)
_MATERNAL_SIBLING_RULE: Rule = (_FATHER, _SONS, _DAUGHTERS, _GRANDSONS, _GRANDDAUGHTERS)
_CLOSER_ASABA: Rule = (
    _SONS, _GRANDSONS, _FATHER, _GRANDFATHER, _FULL_BROTHERS, _PATERNAL_BROTHERS,
    _FULL_SISTER_MAAL_GHAIR, _PATERNAL_SISTER_MAAL_GHAIR,
)

# Urutan di setiap tuple = prioritas alasan (yang pertama cocok menang)
BLOCKING_RULES: Mapping[HeirCategory, Rule] = MappingProxyType({
    HeirCategory.PATERNAL_GRANDFATHER: (_FATHER,),
    HeirCategory.PATERNAL_GRANDMOTHER: (_MOTHER,),
    HeirCategory.MATERNAL_GRANDMOTHER: (_MOTHER,),
    HeirCategory.GRANDSON_FROM_SON: (_SONS,),
    HeirCategory.GRANDDAUGHTER_FROM_SON: (_SONS,),
    HeirCategory.FULL_BROTHER: _SIBLING_RULE,
    HeirCategory.FULL_SISTER: _SIBLING_RULE,
    HeirCategory.PATERNAL_BROTHER: _PATERNAL_SIBLING_RULE,
    HeirCategory.PATERNAL_SISTER: _PATERNAL_SIBLING_RULE,
    HeirCategory.MATERNAL_BROTHER: _MATERNAL_SIBLING_RULE,
    HeirCategory.MATERNAL_SISTER: _MATERNAL_SIBLING_RULE,
    HeirCategory.NEPHEW_FULL_BROTHER: _CLOSER_ASABA,
    HeirCategory.NEPHEW_PATERNAL_BROTHER: _CLOSER_ASABA + (_NEPHEWS_FULL,),
    HeirCategory.UNCLE_FULL: _CLOSER_ASABA + (_NEPHEWS_FULL, _NEPHEWS_PATERNAL),
    HeirCategory.UNCLE_PATERNAL: _CLOSER_ASABA + (_NEPHEWS_FULL, _NEPHEWS_PATERNAL, _UNCLES_FULL),
})

BLOCKABLE_CATEGORIES: Tuple[HeirCategory, ...] = tuple(BLOCKING_RULES)

_NOT_BLOCKED = BlockingOutcome(blocked=False, reason=None)


def get_blocking_reason(category: HeirCategory, composition: HeirComposition) -> Optional[str]:
    """Alasan hajb dengan prioritas tertinggi, atau None bila tidak terhalang."""
    for reason, predicate in BLOCKING_RULES.get(HeirCategory(category), ()):
        if predicate(composition):
            return reason
    return None


def check_blocking(category: HeirCategory, composition: HeirComposition) -> BlockingOutcome:
    reason = get_blocking_reason(category, composition)
    if reason is None:
        return _NOT_BLOCKED
    return BlockingOutcome(blocked=True, reason=reason)


def is_blocked(category: HeirCategory, composition: HeirComposition) -> bool:
    return get_blocking_reason(category, composition) is not None


def get_all_blockings(composition: HeirComposition) -> Dict[HeirCategory, BlockingOutcome]:
    """Peta lengkap: setiap kategori yang bisa terhalang pasti ada kuncinya."""
    return {category: check_blocking(category, composition) for category in BLOCKABLE_CATEGORIES}
