# app/rules/engine.py

from __future__ import annotations
from typing import Dict, List, Mapping, Optional, Tuple

from schemas import BlockingOutcome, FurudhItem, HeirComposition
from app.math.rational import ONE, ZERO, Rational
from app.rules.blocking import get_all_blockings
from app.rules.taxonomy import HeirCategory, Residuary, get_heir_share

# =========================
# Kelompok furūḍ
#   satu kelompok = satu bagian golongan; kelompok gabungan
#   (nenek, saudara seibu) dihitung sebagai satu penerima
# =========================
FURUDH_GROUPS: Tuple[Tuple[str, Tuple[HeirCategory, ...]], ...] = (
    ("husband", (HeirCategory.HUSBAND,)),
    ("wife", (HeirCategory.WIFE,)),
    ("mother", (HeirCategory.MOTHER,)),
    ("father", (HeirCategory.FATHER,)),
    ("paternal_grandfather", (HeirCategory.PATERNAL_GRANDFATHER,)),
    ("grandmothers", (HeirCategory.PATERNAL_GRANDMOTHER, HeirCategory.MATERNAL_GRANDMOTHER)),
    ("daughters", (HeirCategory.DAUGHTER,)),
    ("granddaughters_from_son", (HeirCategory.GRANDDAUGHTER_FROM_SON,)),
    ("full_sisters", (HeirCategory.FULL_SISTER,)),
    ("paternal_sisters", (HeirCategory.PATERNAL_SISTER,)),
    ("maternal_siblings", (HeirCategory.MATERNAL_BROTHER, HeirCategory.MATERNAL_SISTER)),
)

SPOUSE_GROUPS = frozenset({"husband", "wife"})


def _is_active(category: HeirCategory,
               composition: HeirComposition,
               blockings: Mapping[HeirCategory, BlockingOutcome]) -> bool:
    outcome = blockings.get(category)
    return composition.count(category) > 0 and not (outcome and outcome.blocked)


# =========================
# Mesin penentu furūḍ
# =========================
def determine_furudh(composition: HeirComposition,
                     blockings: Optional[Mapping[HeirCategory, BlockingOutcome]] = None) -> List[FurudhItem]:
    """
    Daftar FurudhItem untuk ahli waris yang hadir, tidak mahjūb, dan punya bagian tetap > 0.
    Kategori yang menjadi 'ashobah murni tidak masuk daftar ini.
    """
    if blockings is None:
        blockings = get_all_blockings(composition)

    items: List[FurudhItem] = []
    for key, categories in FURUDH_GROUPS:
        members: Dict[HeirCategory, int] = {}
        member_shares: Dict[HeirCategory, Rational] = {}
        for category in categories:
            if not _is_active(category, composition, blockings):
                continue
            share = get_heir_share(category, composition)
            if isinstance(share, Residuary) or share.is_zero():
                continue
            members[category] = composition.count(category)
            member_shares[category] = share
        if not members:
            continue
        total = ZERO
        for share in member_shares.values():
            total = total + share
        items.append(FurudhItem(key=key, members=members, member_shares=member_shares, share=total))
    return items


def fixed_shares_by_category(furudh_items: List[FurudhItem]) -> Dict[HeirCategory, Rational]:
    shares: Dict[HeirCategory, Rational] = {}
    for item in furudh_items:
        shares.update(item.member_shares)
    return shares


def sum_furudh(furudh_items: List[FurudhItem]) -> Rational:
    total = ZERO
    for item in furudh_items:
        total = total + item.share
    return total


def calculate_fixed_shares_total(composition: HeirComposition,
                                 furudh_items: Optional[List[FurudhItem]] = None) -> Rational:
    """Jumlah seluruh bagian tetap (tanpa 'ashobah)."""
    if furudh_items is None:
        furudh_items = determine_furudh(composition)
    return sum_furudh(furudh_items)


def calculate_remainder(composition: HeirComposition,
                        furudh_items: Optional[List[FurudhItem]] = None) -> Rational:
    """
    Sisa = 1 - jumlah furūḍ.
      < 0 → kasus 'aul
      > 0 → untuk 'ashobah, atau radd bila tidak ada 'ashobah
    """
    return ONE - calculate_fixed_shares_total(composition, furudh_items)
