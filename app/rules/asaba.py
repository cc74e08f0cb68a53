# app/rules/asaba.py

from __future__ import annotations
from typing import Callable, List, Mapping, NamedTuple, Optional, Tuple

from schemas import AsabaDistribution, AsabaInfo, AsabaResult, BlockingOutcome, FurudhItem, HeirComposition
from app.math.rational import Rational, ZERO
from app.rules.blocking import get_all_blockings
from app.rules.engine import calculate_remainder
from app.rules.taxonomy import HeirCategory, full_sister_maal_ghair, paternal_sister_maal_ghair


class AsabaTier(NamedTuple):
    category: HeirCategory
    paired: Optional[HeirCategory]   # perempuan sederajat (2:1)
    kind: str
    qualifies: Optional[Callable[[HeirComposition], bool]] = None


# Urutan 'ashobah: yang pertama hadir & tidak mahjūb mengambil seluruh sisa
ASABA_PRIORITY: Tuple[AsabaTier, ...] = (
    AsabaTier(HeirCategory.SON, HeirCategory.DAUGHTER, "bin_nafsi"),
    AsabaTier(HeirCategory.GRANDSON_FROM_SON, HeirCategory.GRANDDAUGHTER_FROM_SON, "bin_nafsi"),
    AsabaTier(HeirCategory.FATHER, None, "bin_nafsi"),
    AsabaTier(HeirCategory.PATERNAL_GRANDFATHER, None, "bin_nafsi"),
    AsabaTier(HeirCategory.FULL_BROTHER, HeirCategory.FULL_SISTER, "bin_nafsi"),
    AsabaTier(HeirCategory.FULL_SISTER, None, "maal_ghair", full_sister_maal_ghair),
    AsabaTier(HeirCategory.PATERNAL_BROTHER, HeirCategory.PATERNAL_SISTER, "bin_nafsi"),
    AsabaTier(HeirCategory.PATERNAL_SISTER, None, "maal_ghair", paternal_sister_maal_ghair),
    AsabaTier(HeirCategory.NEPHEW_FULL_BROTHER, None, "bin_nafsi"),
    AsabaTier(HeirCategory.NEPHEW_PATERNAL_BROTHER, None, "bin_nafsi"),
    AsabaTier(HeirCategory.UNCLE_FULL, None, "bin_nafsi"),
    AsabaTier(HeirCategory.UNCLE_PATERNAL, None, "bin_nafsi"),
)


def _blocked(category, blockings: Mapping[HeirCategory, BlockingOutcome]) -> bool:
    outcome = blockings.get(category)
    return bool(outcome and outcome.blocked)


def determine_asaba(composition: HeirComposition,
                    blockings: Optional[Mapping[HeirCategory, BlockingOutcome]] = None) -> Optional[AsabaInfo]:
    """Cari satu tingkat 'ashobah penerima sisa; None bila tidak ada."""
    if blockings is None:
        blockings = get_all_blockings(composition)

    for tier in ASABA_PRIORITY:
        count = composition.count(tier.category)
        if count == 0 or _blocked(tier.category, blockings):
            continue
        if tier.qualifies is not None and not tier.qualifies(composition):
            continue

        paired_count = 0
        if tier.paired is not None and not _blocked(tier.paired, blockings):
            paired_count = composition.count(tier.paired)
        kind = "bil_ghair" if paired_count > 0 else tier.kind
        return AsabaInfo(
            category=tier.category,
            count=count,
            paired_category=tier.paired if paired_count > 0 else None,
            paired_count=paired_count,
            kind=kind,
        )
    return None


def distribute_asaba(remainder: Rational, info: Optional[AsabaInfo]) -> AsabaDistribution:
    """
    Bagi sisa ke 'ashobah.
      - tanpa perempuan sederajat: rata per kepala
      - campur: laki-laki 2 bagian, perempuan 1 bagian
    """
    if info is None or remainder.is_zero():
        return AsabaDistribution(
            male_share=ZERO, female_share=ZERO,
            per_male_share=ZERO, per_female_share=ZERO,
            total_units=0,
        )

    if not info.has_females:
        return AsabaDistribution(
            male_share=remainder,
            female_share=ZERO,
            per_male_share=remainder.divide(info.count),
            per_female_share=ZERO,
            total_units=info.count,
        )

    total_units = info.count * 2 + info.paired_count
    unit = remainder.divide(total_units)
    per_male = unit.multiply(2)
    return AsabaDistribution(
        male_share=per_male.multiply(info.count),
        female_share=unit.multiply(info.paired_count),
        per_male_share=per_male,
        per_female_share=unit,
        total_units=total_units,
    )


def calculate_asaba(composition: HeirComposition,
                    furudh_items: Optional[List[FurudhItem]] = None,
                    blockings: Optional[Mapping[HeirCategory, BlockingOutcome]] = None) -> AsabaResult:
    """Sisa <= 0 berarti 'ashobah tidak mendapat apa-apa (kasus negatif ditangani 'aul)."""
    if blockings is None:
        blockings = get_all_blockings(composition)
    info = determine_asaba(composition, blockings)
    remainder = calculate_remainder(composition, furudh_items)

    if info is None or not remainder.is_positive():
        return AsabaResult(has_asaba=False, info=None, remainder=remainder, distribution=None)

    return AsabaResult(
        has_asaba=True,
        info=info,
        remainder=remainder,
        distribution=distribute_asaba(remainder, info),
    )
