# calculator.py

from __future__ import annotations
import logging
from typing import Dict, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

import schemas
from config import settings
from app.errors import InvalidComposition
from app.math.ashl import compute_ashl, saham_of
from app.math.inkisar import compute_inkisar_multiplier
from app.math.rational import ONE, ZERO, Rational
from app.rules.asaba import calculate_asaba, determine_asaba
from app.rules.blocking import get_all_blockings
from app.rules.engine import determine_furudh, fixed_shares_by_category, sum_furudh
from app.rules.taxonomy import HeirCategory, get_dalil
from app.special.awl import apply_awl_to_share
from app.special.router import apply_special_cases

logger = logging.getLogger(__name__)


# --------------------------
# Helper umum
# --------------------------
def build_composition(**fields) -> schemas.HeirComposition:
    """Bangun HeirComposition dari data mentah; gagal validasi → InvalidComposition."""
    try:
        return schemas.HeirComposition(**fields)
    except ValidationError as exc:
        raise InvalidComposition(str(exc)) from exc


def _add(shares: Dict[HeirCategory, Rational], category: HeirCategory, value: Rational) -> None:
    shares[category] = shares.get(category, ZERO) + value


def _asaba_shares(asaba: schemas.AsabaResult) -> Dict[HeirCategory, Rational]:
    """Bagian 'ashobah per kategori (laki-laki & perempuan sederajat)."""
    if not asaba.has_asaba:
        return {}
    info, dist = asaba.info, asaba.distribution
    shares = {info.category: dist.male_share}
    if info.has_females:
        shares[info.paired_category] = dist.female_share
    return shares


def _final_shares(raw: Dict[HeirCategory, Rational],
                  fixed: Dict[HeirCategory, Rational],
                  correction) -> Dict[HeirCategory, Rational]:
    """Lipat hasil koreksi ('umariyyatain / 'aul / radd) ke bagian mentah."""
    if isinstance(correction, schemas.UmariyyatainOutcome):
        return {
            correction.spouse: correction.spouse_share,
            HeirCategory.MOTHER: correction.mother_share,
            HeirCategory.FATHER: correction.father_share,
        }
    if isinstance(correction, schemas.AwlOutcome):
        # saat 'aul tidak ada sisa untuk 'ashobah → semua bagian adalah furūḍ
        return {cat: apply_awl_to_share(share, correction.ratio) for cat, share in fixed.items()}
    final = dict(raw)
    if isinstance(correction, schemas.RaddOutcome):
        for category, addend in correction.category_addends.items():
            _add(final, category, addend)
    return final


def _compute_saham(fixed_items: List[schemas.FurudhItem],
                   final: Mapping[HeirCategory, Rational],
                   composition: schemas.HeirComposition) -> Tuple[int, int]:
    """
    AM awal = KPK penyebut furūḍ.
    AM akhir = KPK penyebut bagian akhir × faktor tashih inkisar,
    sehingga saham tiap kelompok habis dibagi jumlah kepalanya.
    """
    ashl_awal = compute_ashl([item.share for item in fixed_items]).ashl
    base = compute_ashl([share for share in final.values()]).ashl

    groups = []
    for category, share in final.items():
        if share.is_zero():
            continue
        groups.append((category.value, composition.count(category), saham_of(share, base)))
    multiplier, _ = compute_inkisar_multiplier(groups)
    return ashl_awal, base * multiplier


def _asaba_categories(info: Optional[schemas.AsabaInfo]) -> Tuple[HeirCategory, ...]:
    if info is None:
        return ()
    if info.paired_category is not None:
        return info.category, info.paired_category
    return (info.category,)


# ======================================================================
# FUNGSI UTAMA
# ======================================================================
def compute_distribution(composition: Union[schemas.HeirComposition, dict],
                         total_estate_value: float) -> schemas.AllocationResult:
    if isinstance(composition, dict):
        composition = build_composition(**composition)
    if total_estate_value < 0:
        raise InvalidComposition("Nilai tirkah tidak boleh negatif")

    # 1) Hajb
    blockings = get_all_blockings(composition)

    # 2) Furūḍ & sisa
    fixed_items = determine_furudh(composition, blockings)
    fixed = fixed_shares_by_category(fixed_items)
    fixed_total = sum_furudh(fixed_items)
    remainder = ONE - fixed_total

    # 3) Koreksi: 'umariyyatain → 'aul → radd
    correction = apply_special_cases(composition, fixed_items)

    # 4) 'Ashobah
    asaba = calculate_asaba(composition, fixed_items, blockings)
    asaba_info = determine_asaba(composition, blockings)
    if asaba_info is not None:
        logger.debug("'Ashobah: %s (%s)", asaba_info.category.value, asaba_info.kind)

    raw: Dict[HeirCategory, Rational] = dict(fixed)
    for category, share in _asaba_shares(asaba).items():
        # ayah/kakek bisa 1/6 + sisa
        _add(raw, category, share)

    final = _final_shares(raw, fixed, correction)

    allocated = ZERO
    for share in final.values():
        allocated = allocated + share
    unallocated = ONE - allocated
    if unallocated.is_positive():
        logger.info("Sisa %s tidak berpemilik (baitul mal)", unallocated)

    ashl_awal, ashl_akhir = _compute_saham(fixed_items, final, composition)

    # 5) Susun entri sesuai urutan kategori
    asaba_cats = _asaba_categories(asaba_info)
    entries: List[schemas.AllocationEntry] = []
    for category in composition.present():
        quantity = composition.count(category)
        blocking = blockings.get(category)
        blocked = bool(blocking and blocking.blocked)
        final_fraction = ZERO if blocked else final.get(category, ZERO)
        raw_fraction = ZERO if blocked else raw.get(category, ZERO)

        entries.append(schemas.AllocationEntry(
            category=category,
            quantity=quantity,
            raw_fraction=raw_fraction,
            final_fraction=final_fraction,
            per_person_fraction=final_fraction.divide(quantity),
            percentage=round(final_fraction.to_decimal() * 100, settings.percentage_precision),
            amount=round(final_fraction.to_decimal() * total_estate_value, settings.amount_precision),
            saham=saham_of(final_fraction, ashl_akhir),
            is_asaba=category in asaba_cats and not blocked,
            blocked=blocked,
            blocked_reason=blocking.reason if blocked else None,
            dalil=get_dalil(category),
        ))

    logger.info(
        "Perhitungan selesai: %d ahli waris, koreksi=%s, AM %s → %s",
        len(entries), correction.kind, ashl_awal, ashl_akhir,
    )
    return schemas.AllocationResult(
        total_estate=total_estate_value,
        entries=entries,
        correction=correction,
        fixed_total=fixed_total,
        remainder=remainder,
        unallocated=unallocated,
        asaba=asaba_info,
        ashl_awal=ashl_awal,
        ashl_akhir=ashl_akhir,
    )


def calculate_inheritance(calculation_input: schemas.CalculationInput) -> schemas.AllocationResult:
    return compute_distribution(calculation_input.heirs, calculation_input.tirkah)
