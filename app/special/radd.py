# app/special/radd.py
from typing import Dict, List, Optional

from schemas import FurudhItem, HeirComposition, NoCorrection, RaddOutcome
from app.math.rational import ZERO, Rational
from app.rules.asaba import determine_asaba
from app.rules.engine import SPOUSE_GROUPS, calculate_remainder, determine_furudh
from app.rules.taxonomy import HeirCategory


def needs_radd(c: HeirComposition, furudh_items: Optional[List[FurudhItem]] = None) -> bool:
    """Radd: ada sisa positif dan tidak ada 'ashobah."""
    return calculate_remainder(c, furudh_items).is_positive() and determine_asaba(c) is None


def get_radd_recipients(c: HeirComposition,
                        furudh_items: Optional[List[FurudhItem]] = None) -> List[FurudhItem]:
    """
    Penerima radd = kelompok furūḍ dengan bagian > 0, KECUALI suami/istri.
    Kelompok gabungan (saudara seibu, nenek) dihitung satu penerima, bukan dua.
    """
    if furudh_items is None:
        furudh_items = determine_furudh(c)
    return [f for f in furudh_items if f.key not in SPOUSE_GROUPS and f.share.is_positive()]


def calculate_radd_recipients_total(recipients: List[FurudhItem]) -> Rational:
    total = ZERO
    for f in recipients:
        total = total + f.share
    return total


def apply_radd(c: HeirComposition, furudh_items: Optional[List[FurudhItem]] = None):
    if furudh_items is None:
        furudh_items = determine_furudh(c)

    remainder = calculate_remainder(c, furudh_items)
    if not remainder.is_positive() or determine_asaba(c) is not None:
        return NoCorrection()

    recipients = get_radd_recipients(c, furudh_items)
    # hanya pasangan → sisa tidak dibagi di sini (baitul mal)
    if not recipients:
        return NoCorrection()

    recipients_total = calculate_radd_recipients_total(recipients)
    addends: Dict[str, Rational] = {}
    category_addends: Dict[HeirCategory, Rational] = {}
    for f in recipients:
        # tambahan = sisa × (bagian dasar / jumlah bagian dasar penerima)
        addend = remainder.multiply(f.share.divide(recipients_total))
        addends[f.key] = addend
        # dalam kelompok gabungan dibagi sesuai porsi dasar tiap anggota
        for category, base in f.member_shares.items():
            category_addends[category] = addend.multiply(base.divide(f.share))

    return RaddOutcome(
        remainder=remainder,
        recipients=[f.key for f in recipients],
        addends=addends,
        category_addends=category_addends,
    )
