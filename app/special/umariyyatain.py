# app/special/umariyyatain.py
from typing import Optional

from schemas import HeirComposition, NoCorrection, UmariyyatainOutcome
from app.math.rational import ONE, Rational
from app.rules.taxonomy import HeirCategory, has_children, sibling_count


def check_umariyyatain(c: HeirComposition) -> Optional[int]:
    """
    'Umariyyatain (Gharrawain): pasangan + ayah + ibu saja.
    Return nomor kasus: 1 = bersama suami, 2 = bersama istri; None bila tidak berlaku.
    Keponakan/paman diabaikan karena pasti mahjūb oleh ayah.
    """
    if not (c.husband or c.wife):
        return None
    if not (c.father and c.mother):
        return None
    if has_children(c) or sibling_count(c) > 0:
        return None
    if c.paternal_grandfather or c.paternal_grandmother or c.maternal_grandmother:
        return None
    return 1 if c.husband else 2


def is_umariyyatain(c: HeirComposition) -> bool:
    return check_umariyyatain(c) is not None


def calculate_umariyyatain_shares(c: HeirComposition) -> Optional[UmariyyatainOutcome]:
    case_id = check_umariyyatain(c)
    if case_id is None:
        return None

    if case_id == 1:
        spouse, spouse_share = HeirCategory.HUSBAND, Rational(1, 2)
    else:
        spouse, spouse_share = HeirCategory.WIFE, Rational(1, 4)

    # Ibu 1/3 dari SISA setelah pasangan, bukan 1/3 harta
    sisa = ONE - spouse_share
    mother_share = sisa.divide(3)
    father_share = sisa - mother_share

    return UmariyyatainOutcome(
        case_id=case_id,
        spouse=spouse,
        spouse_share=spouse_share,
        mother_share=mother_share,
        father_share=father_share,
    )


def apply_umariyyatain(c: HeirComposition):
    outcome = calculate_umariyyatain_shares(c)
    if outcome is None:
        return NoCorrection()
    return outcome

