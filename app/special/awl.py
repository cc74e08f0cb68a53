# app/special/awl.py
from typing import List, Optional

from schemas import AwlOutcome, FurudhItem, HeirComposition, NoCorrection
from app.math.rational import ONE, ZERO, Rational
from app.rules.engine import calculate_fixed_shares_total


def needs_awl(c: HeirComposition, furudh_items: Optional[List[FurudhItem]] = None) -> bool:
    """'Aul terjadi bila jumlah furūḍ > 1."""
    return calculate_fixed_shares_total(c, furudh_items).greater_than(ONE)


def calculate_awl_ratio(c: HeirComposition, furudh_items: Optional[List[FurudhItem]] = None) -> Rational:
    """Rasio 'aul = 1 / jumlah furūḍ; 1 bila tidak perlu 'aul."""
    total = calculate_fixed_shares_total(c, furudh_items)
    if not total.greater_than(ONE):
        return ONE
    return ONE.divide(total)


def apply_awl_to_share(share: Optional[Rational], ratio: Rational) -> Rational:
    if share is None or share.is_zero():
        return ZERO
    return share.multiply(ratio)


def apply_awl(c: HeirComposition, furudh_items: Optional[List[FurudhItem]] = None):
    total = calculate_fixed_shares_total(c, furudh_items)
    if not total.greater_than(ONE):
        return NoCorrection()
    # setelah 'aul seluruh bagian dikali rasio → jumlahnya tepat 1
    return AwlOutcome(
        ratio=ONE.divide(total),
        original_total=total,
        adjusted_total=ONE,
    )
