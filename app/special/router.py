# app/special/router.py
import logging
from typing import List, Optional

from schemas import FurudhItem, HeirComposition
from app.rules.engine import determine_furudh

from .awl import apply_awl
from .radd import apply_radd
from .umariyyatain import apply_umariyyatain

logger = logging.getLogger(__name__)


def apply_special_cases(c: HeirComposition, furudh_items: Optional[List[FurudhItem]] = None):
    """
    Tepat satu koreksi yang berlaku, dengan prioritas:
      1) 'Umariyyatain (paling spesifik → cek duluan, memotong 'aul & radd)
      2) 'Aul
      3) Radd
    """
    umariyyatain = apply_umariyyatain(c)
    if umariyyatain.applied:
        logger.debug("Kasus 'Umariyyatain %s terdeteksi", umariyyatain.case_id)
        return umariyyatain

    if furudh_items is None:
        furudh_items = determine_furudh(c)

    awl = apply_awl(c, furudh_items)
    if awl.applied:
        logger.debug("Terjadi 'aul: total %s, rasio %s", awl.original_total, awl.ratio)
        return awl

    radd = apply_radd(c, furudh_items)
    if radd.applied:
        logger.debug("Terjadi radd: sisa %s ke %s", radd.remainder, ", ".join(radd.recipients))
    return radd
