# app/math/inkisar.py

import logging
from typing import List, Tuple

from schemas import ComparisonItem
from app.math.ashl import _relation
from app.math.rational import Rational

logger = logging.getLogger(__name__)


def _single_group_factor(ruus: int, saham_kelompok: int) -> Tuple[int, str]:
    """
    Untuk 1 kelompok inkisar, kembalikan (faktor_pengali, relation).
    Aturan sesuai kitab:
      - saham 0 atau sudah habis dibagi ruus: faktor = 1
      - mubayanah: faktor = ruus
      - muwafaqoh / mudakholah: faktor = ruus / gcd(ruus, saham_kelompok)
    """
    if saham_kelompok == 0:
        return 1, "mumatsalah"
    rel = _relation(ruus, saham_kelompok)
    if saham_kelompok % ruus == 0:
        return 1, rel
    if rel == "mubayanah":
        return ruus, rel
    return ruus // Rational.gcd(ruus, saham_kelompok), rel


def compute_inkisar_multiplier(
    groups: List[Tuple[str, int, int]]
) -> Tuple[int, List[ComparisonItem]]:
    """
    Hitung faktor tashih inkisar untuk 1 atau banyak kelompok.
    Input:
      groups = list of (nama_kelompok, ruus, saham_kelompok)
        - ruus = jumlah orang pada kelompok tsb (عدد الرؤوس)
        - saham_kelompok = total saham kelompok sebelum tashih
    Output:
      (multiplier, comparisons)
        - multiplier: KPK semua faktor, pengali Asl & seluruh saham
          agar tiap kelompok terbagi rata per kepala
    """
    comps: List[ComparisonItem] = []
    multiplier = 1

    for nama, ruus, saham_k in groups:
        if ruus <= 1:
            continue
        f, rel = _single_group_factor(ruus, saham_k)
        comps.append(ComparisonItem(a=ruus, b=saham_k, relation=rel))
        logger.debug("Kelompok %s: ruus %s : saham %s → %s (faktor %s)", nama, ruus, saham_k, rel, f)
        multiplier = Rational.lcm(multiplier, f)

    if multiplier > 1:
        logger.debug("Tashih inkisar: Asl dan seluruh saham dikalikan %s", multiplier)
    return multiplier, comps
