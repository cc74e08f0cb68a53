# app/math/ashl.py

from typing import List

from schemas import AshlInfo, ComparisonItem
from app.math.rational import Rational


def _relation(a: int, b: int) -> str:
    if a == b:
        return "mumatsalah"
    if a % b == 0 or b % a == 0:
        return "mudakholah"
    if Rational.gcd(a, b) > 1:
        return "muwafaqoh"
    return "mubayanah"


def bandingkan(a: int, b: int) -> ComparisonItem:
    """
    Bandingkan dua penyebut furudh untuk menentukan:
    - Mumatsalah (sama)
    - Mudakholah (salah satu masuk ke lainnya)
    - Muwafaqoh (ada faktor persekutuan)
    - Mubayanah (berbeda total)
    """
    return ComparisonItem(a=a, b=b, relation=_relation(a, b), lcm=Rational.lcm(a, b))


def compute_ashl(fractions: List[Rational]) -> AshlInfo:
    """
    Menentukan Aslul Mas'alah dari daftar pecahan.
    Langkah:
    1. Ambil penyebut dari pecahan yang tidak nol (bentuk sederhana)
    2. Bandingkan dua-dua untuk tentukan jenis hubungan
    3. KPK seluruh penyebut = Aslul Mas'alah
    """
    denominators = [f.simplify().denominator for f in fractions if not f.is_zero()]
    if not denominators:
        # tidak ada bagian: AM = 1
        return AshlInfo(ashl=1, comparisons=[])

    comparisons: List[ComparisonItem] = []
    for i in range(len(denominators)):
        for j in range(i + 1, len(denominators)):
            comparisons.append(bandingkan(denominators[i], denominators[j]))

    ashl = denominators[0]
    for d in denominators[1:]:
        ashl = Rational.lcm(ashl, d)

    return AshlInfo(ashl=ashl, comparisons=comparisons)


def saham_of(fraction: Rational, ashl: int) -> int:
    """Saham = pecahan × AM; AM harus kelipatan penyebut."""
    value = fraction.multiply(ashl)
    if value.denominator != 1:
        raise ValueError(f"{fraction} tidak habis pada Aslul Mas'alah {ashl}")
    return value.numerator
