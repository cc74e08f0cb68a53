"""
Tes untuk tipe pecahan eksak (Rational): konstruksi, aritmetika, perbandingan, konversi.
"""

import pickle

import pytest
from hypothesis import given, strategies as st
from pydantic import BaseModel

from app.errors import ConstructionError, DivisionByZero, FaraidhError
from app.math.rational import ONE, ZERO, Rational


non_zero = st.integers(min_value=-1000, max_value=1000).filter(lambda n: n != 0)
rationals = st.builds(Rational, st.integers(min_value=-1000, max_value=1000), non_zero)


class TestKonstruksi:

    def test_penyebut_nol(self):
        with pytest.raises(ConstructionError):
            Rational(1, 0)

    def test_penyebut_nol_juga_value_error(self):
        with pytest.raises(ValueError):
            Rational(3, 0)

    def test_tanda_pindah_ke_pembilang(self):
        r = Rational(1, -2)
        assert r.numerator == -1
        assert r.denominator == 2

    def test_immutable(self):
        r = Rational(1, 2)
        with pytest.raises(AttributeError):
            r._num = 3

    def test_pickle(self):
        assert pickle.loads(pickle.dumps(Rational(3, 9))) == Rational(1, 3)


class TestSederhana:

    def test_simplify(self):
        r = Rational(6, 8).simplify()
        assert (r.numerator, r.denominator) == (3, 4)

    def test_simplify_nol(self):
        r = Rational(0, 7).simplify()
        assert (r.numerator, r.denominator) == (0, 1)

    def test_simplify_negatif(self):
        r = Rational(-4, 6).simplify()
        assert (r.numerator, r.denominator) == (-2, 3)

    @given(rationals)
    def test_simplify_idempoten(self, r):
        once = r.simplify()
        twice = once.simplify()
        assert once == twice
        assert (once.numerator, once.denominator) == (twice.numerator, twice.denominator)

    def test_gcd_lcm(self):
        assert Rational.gcd(12, 18) == 6
        assert Rational.gcd(-12, 18) == 6
        assert Rational.lcm(4, 6) == 12
        assert Rational.lcm(0, 5) == 5


class TestAritmetika:

    def test_tambah(self):
        assert Rational(1, 2).add(Rational(1, 3)) == Rational(5, 6)
        assert Rational(1, 2) + Rational(1, 2) == ONE

    def test_kurang(self):
        assert Rational(1, 2).subtract(Rational(1, 3)) == Rational(1, 6)
        assert (ONE - Rational(13, 12)).is_negative()

    def test_kali(self):
        assert Rational(2, 3).multiply(Rational(3, 4)) == Rational(1, 2)
        assert Rational(1, 6) * 3 == Rational(1, 2)

    def test_bagi(self):
        assert Rational(1, 6).divide(2) == Rational(1, 12)
        assert ONE / Rational(4, 3) == Rational(3, 4)

    def test_bagi_nol(self):
        with pytest.raises(DivisionByZero):
            ONE.divide(ZERO)

    def test_bagi_nol_juga_zero_division(self):
        with pytest.raises(ZeroDivisionError):
            Rational(1, 2) / 0

    def test_hirarki_error(self):
        assert issubclass(DivisionByZero, FaraidhError)
        assert issubclass(ConstructionError, FaraidhError)

    def test_operand_kanan_int(self):
        assert 1 - Rational(1, 4) == Rational(3, 4)
        assert 2 * Rational(1, 4) == Rational(1, 2)

    def test_negasi(self):
        assert -Rational(1, 2) == Rational(-1, 2)

    @given(rationals, rationals)
    def test_tambah_lalu_kurang(self, a, b):
        assert (a + b) - b == a


class TestPerbandingan:

    def test_bentuk_kanonik_sama(self):
        assert Rational(1, 2) == Rational(2, 4)
        assert Rational(1, 2).equals(Rational(3, 6))
        assert hash(Rational(1, 2)) == hash(Rational(2, 4))

    def test_sama_dengan_int(self):
        assert Rational(4, 4) == 1
        assert ZERO == 0

    def test_lebih_besar(self):
        assert Rational(13, 12).greater_than(ONE)
        assert Rational(1, 3) > Rational(1, 4)
        assert Rational(1, 4) <= Rational(2, 8)

    def test_lebih_kecil(self):
        assert Rational(1, 6).less_than(Rational(1, 3))
        assert Rational(-1, 2) < ZERO

    def test_predikat(self):
        assert ZERO.is_zero()
        assert Rational(1, 8).is_positive()
        assert Rational(-1, 8).is_negative()


class TestKonversi:

    def test_to_decimal(self):
        assert Rational(1, 4).to_decimal() == 0.25

    def test_from_decimal(self):
        assert Rational.from_decimal(0.5) == Rational(1, 2)
        assert Rational.from_decimal(1 / 3, max_denominator=100) == Rational(1, 3)

    def test_from_decimal_max_denominator_tidak_valid(self):
        with pytest.raises(ConstructionError):
            Rational.from_decimal(0.5, max_denominator=0)

    def test_parse_dan_str(self):
        assert Rational.parse("2/6") == Rational(1, 3)
        assert Rational.parse("3") == Rational(3, 1)
        assert str(Rational(1, 3)) == "1/3"
        assert str(Rational(4, 2).simplify()) == "2"


class _Wadah(BaseModel):
    bagian: Rational


class TestPydantic:

    def test_validasi_dari_string(self):
        assert _Wadah(bagian="1/6").bagian == Rational(1, 6)

    def test_validasi_dari_int(self):
        assert _Wadah(bagian=1).bagian == ONE

    def test_serialisasi_json(self):
        assert _Wadah(bagian=Rational(2, 8)).model_dump(mode="json") == {"bagian": "1/4"}
