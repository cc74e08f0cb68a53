"""
Tes hajb (penghalang): alasan berurutan, kelengkapan peta, dan sifat-sifat umum.
"""

import pytest
from hypothesis import given, strategies as st

from schemas import HeirComposition
from app.rules.blocking import (
    BLOCKABLE_CATEGORIES, check_blocking, get_all_blockings, get_blocking_reason, is_blocked,
)
from app.rules.taxonomy import HeirCategory as H


def reason(category, **heirs):
    return get_blocking_reason(category, HeirComposition(**heirs))


counts = st.integers(min_value=0, max_value=3)


@st.composite
def compositions(draw):
    """Susunan acak yang selalu valid (suami XOR istri)."""
    spouse = draw(st.sampled_from([None, "husband", "wife"]))
    data = {
        "sons": draw(counts), "daughters": draw(counts),
        "grandsons_from_son": draw(counts), "granddaughters_from_son": draw(counts),
        "father": draw(st.booleans()), "mother": draw(st.booleans()),
        "paternal_grandfather": draw(st.booleans()),
        "paternal_grandmother": draw(st.booleans()),
        "maternal_grandmother": draw(st.booleans()),
        "full_brothers": draw(counts), "full_sisters": draw(counts),
        "paternal_brothers": draw(counts), "paternal_sisters": draw(counts),
        "maternal_brothers": draw(counts), "maternal_sisters": draw(counts),
        "nephews_full_brother": draw(counts), "nephews_paternal_brother": draw(counts),
        "uncles_full": draw(counts), "uncles_paternal": draw(counts),
    }
    if spouse == "husband":
        data["husband"] = True
    elif spouse == "wife":
        data["wife"] = True
        data["wife_count"] = draw(st.integers(min_value=1, max_value=4))
    return HeirComposition(**data)


class TestAlasanHajb:

    def test_kakek_oleh_ayah(self):
        assert reason(H.PATERNAL_GRANDFATHER, father=True, paternal_grandfather=True) == "father"

    def test_nenek_oleh_ibu(self):
        assert reason(H.PATERNAL_GRANDMOTHER, mother=True, paternal_grandmother=True) == "mother"
        assert reason(H.MATERNAL_GRANDMOTHER, mother=True, maternal_grandmother=True) == "mother"

    def test_cucu_oleh_anak_laki(self):
        assert reason(H.GRANDSON_FROM_SON, sons=1, grandsons_from_son=2) == "sons"
        assert reason(H.GRANDDAUGHTER_FROM_SON, sons=1, granddaughters_from_son=1) == "sons"

    def test_cucu_tidak_terhalang_anak_perempuan(self):
        assert reason(H.GRANDDAUGHTER_FROM_SON, daughters=1, granddaughters_from_son=1) is None

    def test_saudara_kandung_urutan_alasan(self):
        # ayah didahulukan daripada anak laki-laki
        assert reason(H.FULL_BROTHER, father=True, sons=1, full_brothers=1) == "father"
        assert reason(H.FULL_SISTER, sons=1, full_sisters=1) == "sons"
        assert reason(H.FULL_BROTHER, grandsons_from_son=1, full_brothers=1) == "grandsons_from_son"

    def test_saudara_kandung_tidak_terhalang_kakek(self):
        assert reason(H.FULL_BROTHER, paternal_grandfather=True, full_brothers=1) is None

    def test_saudara_seayah_oleh_saudara_kandung(self):
        assert reason(H.PATERNAL_BROTHER, full_brothers=1, paternal_brothers=1) == "full_brothers"

    def test_saudara_seayah_oleh_saudari_kandung_maal_ghair(self):
        assert reason(H.PATERNAL_BROTHER, daughters=1, full_sisters=1,
                      paternal_brothers=1) == "full_sister_maal_ghair"

    def test_saudara_seibu(self):
        assert reason(H.MATERNAL_BROTHER, daughters=1, maternal_brothers=1) == "daughters"
        assert reason(H.MATERNAL_SISTER, granddaughters_from_son=1,
                      maternal_sisters=1) == "granddaughters_from_son"
        assert reason(H.MATERNAL_SISTER, father=True, daughters=1, maternal_sisters=1) == "father"

    def test_saudara_seibu_bersama_kakek(self):
        assert reason(H.MATERNAL_BROTHER, paternal_grandfather=True, maternal_brothers=1) is None

    def test_keponakan_dan_paman(self):
        assert reason(H.NEPHEW_FULL_BROTHER, paternal_grandfather=True,
                      nephews_full_brother=1) == "paternal_grandfather"
        assert reason(H.NEPHEW_PATERNAL_BROTHER, nephews_full_brother=1,
                      nephews_paternal_brother=1) == "nephews_full_brother"
        assert reason(H.UNCLE_FULL, nephews_paternal_brother=1, uncles_full=1) == "nephews_paternal_brother"
        assert reason(H.UNCLE_PATERNAL, uncles_full=1, uncles_paternal=1) == "uncles_full"

    def test_paman_oleh_saudari_maal_ghair(self):
        assert reason(H.UNCLE_FULL, daughters=1, paternal_sisters=1,
                      uncles_full=1) == "paternal_sister_maal_ghair"

    @pytest.mark.parametrize("category", [H.HUSBAND, H.WIFE, H.SON, H.DAUGHTER, H.FATHER, H.MOTHER])
    def test_tidak_bisa_terhalang(self, category):
        c = HeirComposition(husband=True, sons=1, daughters=1, father=True, mother=True)
        assert category not in BLOCKABLE_CATEGORIES
        assert not is_blocked(category, c)
        assert check_blocking(category, c).reason is None


class TestSifatHajb:

    @given(compositions())
    def test_peta_lengkap(self, c):
        blockings = get_all_blockings(c)
        assert set(blockings) == set(BLOCKABLE_CATEGORIES)
        for outcome in blockings.values():
            assert outcome.blocked == (outcome.reason is not None)

    @given(compositions())
    def test_ayah_menghalangi_kakek_dan_saudara(self, c):
        if not c.father:
            return
        blockings = get_all_blockings(c)
        for category in (H.PATERNAL_GRANDFATHER, H.FULL_BROTHER, H.FULL_SISTER,
                         H.PATERNAL_BROTHER, H.PATERNAL_SISTER,
                         H.MATERNAL_BROTHER, H.MATERNAL_SISTER):
            assert blockings[category].blocked

    @given(compositions())
    def test_anak_laki_menghalangi_cucu(self, c):
        if c.sons == 0:
            return
        blockings = get_all_blockings(c)
        assert blockings[H.GRANDSON_FROM_SON].reason == "sons"
        assert blockings[H.GRANDDAUGHTER_FROM_SON].reason == "sons"

    @given(compositions())
    def test_deterministik(self, c):
        assert get_all_blockings(c) == get_all_blockings(c)
