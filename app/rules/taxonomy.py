# app/rules/taxonomy.py

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Mapping, Union

from app.math.rational import Rational, ZERO

if TYPE_CHECKING:
    from schemas import HeirComposition


# =========================
# Identitas ahli waris
# =========================
class HeirCategory(str, Enum):
    HUSBAND = "husband"                                  # Suami
    WIFE = "wife"                                        # Istri
    SON = "son"                                          # Anak Laki-laki
    DAUGHTER = "daughter"                                # Anak Perempuan
    GRANDSON_FROM_SON = "grandson_from_son"              # Cucu Laki-laki (dari anak lk)
    GRANDDAUGHTER_FROM_SON = "granddaughter_from_son"    # Cucu Perempuan (dari anak lk)
    FATHER = "father"                                    # Ayah
    MOTHER = "mother"                                    # Ibu
    PATERNAL_GRANDFATHER = "paternal_grandfather"        # Kakek
    PATERNAL_GRANDMOTHER = "paternal_grandmother"        # Nenek dari Ayah
    MATERNAL_GRANDMOTHER = "maternal_grandmother"        # Nenek dari Ibu
    FULL_BROTHER = "full_brother"                        # Saudara Laki-laki Kandung
    FULL_SISTER = "full_sister"                          # Saudari Kandung
    PATERNAL_BROTHER = "paternal_brother"                # Saudara Laki-laki Seayah
    PATERNAL_SISTER = "paternal_sister"                  # Saudari Seayah
    MATERNAL_BROTHER = "maternal_brother"                # Saudara Laki-laki Seibu
    MATERNAL_SISTER = "maternal_sister"                  # Saudari Seibu
    NEPHEW_FULL_BROTHER = "nephew_full_brother"          # Keponakan Lk (dari sdr lk kandung)
    NEPHEW_PATERNAL_BROTHER = "nephew_paternal_brother"  # Keponakan Lk (dari sdr lk seayah)
    UNCLE_FULL = "uncle_full"                            # Paman Kandung
    UNCLE_PATERNAL = "uncle_paternal"                    # Paman Seayah


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"


class Residuary(Enum):
    """Penanda 'ashobah: tidak punya bagian tetap, mengambil sisa."""
    ASABA = "ashobah"


RESIDUARY = Residuary.ASABA

ShareResult = Union[Rational, Residuary]


# =========================
# Predikat bersama
# =========================
def has_children(c: "HeirComposition") -> bool:
    """Ada far'u waris: anak atau cucu dari anak laki-laki."""
    return any([
        c.sons > 0,
        c.daughters > 0,
        c.grandsons_from_son > 0,
        c.granddaughters_from_son > 0,
    ])


def has_male_descendants(c: "HeirComposition") -> bool:
    return c.sons > 0 or c.grandsons_from_son > 0


def has_female_descendants(c: "HeirComposition") -> bool:
    return c.daughters > 0 or c.granddaughters_from_son > 0


def sibling_count(c: "HeirComposition") -> int:
    return (
        c.full_brothers + c.full_sisters +
        c.paternal_brothers + c.paternal_sisters +
        c.maternal_brothers + c.maternal_sisters
    )


def has_multiple_siblings(c: "HeirComposition") -> bool:
    return sibling_count(c) >= 2


def is_kalala(c: "HeirComposition") -> bool:
    """Kalalah: tanpa ayah dan tanpa keturunan."""
    return not c.father and not has_children(c)


def _siblings_blocked(c: "HeirComposition") -> bool:
    return c.father or has_male_descendants(c)


def full_sister_maal_ghair(c: "HeirComposition") -> bool:
    """Saudari kandung menjadi 'ashobah ma'a al-ghair bersama anak/cucu perempuan."""
    return (
        c.full_sisters > 0
        and c.full_brothers == 0
        and not _siblings_blocked(c)
        and has_female_descendants(c)
    )


def paternal_sister_maal_ghair(c: "HeirComposition") -> bool:
    """Saudari seayah 'ashobah ma'a al-ghair: hanya bila tidak ada saudara/saudari kandung."""
    return (
        c.paternal_sisters > 0
        and c.paternal_brothers == 0
        and c.full_brothers == 0
        and c.full_sisters == 0
        and not _siblings_blocked(c)
        and has_female_descendants(c)
    )


def grandmother_count(c: "HeirComposition") -> int:
    if c.mother:
        return 0
    return int(c.paternal_grandmother) + int(c.maternal_grandmother)


# =========================
# Fungsi bagian (furudh) per kategori
#   total: selalu mengembalikan nilai, tidak pernah raise
# =========================
def _husband(c) -> ShareResult:
    if not c.husband:
        return ZERO
    return Rational(1, 4) if has_children(c) else Rational(1, 2)


def _wife(c) -> ShareResult:
    # bagian seluruh istri bersama; dibagi rata per kepala di kalkulator
    if not c.wife:
        return ZERO
    return Rational(1, 8) if has_children(c) else Rational(1, 4)


def _residuary(c) -> ShareResult:
    return RESIDUARY


def _daughter(c) -> ShareResult:
    if c.daughters == 0:
        return ZERO
    if c.sons > 0:
        return RESIDUARY  # bil-ghair bersama anak laki-laki (2:1)
    if c.daughters == 1:
        return Rational(1, 2)
    return Rational(2, 3)


def _granddaughter(c) -> ShareResult:
    if c.granddaughters_from_son == 0 or c.sons > 0:
        return ZERO
    if c.grandsons_from_son > 0:
        return RESIDUARY
    if c.daughters == 1:
        return Rational(1, 6)  # takmilah ats-tsulutsain
    if c.daughters >= 2:
        return ZERO
    if c.granddaughters_from_son == 1:
        return Rational(1, 2)
    return Rational(2, 3)


def _father_like(c) -> ShareResult:
    if has_children(c):
        # 1/6; bila hanya keturunan perempuan, ditambah sisa sebagai 'ashobah
        return Rational(1, 6)
    return RESIDUARY


def _father(c) -> ShareResult:
    if not c.father:
        return ZERO
    return _father_like(c)


def _grandfather(c) -> ShareResult:
    if not c.paternal_grandfather or c.father:
        return ZERO
    return _father_like(c)


def _mother(c) -> ShareResult:
    if not c.mother:
        return ZERO
    if has_children(c) or has_multiple_siblings(c):
        return Rational(1, 6)
    return Rational(1, 3)


def _grandmother(present: Callable[["HeirComposition"], bool]):
    def share(c) -> ShareResult:
        n = grandmother_count(c)
        if not present(c) or n == 0:
            return ZERO
        return Rational(1, 6).divide(n)
    return share


def _full_sister(c) -> ShareResult:
    if c.full_sisters == 0 or _siblings_blocked(c):
        return ZERO
    if c.full_brothers > 0 or has_female_descendants(c):
        return RESIDUARY
    if c.full_sisters == 1:
        return Rational(1, 2)
    return Rational(2, 3)


def _paternal_sister(c) -> ShareResult:
    if c.paternal_sisters == 0 or _siblings_blocked(c) or c.full_brothers > 0:
        return ZERO
    if c.paternal_brothers > 0:
        return RESIDUARY
    if has_female_descendants(c):
        # saudari kandung ma'a al-ghair menutup saudari seayah
        return ZERO if c.full_sisters > 0 else RESIDUARY
    if c.full_sisters == 1:
        return Rational(1, 6)
    if c.full_sisters >= 2:
        return ZERO
    if c.paternal_sisters == 1:
        return Rational(1, 2)
    return Rational(2, 3)


def _maternal_sibling(own: Callable[["HeirComposition"], int]):
    def share(c) -> ShareResult:
        heads = own(c)
        total = c.maternal_brothers + c.maternal_sisters
        if heads == 0 or not is_kalala(c):
            return ZERO
        if total == 1:
            return Rational(1, 6)
        # 1/3 bersama, rata lintas gender
        return Rational(1, 3).multiply(Rational(heads, total))
    return share


# =========================
# Deskriptor statis
# =========================
@dataclass(frozen=True)
class HeirDescriptor:
    category: HeirCategory
    name_ar: str
    sex: Sex
    is_asaba: bool
    share: Callable[["HeirComposition"], ShareResult]
    dalil: str
    field: str


def _d(category, name_ar, sex, is_asaba, share, dalil, field) -> HeirDescriptor:
    return HeirDescriptor(category, name_ar, sex, is_asaba, share, dalil, field)


_AN_NISA_11 = "QS. An-Nisa' 4:11"
_AN_NISA_12 = "QS. An-Nisa' 4:12"
_AN_NISA_176 = "QS. An-Nisa' 4:176"
_TARTIB_ASHOBAH = "Urutan 'ashobah: anak → cucu → ayah → kakek → saudara → keponakan → paman"
_HADITS_JADDAH = "HR. Abu Dawud & at-Tirmidzi: Nabi ﷺ memberi nenek 1/6"

HEIR_TYPES: Mapping[HeirCategory, HeirDescriptor] = MappingProxyType({
    d.category: d for d in (
        _d(HeirCategory.HUSBAND, "زوج", Sex.MALE, False, _husband, _AN_NISA_12, "husband"),
        _d(HeirCategory.WIFE, "زوجة", Sex.FEMALE, False, _wife, _AN_NISA_12, "wife_count"),
        _d(HeirCategory.SON, "ابن", Sex.MALE, True, _residuary, _AN_NISA_11, "sons"),
        _d(HeirCategory.DAUGHTER, "بنت", Sex.FEMALE, False, _daughter, _AN_NISA_11, "daughters"),
        _d(HeirCategory.GRANDSON_FROM_SON, "ابن ابن", Sex.MALE, True, _residuary,
           f"{_AN_NISA_11} (qiyas dengan anak laki-laki)", "grandsons_from_son"),
        _d(HeirCategory.GRANDDAUGHTER_FROM_SON, "بنت ابن", Sex.FEMALE, False, _granddaughter,
           "HR. al-Bukhari dari Ibnu Mas'ud: cucu perempuan 1/6 penyempurna 2/3",
           "granddaughters_from_son"),
        _d(HeirCategory.FATHER, "أب", Sex.MALE, True, _father, _AN_NISA_11, "father"),
        _d(HeirCategory.MOTHER, "أم", Sex.FEMALE, False, _mother, _AN_NISA_11, "mother"),
        _d(HeirCategory.PATERNAL_GRANDFATHER, "جد", Sex.MALE, True, _grandfather,
           "Ijma': kakek menempati posisi ayah ketika ayah tiada", "paternal_grandfather"),
        _d(HeirCategory.PATERNAL_GRANDMOTHER, "جدة من الأب", Sex.FEMALE, False,
           _grandmother(lambda c: c.paternal_grandmother), _HADITS_JADDAH, "paternal_grandmother"),
        _d(HeirCategory.MATERNAL_GRANDMOTHER, "جدة من الأم", Sex.FEMALE, False,
           _grandmother(lambda c: c.maternal_grandmother), _HADITS_JADDAH, "maternal_grandmother"),
        _d(HeirCategory.FULL_BROTHER, "أخ لأبوين", Sex.MALE, True, _residuary, _AN_NISA_176, "full_brothers"),
        _d(HeirCategory.FULL_SISTER, "أخت لأبوين", Sex.FEMALE, False, _full_sister, _AN_NISA_176, "full_sisters"),
        _d(HeirCategory.PATERNAL_BROTHER, "أخ لأب", Sex.MALE, True, _residuary,
           f"{_AN_NISA_176} (qiyas)", "paternal_brothers"),
        _d(HeirCategory.PATERNAL_SISTER, "أخت لأب", Sex.FEMALE, False, _paternal_sister,
           f"{_AN_NISA_176} (qiyas)", "paternal_sisters"),
        _d(HeirCategory.MATERNAL_BROTHER, "أخ لأم", Sex.MALE, False,
           _maternal_sibling(lambda c: c.maternal_brothers), _AN_NISA_12, "maternal_brothers"),
        _d(HeirCategory.MATERNAL_SISTER, "أخت لأم", Sex.FEMALE, False,
           _maternal_sibling(lambda c: c.maternal_sisters), _AN_NISA_12, "maternal_sisters"),
        _d(HeirCategory.NEPHEW_FULL_BROTHER, "ابن أخ لأبوين", Sex.MALE, True, _residuary,
           _TARTIB_ASHOBAH, "nephews_full_brother"),
        _d(HeirCategory.NEPHEW_PATERNAL_BROTHER, "ابن أخ لأب", Sex.MALE, True, _residuary,
           _TARTIB_ASHOBAH, "nephews_paternal_brother"),
        _d(HeirCategory.UNCLE_FULL, "عم لأبوين", Sex.MALE, True, _residuary, _TARTIB_ASHOBAH, "uncles_full"),
        _d(HeirCategory.UNCLE_PATERNAL, "عم لأب", Sex.MALE, True, _residuary, _TARTIB_ASHOBAH, "uncles_paternal"),
    )
})


def get_heir_type(category: HeirCategory) -> HeirDescriptor:
    return HEIR_TYPES[HeirCategory(category)]


def get_heir_share(category: HeirCategory, composition: "HeirComposition") -> ShareResult:
    return get_heir_type(category).share(composition)


def is_asaba(category: HeirCategory) -> bool:
    return get_heir_type(category).is_asaba


def get_dalil(category: HeirCategory) -> str:
    return get_heir_type(category).dalil
