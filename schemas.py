# Di dalam file: schemas.py

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.math.rational import Rational
from app.rules.taxonomy import HEIR_TYPES, HeirCategory, Sex

Count = Annotated[int, Field(ge=0)]


# --- Susunan ahli waris (input inti) ---
class HeirComposition(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    # Pasangan: suami XOR istri (istri boleh lebih dari satu)
    husband: bool = False
    wife: bool = False
    wife_count: Annotated[int, Field(ge=0, le=4)] = 0

    # Keturunan
    sons: Count = 0
    daughters: Count = 0
    grandsons_from_son: Count = 0
    granddaughters_from_son: Count = 0

    # Leluhur
    father: bool = False
    mother: bool = False
    paternal_grandfather: bool = False
    paternal_grandmother: bool = False
    maternal_grandmother: bool = False

    # Saudara (kandung / seayah / seibu)
    full_brothers: Count = 0
    full_sisters: Count = 0
    paternal_brothers: Count = 0
    paternal_sisters: Count = 0
    maternal_brothers: Count = 0
    maternal_sisters: Count = 0

    # 'Ashobah jauh dari garis laki-laki
    nephews_full_brother: Count = 0
    nephews_paternal_brother: Count = 0
    uncles_full: Count = 0
    uncles_paternal: Count = 0

    @model_validator(mode="before")
    @classmethod
    def _default_wife_count(cls, data):
        # istri tanpa jumlah dianggap satu orang
        if isinstance(data, dict) and data.get("wife") and not data.get("wife_count"):
            data = {**data, "wife_count": 1}
        return data

    @model_validator(mode="after")
    def _check_spouse(self):
        if self.husband and self.wife:
            raise ValueError("Suami dan istri tidak boleh hadir bersamaan")
        if self.wife_count and not self.wife:
            raise ValueError("wife_count hanya boleh diisi bila istri ada")
        return self

    def count(self, category: HeirCategory) -> int:
        """Jumlah kepala untuk satu kategori (flag bernilai 1/0)."""
        return int(getattr(self, HEIR_TYPES[HeirCategory(category)].field))

    def present(self) -> List[HeirCategory]:
        return [cat for cat in HeirCategory if self.count(cat) > 0]


# --- Hasil hajb (penghalang) ---
class BlockingOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    blocked: bool = False
    reason: Optional[str] = None   # kunci opak, misal "father", "sons"


# --- Bagian tetap (furudh) ---
class FurudhItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str                                   # nama kelompok, misal "grandmothers"
    members: Dict[HeirCategory, int]           # kategori → jumlah kepala
    member_shares: Dict[HeirCategory, Rational]
    share: Rational                            # bagian golongan (jumlah member_shares)

    @property
    def quantity(self) -> int:
        return sum(self.members.values())


# --- 'Ashobah ---
class AsabaInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: HeirCategory
    count: int
    paired_category: Optional[HeirCategory] = None
    paired_count: int = 0
    kind: Literal["bin_nafsi", "bil_ghair", "maal_ghair"] = "bin_nafsi"

    @property
    def has_females(self) -> bool:
        return self.paired_category is not None and self.paired_count > 0


class AsabaDistribution(BaseModel):
    model_config = ConfigDict(frozen=True)

    male_share: Rational
    female_share: Rational
    per_male_share: Rational
    per_female_share: Rational
    total_units: int


class AsabaResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_asaba: bool
    info: Optional[AsabaInfo] = None
    remainder: Rational
    distribution: Optional[AsabaDistribution] = None


# --- Koreksi: tidak ada | 'Aul | Radd | 'Umariyyatain ---
class NoCorrection(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"
    applied: Literal[False] = False


class AwlOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["awl"] = "awl"
    applied: Literal[True] = True
    ratio: Rational
    original_total: Rational
    adjusted_total: Rational


class RaddOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["radd"] = "radd"
    applied: Literal[True] = True
    remainder: Rational
    recipients: List[str]                        # kunci kelompok penerima radd
    addends: Dict[str, Rational]                 # tambahan per kelompok
    category_addends: Dict[HeirCategory, Rational]


class UmariyyatainOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["umariyyatain"] = "umariyyatain"
    applied: Literal[True] = True
    case_id: Literal[1, 2]                       # 1 = bersama suami, 2 = bersama istri
    spouse: HeirCategory
    spouse_share: Rational
    mother_share: Rational
    father_share: Rational


CorrectionOutcome = Annotated[
    Union[NoCorrection, AwlOutcome, RaddOutcome, UmariyyatainOutcome],
    Field(discriminator="kind"),
]


# --- Skema untuk Perbandingan Penyebut & Aslul Mas'alah ---
class ComparisonItem(BaseModel):
    a: int                   # penyebut/bilangan pertama
    b: int                   # penyebut/bilangan kedua
    relation: str            # mumatsalah, mudakholah, muwafaqoh, mubayanah
    lcm: Optional[int] = None


class AshlInfo(BaseModel):
    ashl: int
    comparisons: List[ComparisonItem] = []


# --- Skema Output untuk Setiap Ahli Waris ---
class AllocationEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: HeirCategory
    quantity: int
    raw_fraction: Rational         # sebelum 'aul/radd/'umariyyatain
    final_fraction: Rational       # setelah koreksi
    per_person_fraction: Rational
    percentage: float
    amount: float
    saham: int                     # saham dari aslul mas'alah akhir
    is_asaba: bool = False
    blocked: bool = False
    blocked_reason: Optional[str] = None
    dalil: str = ""


# --- Skema Output Utama ---
class AllocationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_estate: float
    entries: List[AllocationEntry]
    correction: CorrectionOutcome
    fixed_total: Rational
    remainder: Rational
    unallocated: Rational          # sisa yang tidak berpemilik (baitul mal)
    asaba: Optional[AsabaInfo] = None
    ashl_awal: int                 # AM sebelum 'aul/radd
    ashl_akhir: int                # AM setelah koreksi & tashih inkisar

    def entry(self, category: HeirCategory) -> Optional[AllocationEntry]:
        return next((e for e in self.entries if e.category == category), None)


# --- Skema Input untuk Kalkulasi ---
class CalculationInput(BaseModel):
    heirs: HeirComposition
    tirkah: float = Field(ge=0)    # Harta bersih yang dibagi


# --- Skema daftar ahli waris (katalog statis) ---
class HeirOut(BaseModel):
    id: HeirCategory
    name_ar: str
    sex: Sex
    is_asaba: bool
    blockable: bool
    dalil: str
