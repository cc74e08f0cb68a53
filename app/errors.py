# app/errors.py

class FaraidhError(Exception):
    """Akar semua error milik mesin faraidh."""


class ConstructionError(FaraidhError, ValueError):
    """Pecahan dibuat dengan penyebut nol."""


class DivisionByZero(FaraidhError, ZeroDivisionError):
    """Pembagian dengan pecahan bernilai nol."""


class InvalidComposition(FaraidhError, ValueError):
    """Susunan ahli waris melanggar syarat (suami & istri bersamaan, jumlah negatif, dll)."""
