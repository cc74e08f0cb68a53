# Di dalam file: main.py

import logging
from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

import schemas
from calculator import calculate_inheritance
from config import settings
from app.errors import InvalidComposition
from app.rules.blocking import BLOCKABLE_CATEGORIES
from app.rules.taxonomy import HEIR_TYPES

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_title,
    description=settings.app_description,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def read_root():
    """
    Endpoint utama untuk menyapa pengguna.
    """
    return {"message": "Selamat datang di Kalkulator Faraidh"}


@app.get("/heirs/", response_model=List[schemas.HeirOut])
def read_heirs():
    """
    Endpoint untuk membaca katalog ahli waris beserta dalilnya.
    """
    return [
        schemas.HeirOut(
            id=d.category,
            name_ar=d.name_ar,
            sex=d.sex,
            is_asaba=d.is_asaba,
            blockable=d.category in BLOCKABLE_CATEGORIES,
            dalil=d.dalil,
        )
        for d in HEIR_TYPES.values()
    ]


@app.post("/calculate/", response_model=schemas.AllocationResult)
def run_calculation(calculation_data: schemas.CalculationInput):
    """
    Endpoint untuk menjalankan kalkulasi waris.
    """
    try:
        return calculate_inheritance(calculation_data)
    except InvalidComposition as e:
        logger.warning("Susunan ahli waris tidak valid: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
