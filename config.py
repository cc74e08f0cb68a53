# config.py
"""Konfigurasi aplikasi (dibaca dari environment / .env dengan awalan FARAIDH_)."""
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # API
    app_title: str = "Kalkulator Faraidh - Zahrotul Faridhoh"
    app_description: str = "API untuk perhitungan waris Islam berdasarkan kitab Zahrotul Faridhoh."
    cors_origins: List[str] = [
        "http://localhost",
        "http://localhost:3000",  # frontend Next.js
    ]

    # Logging
    log_level: str = "INFO"

    # Pembulatan keluaran (pecahan tetap eksak)
    amount_precision: int = 2
    percentage_precision: int = 2

    model_config = SettingsConfigDict(
        env_prefix="FARAIDH_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
