"""Application configuration settings."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Final

BASE_DIR: Final[Path] = Path(__file__).resolve().parent.parent
DATA_DIR: Final[Path] = Path(os.getenv("REGISTRAR_DATA_DIR", str(BASE_DIR / "data")))

DATABASE_URL: Final[str] = os.getenv(
    "DATABASE_URL", f"sqlite:///{(DATA_DIR / 'registrar.db').as_posix()}"
)
SQLALCHEMY_ECHO: Final[bool] = os.getenv("SQLALCHEMY_ECHO") == "1"

# Registrations paying more than this are confirmed automatically.
PAYMENT_CONFIRMATION_THRESHOLD: Final[int] = int(
    os.getenv("PAYMENT_CONFIRMATION_THRESHOLD", 500)
)
MINIMUM_STUDENT_AGE: Final[int] = int(os.getenv("MINIMUM_STUDENT_AGE", 18))

DATA_DIR.mkdir(parents=True, exist_ok=True)
