# src/buku_tamu/utils/config.py
"""
Kiosk configuration - .env at the project root, environment wins.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from project root
BASE_DIR = Path(__file__).resolve().parents[3]
load_dotenv(BASE_DIR / ".env")


class Config:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///buku_tamu.db").strip()

    # Shared staff password for report export
    EXPORT_PASSWORD = os.getenv("EXPORT_PASSWORD", "17041958")

    REPORT_TITLE = os.getenv("REPORT_TITLE", "Buku Tamu Bapperida Lombok Barat")
    OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", "output"))

    # "satisfaction" or "average"
    DASHBOARD_VARIANT = os.getenv("DASHBOARD_VARIANT", "satisfaction").strip().lower()

    ADMIN_NOTIFY_ENABLED = os.getenv("ADMIN_NOTIFY_ENABLED", "false").strip().lower() in ("1", "true", "yes")
    ADMIN_RECIPIENTS = [
        e.strip() for e in os.getenv("ADMIN_RECIPIENTS", "").split(",")
        if e.strip()
    ]

    def __repr__(self):
        return f"<Config db={self.DATABASE_URL} output={self.OUTPUT_DIR}>"


# Singleton
config = Config()
