import os
from pathlib import Path
from dotenv import load_dotenv
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent  # <project>
INSTANCE_DIR = BASE_DIR / "instance"

def _default_sqlite_uri():
    return f"sqlite:///{(INSTANCE_DIR / 'fuelbunk.db').as_posix()}"

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL") or _default_sqlite_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # prices a new station starts with, per liter
    DEFAULT_PETROL_PRICE = os.getenv("DEFAULT_PETROL_PRICE", "106.50")
    DEFAULT_DIESEL_PRICE = os.getenv("DEFAULT_DIESEL_PRICE", "94.80")

    # brand -> (primary, secondary)
    BRAND_THEMES = {
        "Indian Oil": ("#003c7e", "#ff6600"),
        "HP": ("#0066cc", "#e31e24"),
        "BP": ("#00923f", "#ffed00"),
    }
    DEFAULT_THEME = ("#1e40af", "#f59e0b")

class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    LOG_LEVEL = "WARNING"

def ensure_instance(app):
    # Flask instance path
    os.makedirs(app.instance_path, exist_ok=True)
    INSTANCE_DIR.mkdir(parents=True, exist_ok=True)
