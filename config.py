# backend/config.py
import os
from typing import Optional
from dotenv import load_dotenv
from pathlib import Path

# ============================================================
# 🌍 DETECTAR ENTORNO Y CARGAR .env CORRESPONDIENTE
# ============================================================
ENV = os.getenv("ENV", "production" if "PASSENGER_ENV" in os.environ else "development")

env_file = ".env.production" if ENV == "production" else ".env.development"
dotenv_path = Path(__file__).resolve().parent / env_file
load_dotenv(dotenv_path)

# ============================================================
# ⚙️ CONFIGURACIÓN GENERAL
# ============================================================
class Settings:
    """Configuración leída del entorno en el momento de instanciar."""

    def __init__(self):
        self.ENV: str = os.getenv("ENV", ENV)
        self.PROJECT_NAME: str = os.getenv("PROJECT_NAME", "UsersAPI")
        self.VERSION: str = os.getenv("VERSION", "1.0")

        # 🔹 Mongo (URI completa o por partes)
        self.MONGO_URI: str = os.getenv("MONGO_URI", "")
        self.MONGO_USER: Optional[str] = os.getenv("MONGO_USER")
        self.MONGO_PASSWORD: Optional[str] = os.getenv("MONGO_PASSWORD")
        self.MONGO_HOST: Optional[str] = os.getenv("MONGO_HOST")
        self.MONGO_PORT: str = os.getenv("MONGO_PORT", "27017")
        self.MONGO_DB: Optional[str] = os.getenv("MONGO_DB")
        self.MONGO_TIMEOUT_MS: int = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

        # 🔹 Servidor HTTP
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "11000"))

        # 🔹 Otros
        self.ALLOWED_ORIGINS: list = os.getenv("ALLOWED_ORIGINS", "*").split(",")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.DEBUG: bool = self.ENV == "development"

settings = Settings()
