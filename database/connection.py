# backend/database/connection.py
import sys
import logging
from typing import Optional
from urllib.parse import quote_plus
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConfigurationError, PyMongoError
from config import Settings

logger = logging.getLogger("database.connection")

USERS_COLLECTION = "users"
DEFAULT_DB_NAME = "usersdb"

# ============================================================
# 🔧 CONSTRUCTOR DE URI
# ============================================================
def build_mongo_uri(settings: Settings) -> str:
    """MONGO_URI tiene prioridad; si no, se arma desde host/usuario/puerto."""
    if settings.MONGO_URI:
        return settings.MONGO_URI
    if not settings.MONGO_HOST:
        return ""
    credentials = ""
    if settings.MONGO_USER:
        credentials = quote_plus(settings.MONGO_USER)
        if settings.MONGO_PASSWORD:
            credentials += ":" + quote_plus(settings.MONGO_PASSWORD)
        credentials += "@"
    return f"mongodb://{credentials}{settings.MONGO_HOST}:{settings.MONGO_PORT}"

# ============================================================
# 🔌 CONEXIÓN
# ============================================================
def connect(uri: str, timeout_ms: int = 5000) -> MongoClient:
    """
    Abre el cliente y hace ping al servidor para que fallos de red,
    autenticación o timeout aparezcan aquí y no en la primera petición.
    """
    if not uri:
        raise ConfigurationError("MONGO_URI no está definido.")
    client = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms, tz_aware=True)
    try:
        client.admin.command("ping")
    except PyMongoError:
        client.close()
        raise
    logger.info("✅ MongoDB conectado")
    return client

def get_database(client: MongoClient, name: Optional[str] = None) -> Database:
    if name:
        return client[name]
    return client.get_default_database(default=DEFAULT_DB_NAME)

def ensure_indexes(db: Database) -> None:
    # email único en toda la colección
    db[USERS_COLLECTION].create_index("email", unique=True)
    logger.info(f"🗂️ Índice único 'email' asegurado en '{USERS_COLLECTION}'.")

# ============================================================
# 🚀 INICIALIZACIÓN (fail-fast)
# ============================================================
def init_db(settings: Settings) -> Database:
    """Conecta y prepara la base; ante cualquier error termina el proceso."""
    try:
        client = connect(build_mongo_uri(settings), settings.MONGO_TIMEOUT_MS)
        db = get_database(client, settings.MONGO_DB)
        ensure_indexes(db)
    except PyMongoError as e:
        logger.error(f"❌ Error de conexión a MongoDB: {e}")
        sys.exit(1)
    logger.info(f"✅ Base de datos lista: {db.name}")
    return db
