# backend/repositories/user_repository.py
from bson import ObjectId
from bson.errors import InvalidId
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pymongo import ReturnDocument
from pymongo.collection import Collection
from models.user import UserCreate, UserUpdate
import logging

logger = logging.getLogger("repositories.users")


class FilterError(ValueError):
    """Filtro de consulta mal formado (campo desconocido o valor inválido)."""


def _now() -> datetime:
    # BSON guarda milisegundos
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)

def parse_object_id(value: str) -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise FilterError(f"ID inválido: {value!r}")

def _parse_datetime(value: str) -> datetime:
    # "Z" no es aceptado por fromisoformat antes de 3.11
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise FilterError(f"Fecha inválida: {value!r}")

# ------------------------------------------------------------
# 🔹 Campos filtrables y su tipo esperado
# ------------------------------------------------------------
FILTER_FIELDS: Dict[str, tuple] = {
    "id": ("_id", parse_object_id),
    "_id": ("_id", parse_object_id),
    "name": ("name", str),
    "email": ("email", str),
    "password": ("password", str),
    "createdAt": ("createdAt", _parse_datetime),
    "updatedAt": ("updatedAt", _parse_datetime),
}

def build_filter(params: List[tuple]) -> Dict[str, Any]:
    """
    Traduce pares (campo, valor) de la query string a un filtro Mongo de
    igualdad. Un campo repetido coincide con cualquiera de sus valores.
    """
    grouped: Dict[str, list] = {}
    for key, raw in params:
        if key not in FILTER_FIELDS:
            raise FilterError(f"Campo de filtro desconocido: {key!r}")
        field, cast = FILTER_FIELDS[key]
        grouped.setdefault(field, []).append(cast(raw))

    query: Dict[str, Any] = {}
    for field, values in grouped.items():
        query[field] = values[0] if len(values) == 1 else {"$in": values}
    return query

# ------------------------------------------------------------
# 🔹 Serialización de usuario
# ------------------------------------------------------------
def serialize_user(user: dict) -> Optional[dict]:
    """Convierte ObjectId a str y expone solo los campos públicos."""
    if not user:
        return None
    return {
        "id": str(user["_id"]),
        "name": user.get("name"),
        "email": user.get("email"),
        "password": user.get("password"),
        "createdAt": user.get("createdAt"),
        "updatedAt": user.get("updatedAt"),
    }

# ------------------------------------------------------------
# 🔹 Crear usuario
# ------------------------------------------------------------
def create_user(collection: Collection, user: UserCreate) -> dict:
    now = _now()
    user_dict = user.model_dump()
    user_dict["createdAt"] = now
    user_dict["updatedAt"] = now
    result = collection.insert_one(user_dict)
    logger.info(f"✅ Usuario creado con ID {result.inserted_id}")
    return serialize_user(user_dict)

# ------------------------------------------------------------
# 🔹 Buscar usuarios por filtro
# ------------------------------------------------------------
def find_users(collection: Collection, query: Dict[str, Any]) -> List[dict]:
    return [serialize_user(doc) for doc in collection.find(query)]

# ------------------------------------------------------------
# 🔹 Actualizar usuario por ID
# ------------------------------------------------------------
def update_user(collection: Collection, user_id: ObjectId, changes: UserUpdate) -> Optional[dict]:
    """Devuelve el documento actualizado o None si el ID no existe."""
    fields = changes.changes()
    fields["updatedAt"] = _now()
    doc = collection.find_one_and_update(
        {"_id": user_id},
        {"$set": fields},
        return_document=ReturnDocument.AFTER,
    )
    if doc is None:
        logger.warning(f"⚠️ Usuario no encontrado para actualizar: {user_id}")
    return serialize_user(doc)

# ------------------------------------------------------------
# 🔹 Eliminar usuarios por filtro
# ------------------------------------------------------------
def delete_users(collection: Collection, query: Dict[str, Any]) -> dict:
    result = collection.delete_many(query)
    logger.info(f"🗑️ {result.deleted_count} usuarios eliminados (filtro={query})")
    return {"acknowledged": result.acknowledged, "deletedCount": result.deleted_count}
