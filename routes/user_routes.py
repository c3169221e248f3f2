# backend/routes/user_routes.py
from fastapi import APIRouter, Depends, HTTPException, Request
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from database.connection import USERS_COLLECTION
from models.user import UserCreate, UserUpdate
from repositories.user_repository import (
    FilterError,
    build_filter,
    create_user,
    delete_users,
    find_users,
    parse_object_id,
    update_user,
)
import logging

router = APIRouter()
LOG = logging.getLogger("routes.users")

# ------------------------------------------------------------
# 🔌 Colección inyectada desde app.state.db
# ------------------------------------------------------------
def get_users_collection(request: Request) -> Collection:
    return request.app.state.db[USERS_COLLECTION]

# ------------------------------------------------------------
# 🔹 Registrar usuario
# ------------------------------------------------------------
@router.post("", status_code=201, summary="Registrar nuevo usuario")
def register_user(user: UserCreate, users: Collection = Depends(get_users_collection)):
    LOG.info(f"🧩 Intentando registrar usuario: {user.email}")
    try:
        return create_user(users, user)
    except PyMongoError as e:
        LOG.warning(f"⚠️ Usuario rechazado ({user.email}): {e}")
        raise HTTPException(status_code=400, detail=str(e))

# ------------------------------------------------------------
# 🔹 Listar usuarios (filtro por query string)
# ------------------------------------------------------------
@router.get("", summary="Obtener usuarios por filtro")
def list_users(request: Request, users: Collection = Depends(get_users_collection)):
    """
    Cada parámetro de la query es un filtro de igualdad, por ejemplo
    `GET /users?name=Bob`. Sin parámetros devuelve todos los usuarios.
    """
    try:
        query = build_filter(request.query_params.multi_items())
        result = find_users(users, query)
    except (FilterError, PyMongoError) as e:
        LOG.exception("❌ Error al listar usuarios")
        raise HTTPException(status_code=500, detail=str(e))
    if not result:
        LOG.info("📭 Ningún usuario coincide con el filtro.")
    return result

# ------------------------------------------------------------
# 🔹 Actualizar usuario por ID
# ------------------------------------------------------------
@router.patch("/{user_id}", summary="Actualizar usuario por ID")
def edit_user(user_id: str, changes: UserUpdate, users: Collection = Depends(get_users_collection)):
    try:
        obj_id = parse_object_id(user_id)
    except FilterError as e:
        LOG.warning(f"⚠️ {e}")
        raise HTTPException(status_code=400, detail=str(e))

    try:
        # None si el ID no existe: la respuesta es null con 200
        return update_user(users, obj_id, changes)
    except PyMongoError as e:
        LOG.warning(f"⚠️ Actualización rechazada para {user_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

# ------------------------------------------------------------
# 🔹 Eliminar usuarios por filtro
# ------------------------------------------------------------
@router.delete("", summary="Eliminar usuarios por filtro")
def remove_users(request: Request, users: Collection = Depends(get_users_collection)):
    """Sin parámetros elimina TODOS los usuarios."""
    try:
        query = build_filter(request.query_params.multi_items())
        return delete_users(users, query)
    except (FilterError, PyMongoError) as e:
        LOG.exception("❌ Error al eliminar usuarios")
        raise HTTPException(status_code=500, detail=str(e))
