"""
Endpoints de usuarios del consultorio y login.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from dentalflow.api.dependencies import get_store
from dentalflow.core.exceptions import CredentialsException
from dentalflow.schemas.user import LoginRequest, UserCreate, UserResponse, UserUpdate
from dentalflow.store import RecordStore

router = APIRouter()


@router.get("", response_model=list[UserResponse])
async def list_users(store: RecordStore = Depends(get_store)):
    return store.get_users()


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(data: UserCreate, store: RecordStore = Depends(get_store)):
    """Crea un usuario. El nombre de usuario es único sin distinguir mayúsculas."""
    return await store.add_user(data)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    store: RecordStore = Depends(get_store),
):
    return await store.update_user(user_id, data)


@router.delete("/{user_id}", status_code=204)
async def delete_user(user_id: UUID, store: RecordStore = Depends(get_store)):
    await store.delete_user(user_id)


@router.post("/login", response_model=UserResponse)
async def login(data: LoginRequest, store: RecordStore = Depends(get_store)):
    """
    Verifica usuario y contraseña.
    No emite tokens: devuelve el usuario y actualiza su último acceso.
    """
    user = await store.authenticate(data.username, data.password)
    if user is None:
        raise CredentialsException("Usuario o contraseña incorrectos")
    return user
