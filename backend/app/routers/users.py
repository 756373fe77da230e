"""
Router pour les comptes de connexion.
Un admin gère les comptes de son école ; le superadmin gère tous les comptes.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.dependencies import scoped
from app.auth.roles import ACCOUNT_MANAGERS
from app.auth.tenant import Tenant
from app.database import get_db
from app.errors import NotFound
from app.schemas.common import ListParams, Page, list_params
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.services import user_service
from app.services.user_service import users

router = APIRouter(prefix="/api/users", tags=["Comptes"])

manager_access = scoped(*ACCOUNT_MANAGERS)


@router.get("", response_model=Page[UserResponse], summary="Lister les comptes")
def list_users(
    params: ListParams = Depends(list_params),
    tenant: Tenant = Depends(manager_access),
    db: Session = Depends(get_db),
):
    return users.paginate(db, tenant, params)


@router.get("/{user_id}", response_model=UserResponse, summary="Détail d'un compte")
def get_user(user_id: int, tenant: Tenant = Depends(manager_access), db: Session = Depends(get_db)):
    user = users.get(db, tenant, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


@router.post("", response_model=UserResponse, status_code=201, summary="Créer un compte")
def create_user(data: UserCreate, tenant: Tenant = Depends(manager_access), db: Session = Depends(get_db)):
    return user_service.create_user(db, tenant, data)


@router.put("/{user_id}", response_model=UserResponse, summary="Modifier un compte")
@router.patch("/{user_id}", response_model=UserResponse, summary="Modifier partiellement un compte")
def update_user(
    user_id: int,
    data: UserUpdate,
    tenant: Tenant = Depends(manager_access),
    db: Session = Depends(get_db),
):
    user = user_service.update_user(db, tenant, user_id, data)
    if user is None:
        raise NotFound("User not found")
    return user


@router.delete("/{user_id}", summary="Supprimer un compte")
def delete_user(user_id: int, tenant: Tenant = Depends(manager_access), db: Session = Depends(get_db)):
    if not user_service.delete_user(db, tenant, user_id):
        raise NotFound("User not found")
    return {"message": "User deleted"}
