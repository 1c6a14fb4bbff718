from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fruitland.auth.dependencies import get_current_user, get_identity
from fruitland.auth.identity import Identity, store_identity
from fruitland.core.constants import Role
from fruitland.crud import user as user_crud
from fruitland.db import get_db
from fruitland.models.user import User
from fruitland.schemas.user import LoginRequest, MeResponse, RegisterRequest, UserRead
from fruitland.utils.tenant import get_storefront_tenant

router = APIRouter()


@router.post("/register", response_model=UserRead, status_code=201)
async def register(
    payload: RegisterRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """Customer sign-up; the account is fixed to the store it signed up in."""
    tenant = await get_storefront_tenant(payload.tenant_slug, db)
    user = await user_crud.register_customer(db, payload, tenant.id)
    store_identity(request.session, user.id, Role.CUSTOMER, tenant.id)
    return user


@router.post("/login", response_model=UserRead)
async def login(
    payload: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    user = await user_crud.authenticate(db, payload.email, payload.password, payload.tenant_slug)
    store_identity(request.session, user.id, Role(user.role), user.tenant_id)
    return user


@router.post("/logout")
async def logout(request: Request):
    request.session.clear()
    return {"success": True}


@router.get("/me", response_model=MeResponse)
async def me(
    identity: Identity = Depends(get_identity),
    user: User = Depends(get_current_user),
):
    data = UserRead.model_validate(user).model_dump()
    return MeResponse(**data, active_tenant_id=identity.active_tenant_id)
