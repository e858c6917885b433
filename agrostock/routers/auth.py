from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from datetime import timedelta
import logging

from agrostock.config import ACCESS_TOKEN_EXPIRE_MINUTES
from agrostock.database import get_db
from agrostock.security import verify_password, create_access_token
from agrostock.schemas.auth import Token
from agrostock.crud.users import get_user_by_username

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/login", response_model=Token)
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    # 1. Buscar usuario
    user = get_user_by_username(db, username=form_data.username)

    # 2. Verificar contraseña
    if not user or not verify_password(form_data.password, user.password_hash):
        logger.warning("Intento de acceso fallido para '%s'", form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuario o contraseña incorrectos",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # 3. Generar Token
    access_token = create_access_token(
        data={"sub": user.username, "role": user.role.value},
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    return {"access_token": access_token, "token_type": "bearer"}
