# backend/dmserver/api/routes/auth.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from dmserver.core.exceptions import IdentifierExistsError
from dmserver.crud.users import authenticate, create_user
from dmserver.db.session import get_db
from dmserver.schemas.auth import Credentials, SignInIn, StatusOut, UserOut

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# Handlers are sync so the argon2 work runs in the threadpool.
@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=UserOut)
def signup(payload: Credentials, db: Session = Depends(get_db)):
    try:
        u = create_user(db, payload)
    except IdentifierExistsError as e:
        logger.info("sign-up rejected: %s", e)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    logger.info("created user %s", u.id)
    return UserOut(id=u.id, username=u.username, email=u.email)


@router.post("/signin", response_model=StatusOut)
def signin(payload: SignInIn, db: Session = Depends(get_db)):
    # unknown user, bad hash and wrong password all look the same to the client
    if authenticate(db, payload.username, payload.password) is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return StatusOut()


@router.post("/signout", response_model=StatusOut)
def signout():
    return StatusOut()
