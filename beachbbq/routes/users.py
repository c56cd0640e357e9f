# beachbbq/routes/users.py
import logging
from decimal import Decimal
from typing import List

from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.orm import Session
from beachbbq import models, schemas, database, auth

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Users"]
)


# User Registration (the very first account becomes the admin)
@router.post("/register", response_model=schemas.TokenOut)
def register_user(user: schemas.UserCreate, db: Session = Depends(database.get_db)):
    existing_user = db.query(models.User).filter(models.User.username == user.username).first()
    if existing_user:
        raise HTTPException(status_code=400, detail="Username already exists")

    is_first_user = db.query(models.User).count() == 0
    new_user = models.User(
        username=user.username,
        email=user.email,
        phone=user.phone,
        password=auth.get_password_hash(user.password),
        is_admin=is_first_user,
        balance=Decimal("0"),
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    if is_first_user:
        logger.info("Bootstrap admin account '%s' registered", new_user.username)

    access_token = auth.create_access_token(data={
        "sub": new_user.username,
        "is_admin": new_user.is_admin
    })
    return {"access_token": access_token, "token_type": "bearer", "user": new_user}

# User Login (JWT)
@router.post("/login", response_model=schemas.TokenOut)
def login_user(user: schemas.UserLogin, db: Session = Depends(database.get_db)):
    db_user = db.query(models.User).filter(models.User.username == user.username).first()
    if not db_user or not auth.verify_password(user.password, db_user.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    access_token = auth.create_access_token(data={
        "sub": db_user.username,
        "is_admin": db_user.is_admin
    })
    return {"access_token": access_token, "token_type": "bearer", "user": db_user}

@router.get("/user", response_model=schemas.UserOut)
def read_current_user(current_user: models.User = Depends(auth.get_current_user)):
    return current_user

@router.get("/user/balance", response_model=schemas.BalanceOut)
def read_balance(current_user: models.User = Depends(auth.get_current_user)):
    return {"balance": current_user.balance or Decimal("0")}

# Admin - List Users
@router.get("/admin/users", response_model=List[schemas.UserOut], dependencies=[Depends(auth.verify_admin_user)])
def list_users(db: Session = Depends(database.get_db)):
    return db.query(models.User).order_by(models.User.id).all()

# Admin - Grant or Revoke Admin Rights
@router.patch("/admin/users/{user_id}", response_model=schemas.UserOut)
def update_user_role(
    user_id: int,
    payload: schemas.UserAdminUpdate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(auth.verify_admin_user),
):
    user = db.query(models.User).filter(models.User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if user.id == current_user.id and not payload.is_admin:
        raise HTTPException(status_code=400, detail="Admins cannot revoke their own admin rights")

    user.is_admin = payload.is_admin
    db.commit()
    db.refresh(user)
    logger.info("User %s admin flag set to %s by %s", user.username, user.is_admin, current_user.username)
    return user
