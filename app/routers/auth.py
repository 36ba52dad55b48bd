import logging

from fastapi import APIRouter, HTTPException, Depends, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.user import UserCreate, UserLogin, UserOut
from app.utils.auth import get_current_user
from app.utils.security import hash_password, verify_password, set_session_cookie, clear_session_cookie

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def signup(user: UserCreate, response: Response, db: Session = Depends(get_db)):
    try:
        existing_user = db.query(User).filter(User.email == user.email).first()
        if existing_user:
            raise HTTPException(status_code=400, detail="Email already registered")

        new_user = User(
            name=user.name,
            email=user.email,
            hashed_password=hash_password(user.password),
            role=user.role,
        )

        db.add(new_user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            db.rollback()
            raise HTTPException(status_code=400, detail="Email already registered")
        db.refresh(new_user)

        set_session_cookie(response, new_user.id)
        logger.info(f"User registered: id={new_user.id} email={new_user.email} role={new_user.role}")
        return new_user

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error in signup: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/login", response_model=UserOut)
def login(user: UserLogin, response: Response, db: Session = Depends(get_db)):
    try:
        db_user = db.query(User).filter(User.email == user.email).first()
        if not db_user:
            raise HTTPException(status_code=404, detail="User not found")

        # 400 rather than 401 for a wrong password, kept for client compatibility
        if not verify_password(user.password, db_user.hashed_password):
            logger.warning(f"Failed login for user {db_user.id}")
            raise HTTPException(status_code=400, detail="Invalid credentials")

        set_session_cookie(response, db_user.id)
        logger.info(f"User logged in: id={db_user.id}")
        return db_user

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error in login: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/logout")
def logout(response: Response):
    clear_session_cookie(response)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserOut)
def read_current_user(current_user: User = Depends(get_current_user)):
    return current_user
