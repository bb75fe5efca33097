from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from farmconnect.api.deps import get_current_user, get_identity
from farmconnect.data.database import get_db
from farmconnect.data.models.user import UserModel
from farmconnect.domain.schemas import Identity, UserOut, UserRegisterIn
from farmconnect.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=UserOut, status_code=201)
def register(
    payload: UserRegisterIn,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    return UserService(db).register(identity, payload)


@router.get("/me", response_model=UserOut)
def me(user: UserModel = Depends(get_current_user)):
    return user
