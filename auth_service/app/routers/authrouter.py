from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.database import get_db
from shared.core.schemas import UserToken
from ..schemas import authchemas
from ..services import authservices

router = APIRouter(prefix="/api/auth", tags=["Hotel Chain Auth"])


@router.post("/signup", response_model=authchemas.AuthenticationResponse)
def signup(
        req: authchemas.SignUpRequest,
        response: Response,
        db: Session = Depends(get_db)):
    return authservices.signup(db, response, req)


@router.post("/signin", response_model=authchemas.AuthenticationResponse)
def signin(
        req: authchemas.SignInRequest,
        response: Response,
        db: Session = Depends(get_db)):
    return authservices.signin(db, response, req)


@router.post("/signout")
def signout(response: Response):
    return authservices.signout(response)


@router.get("/me", response_model=authchemas.UserResponse)
def me(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.validate_current_token)):
    return authservices.get_me(db, current_user)
