from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from tasklane.crud.user import user as crud_user
from tasklane.models.user import User
from tasklane.schemas.response import APIResponse
from tasklane.schemas.user import User as UserSchema, UserCreate
from tasklane.utils import deps

router = APIRouter()

@router.post("/", response_model=APIResponse[UserSchema], status_code=status.HTTP_201_CREATED)
async def register_user(
    user_in: UserCreate,
    db: Session = Depends(deps.get_db)
):
    """Record a user that signed up with the identity provider."""
    if crud_user.get_by_username(db, username=user_in.username):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username is already taken")
    new_user = crud_user.create(db, obj_in=user_in)
    return APIResponse(message="User created successfully", data=new_user)

@router.get("/me", response_model=APIResponse[UserSchema])
async def get_me(user: User = Depends(deps.get_current_user)):
    return APIResponse(message="User fetched successfully", data=user)
