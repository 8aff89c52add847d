from fastapi import Depends
from typing import Annotated, Optional
from Endpoints.Auth.normal_login import get_current_user, get_optional_user, get_current_creator
from schemas.auth.schemas import SessionUser

user_dependency = Annotated[SessionUser, Depends(get_current_user)]
optional_user_dependency = Annotated[Optional[SessionUser], Depends(get_optional_user)]
creator_dependency = Annotated[SessionUser, Depends(get_current_creator)]
