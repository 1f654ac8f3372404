from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from launchpad.api.errors import http_error_from_service
from launchpad.api.schemas.signups import SignupOut
from launchpad.services.exceptions import ServiceError
from launchpad.services.signups_service import create_signup
from launchpad.store import DocumentStore, get_store

router = APIRouter(prefix="/signups", tags=["signups"])

Store = Annotated[DocumentStore, Depends(get_store)]


@router.post("", response_model=SignupOut, status_code=201)
def signup(store: Store, payload: Annotated[Any, Body()] = None):
    try:
        return create_signup(store, payload)
    except ServiceError as err:
        raise http_error_from_service(err) from None
