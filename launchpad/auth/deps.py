from __future__ import annotations

import secrets
from typing import Annotated

from fastapi import Header

from launchpad.api.errors import http_error_from_service
from launchpad.core.config import settings
from launchpad.services.error_codes import ErrorCode
from launchpad.services.exceptions import PermissionDeniedError

ADMIN_HEADER = "x-admin-passcode"


def is_admin(passcode: str | None) -> bool:
    expected = settings.admin_passcode
    # No server secret configured => nobody is admin
    if not expected or not passcode:
        return False
    return secrets.compare_digest(passcode.encode("utf-8"), expected.encode("utf-8"))


def require_admin(
    x_admin_passcode: Annotated[str | None, Header(alias=ADMIN_HEADER)] = None,
) -> None:
    if not is_admin(x_admin_passcode):
        raise http_error_from_service(
            PermissionDeniedError(ErrorCode.UNAUTHORIZED.value, "unauthorized")
        )
