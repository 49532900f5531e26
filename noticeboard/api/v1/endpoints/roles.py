"""Role selection API: the caller's role and capabilities, and PIN-gated role selection."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from noticeboard.api.v1.dependencies import (
    Principal,
    get_current_identity,
    get_role_verification_service,
    require_capability,
)
from noticeboard.application.dtos.user import Identity
from noticeboard.application.services.access_policy import access_policy
from noticeboard.application.services.role_verification_service import (
    RoleVerificationService,
)
from noticeboard.core.limiter import limit_role_verification
from noticeboard.domain.enums import Capability, Role
from noticeboard.domain.exceptions import CredentialException
from noticeboard.schemas.role import MyRoleResponse, RoleVerifyRequest, RoleVerifyResponse

router = APIRouter()


@router.get("/me", response_model=MyRoleResponse)
async def get_my_role(
    principal: Annotated[
        Principal, Depends(require_capability(Capability.COMPLETE_ROLE_SELECTION))
    ],
):
    """Current role ('unassigned' before selection) and granted capabilities."""
    capabilities = sorted(c.value for c in access_policy.capabilities_for(principal.role))
    return MyRoleResponse(
        identity_id=principal.identity.id,
        role=principal.role.value,
        capabilities=capabilities,
    )


@router.post("/verify", response_model=RoleVerifyResponse)
@limit_role_verification
async def verify_role(
    request: Request,
    body: RoleVerifyRequest,
    identity: Annotated[Identity, Depends(get_current_identity)],
    service: Annotated[RoleVerificationService, Depends(get_role_verification_service)],
):
    """Select a role. master and admin require their PIN; user requires none.

    A wrong PIN answers 401 INVALID_CREDENTIAL and leaves the stored role unchanged.
    """
    requested = Role(body.requested_role)
    result = await service.verify(identity, requested, body.credential)
    if not result.success or result.role is None:
        raise CredentialException(requested.value)
    return RoleVerifyResponse(success=True, role=result.role.value)
