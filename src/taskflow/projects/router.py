"""Projects router: /projects.

Projects have no table yet; tasks only carry a free ``project_id``, so the
list is always empty.
"""

from fastapi import APIRouter, Depends

from taskflow.auth.dependencies import SessionIdentity, get_current_identity

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("", response_model=list[dict])
async def get_projects(
    identity: SessionIdentity = Depends(get_current_identity),  # noqa: ARG001
) -> list[dict]:
    return []
