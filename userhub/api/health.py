"""Health check: record store connectivity and artifact directory writability."""

import os
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from userhub.core.artifacts import ArtifactStore, get_artifact_store
from userhub.core.config import settings
from userhub.core.database import check_db_connected, get_db
from userhub.schemas.health import HealthResponse

router = APIRouter()


def _artifacts_writable(store: ArtifactStore) -> bool:
    # A missing directory is fine as long as it can be created on first write.
    target = store.root
    while not target.exists():
        if target.parent == target:
            return False
        target = target.parent
    return target.is_dir() and os.access(target, os.W_OK)


@router.get("", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    artifacts: Annotated[ArtifactStore, Depends(get_artifact_store)],
) -> HealthResponse:
    """Used by load balancers; 'degraded' when either store is unusable."""
    db_ok = check_db_connected(db)
    artifacts_ok = _artifacts_writable(artifacts)
    return HealthResponse(
        status="ok" if db_ok and artifacts_ok else "degraded",
        environment=settings.APP_ENV,
        database="connected" if db_ok else "disconnected",
        artifacts="writable" if artifacts_ok else "unwritable",
    )
