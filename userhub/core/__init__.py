"""Core app configuration, record store and artifact store."""

from userhub.core.artifacts import ArtifactStore, get_artifact_store
from userhub.core.config import get_settings, settings
from userhub.core.database import get_db

__all__ = ["ArtifactStore", "get_artifact_store", "get_settings", "settings", "get_db"]
