"""Flat-file artifact store: one text file per user id."""

import os
import tempfile
from functools import lru_cache
from pathlib import Path

from userhub.core.config import get_settings

ARTIFACT_SUFFIX = ".txt"
# mkstemp creates 0600 files; stored artifacts are 0644.
ARTIFACT_MODE = 0o644


class ArtifactStore:
    """Key-addressed text blobs stored as <root>/<user_id>.txt."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def path_for(self, user_id: str) -> Path:
        return self.root / f"{user_id}{ARTIFACT_SUFFIX}"

    def exists(self, user_id: str) -> bool:
        return self.path_for(user_id).is_file()

    def write(self, user_id: str, content: str) -> None:
        """Write content for user_id, replacing any previous artifact atomically."""
        self.root.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.root, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            os.chmod(tmp_name, ARTIFACT_MODE)
            os.replace(tmp_name, self.path_for(user_id))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def read(self, user_id: str) -> str | None:
        """Return the artifact text, or None when no artifact exists."""
        try:
            return self.path_for(user_id).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def delete(self, user_id: str) -> bool:
        """Remove the artifact. Returns False if it was already absent."""
        try:
            self.path_for(user_id).unlink()
        except FileNotFoundError:
            return False
        return True

    def list_ids(self) -> list[str]:
        """Ids of every stored artifact, sorted."""
        if not self.root.is_dir():
            return []
        return sorted(p.stem for p in self.root.glob(f"*{ARTIFACT_SUFFIX}") if p.is_file())


@lru_cache
def get_artifact_store() -> ArtifactStore:
    """Dependency returning the store rooted at ARTIFACT_DIR."""
    return ArtifactStore(get_settings().ARTIFACT_DIR)
