"""Find users whose record and artifact have diverged after a partial write."""

import logging
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.orm import Session

from userhub.core.artifacts import ArtifactStore
from userhub.models import User

logger = logging.getLogger(__name__)


@dataclass
class ReconcileReport:
    """Ids of records without an artifact and artifacts without a record."""

    missing_artifacts: list[str] = field(default_factory=list)
    orphan_artifacts: list[str] = field(default_factory=list)
    pruned: list[str] = field(default_factory=list)

    @property
    def consistent(self) -> bool:
        remaining = set(self.orphan_artifacts) - set(self.pruned)
        return not self.missing_artifacts and not remaining


def find_divergence(
    session: Session, artifacts: ArtifactStore, prune_orphans: bool = False
) -> ReconcileReport:
    """
    Compare record ids with artifact ids.

    A record with no artifact is reported only: it is a valid state after an
    update that never had an artifact, so nothing is rewritten. Orphan
    artifacts (no record) are deleted when prune_orphans is set.
    """
    record_ids = {str(uid) for uid in session.scalars(select(User.id)).all()}
    artifact_ids = set(artifacts.list_ids())

    report = ReconcileReport(
        missing_artifacts=sorted(record_ids - artifact_ids),
        orphan_artifacts=sorted(artifact_ids - record_ids),
    )
    if prune_orphans:
        for user_id in report.orphan_artifacts:
            if artifacts.delete(user_id):
                report.pruned.append(user_id)
        if report.pruned:
            logger.info("Pruned orphan artifacts: count=%s", len(report.pruned))
    return report
