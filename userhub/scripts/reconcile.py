"""
Report record/artifact divergence left by partial writes. Run from project root:
  python -m userhub.scripts.reconcile [--prune-orphans]

Exit codes: 0 consistent, 1 divergence remains, 2 the check itself failed.
"""
import argparse
import logging
import sys

from userhub.core.artifacts import get_artifact_store
from userhub.core.config import get_settings
from userhub.core.database import SessionLocal
from userhub.core.logging_config import setup_logging
from userhub.services.reconcile import find_divergence

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Compare user records with their artifact files."
    )
    parser.add_argument(
        "--prune-orphans",
        action="store_true",
        help="Delete artifact files that have no matching user record",
    )
    args = parser.parse_args(argv)
    setup_logging(get_settings().LOG_LEVEL)

    db = SessionLocal()
    try:
        report = find_divergence(db, get_artifact_store(), prune_orphans=args.prune_orphans)
    except Exception as e:
        logger.exception("Reconcile failed: %s", e)
        return 2
    finally:
        db.close()

    for user_id in report.missing_artifacts:
        print(f"missing artifact: {user_id}")
    for user_id in report.orphan_artifacts:
        marker = " (pruned)" if user_id in report.pruned else ""
        print(f"orphan artifact: {user_id}{marker}")
    logger.info(
        "Reconcile completed: missing_artifacts=%s orphan_artifacts=%s pruned=%s",
        len(report.missing_artifacts),
        len(report.orphan_artifacts),
        len(report.pruned),
    )
    return 0 if report.consistent else 1


if __name__ == "__main__":
    sys.exit(main())
