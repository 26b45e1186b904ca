"""Tests for the create_user operator script."""

import json
import tempfile
import unittest
import uuid
from pathlib import Path
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from userhub.core.artifacts import ArtifactStore
from userhub.models import Base, User
from userhub.scripts import create_user as create_user_cli


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        patcher = patch("userhub.core.security.BCRYPT_ROUNDS", 4)
        patcher.start()
        self.addCleanup(patcher.stop)
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)
        self.addCleanup(engine.dispose)
        self.Session = sessionmaker(bind=engine)
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.dir = Path(tmp.name)
        self.artifacts = ArtifactStore(self.dir / "users")

    def _run(self, path: Path) -> int:
        with patch.object(create_user_cli, "SessionLocal", self.Session), patch.object(
            create_user_cli, "get_artifact_store", return_value=self.artifacts
        ):
            return create_user_cli.main([str(path)])

    def test_creates_user_from_file(self) -> None:
        doc = self.dir / "ann.json"
        doc.write_text(json.dumps({"name": "Ann", "password": "pw", "data": "note"}))
        self.assertEqual(self._run(doc), 0)
        with self.Session() as db:
            rows = db.query(User).all()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].name, "Ann")
        self.assertEqual(self.artifacts.read(str(rows[0].id)), "note")

    def test_invalid_document_fails(self) -> None:
        doc = self.dir / "bad.json"
        doc.write_text("not json")
        self.assertEqual(self._run(doc), 1)

    def test_missing_file_fails(self) -> None:
        self.assertEqual(self._run(self.dir / f"{uuid.uuid4()}.json"), 1)


if __name__ == "__main__":
    unittest.main()
