"""Tests for the create_user CLI using an in-memory database."""

import unittest
from unittest.mock import patch

from app.scripts import create_user as script
from app.services.identity_resolver import resolve
from app.services.identity_store import IdentityStore
from tests.support import memory_session_factory


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        self.factory = memory_session_factory()
        patcher = patch.object(script, "SessionLocal", self.factory)
        patcher.start()
        self.addCleanup(patcher.stop)
        init_patcher = patch.object(script, "init_db")
        init_patcher.start()
        self.addCleanup(init_patcher.stop)

    def test_creates_user_with_roles(self) -> None:
        code = script.main(["teacher2", "s3cret-pass", "admin", "student", "--email", "t2@example.com"])
        self.assertEqual(code, 0)
        session = self.factory()
        try:
            p = resolve(IdentityStore(session), "teacher2")
        finally:
            session.close()
        self.assertEqual(p.authorities, frozenset({"ROLE_ADMIN", "ROLE_STUDENT"}))

    def test_default_role_is_student(self) -> None:
        self.assertEqual(script.main(["pupil", "pupil-pass"]), 0)
        session = self.factory()
        try:
            p = resolve(IdentityStore(session), "pupil")
        finally:
            session.close()
        self.assertEqual(p.authorities, frozenset({"ROLE_STUDENT"}))

    def test_duplicate_username_fails(self) -> None:
        self.assertEqual(script.main(["dup", "dup-pass"]), 0)
        self.assertEqual(script.main(["dup", "dup-pass"]), 1)

    def test_short_password_fails(self) -> None:
        self.assertEqual(script.main(["shorty", "abc"]), 1)


if __name__ == "__main__":
    unittest.main()
