"""Tests for app.services.identity_store against an in-memory SQLite database."""

import unittest

from sqlalchemy import func, select

from app.models import Role, User, users_roles
from app.services.identity_store import IdentityStore
from tests.support import memory_session_factory


def _user(username: str = "alice", **kwargs: object) -> User:
    values: dict[str, object] = {"password_hash": "$2b$12$fakehashfakehashfakehash", "email": None}
    values.update(kwargs)
    return User(username=username, **values)


class IdentityStoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.session = memory_session_factory()()
        self.store = IdentityStore(self.session)

    def tearDown(self) -> None:
        self.session.close()


class TestLookups(IdentityStoreTestCase):
    def test_find_user_by_username_exact_match(self) -> None:
        self.store.save(_user("alice"))
        found = self.store.find_user_by_username("alice")
        self.assertIsNotNone(found)
        self.assertEqual(found.username, "alice")

    def test_find_user_is_case_sensitive(self) -> None:
        self.store.save(_user("alice"))
        self.assertIsNone(self.store.find_user_by_username("Alice"))
        self.assertIsNone(self.store.find_user_by_username("ALICE"))

    def test_find_user_missing_returns_none(self) -> None:
        self.assertIsNone(self.store.find_user_by_username("nobody"))

    def test_find_role_by_name(self) -> None:
        self.store.save(Role(name="ADMIN"))
        self.assertEqual(self.store.find_role_by_name("ADMIN").name, "ADMIN")
        self.assertIsNone(self.store.find_role_by_name("admin"))

    def test_new_user_gets_active_status_defaults(self) -> None:
        user = self.store.save(_user("alice"))
        self.assertTrue(user.enabled)
        self.assertTrue(user.account_non_locked)
        self.assertTrue(user.account_non_expired)
        self.assertTrue(user.credentials_non_expired)


class TestSave(IdentityStoreTestCase):
    def test_save_role_twice_keeps_one_row(self) -> None:
        first = self.store.save(Role(name="STUDENT"))
        second = self.store.save(Role(name="STUDENT"))
        self.assertEqual(first.id, second.id)
        count = self.session.execute(select(func.count()).select_from(Role)).scalar_one()
        self.assertEqual(count, 1)

    def test_save_user_twice_updates_in_place(self) -> None:
        first = self.store.save(_user("bob", email="old@example.com"))
        second = self.store.save(_user("bob", email="new@example.com"))
        self.assertEqual(first.id, second.id)
        self.assertEqual(self.store.find_user_by_username("bob").email, "new@example.com")
        count = self.session.execute(select(func.count()).select_from(User)).scalar_one()
        self.assertEqual(count, 1)

    def test_save_rejects_empty_names(self) -> None:
        with self.assertRaises(ValueError):
            self.store.save(Role(name=""))
        with self.assertRaises(ValueError):
            self.store.save(_user("  "))

    def test_save_rejects_other_types(self) -> None:
        with self.assertRaises(TypeError):
            self.store.save("alice")  # type: ignore[arg-type]


class TestRoleAssignment(IdentityStoreTestCase):
    def test_assign_role_is_idempotent(self) -> None:
        user = self.store.save(_user("carol"))
        role = self.store.save(Role(name="STUDENT"))
        self.assertTrue(self.store.assign_role(user, role))
        self.assertFalse(self.store.assign_role(user, role))
        count = self.session.execute(select(func.count()).select_from(users_roles)).scalar_one()
        self.assertEqual(count, 1)

    def test_find_roles_for_user(self) -> None:
        user = self.store.save(_user("dave"))
        other = self.store.save(_user("erin"))
        admin = self.store.save(Role(name="ADMIN"))
        student = self.store.save(Role(name="STUDENT"))
        self.store.assign_role(user, admin)
        self.store.assign_role(user, student)
        self.store.assign_role(other, student)
        self.assertEqual(
            sorted(r.name for r in self.store.find_roles_for_user(user)),
            ["ADMIN", "STUDENT"],
        )
        self.assertEqual([r.name for r in self.store.find_roles_for_user(other)], ["STUDENT"])

    def test_user_without_roles(self) -> None:
        user = self.store.save(_user("frank"))
        self.assertEqual(self.store.find_roles_for_user(user), [])


class TestAccountStatus(IdentityStoreTestCase):
    def test_lock_and_unlock(self) -> None:
        self.store.save(_user("gina"))
        self.assertTrue(self.store.update_account_status("gina", account_non_locked=False))
        self.session.expire_all()
        self.assertFalse(self.store.find_user_by_username("gina").account_non_locked)
        self.assertTrue(self.store.update_account_status("gina", account_non_locked=True))
        self.session.expire_all()
        self.assertTrue(self.store.find_user_by_username("gina").account_non_locked)

    def test_disable_only_touches_one_user(self) -> None:
        self.store.save(_user("hank"))
        self.store.save(_user("ivy"))
        self.store.update_account_status("hank", enabled=False)
        self.session.expire_all()
        self.assertFalse(self.store.find_user_by_username("hank").enabled)
        self.assertTrue(self.store.find_user_by_username("ivy").enabled)

    def test_unknown_user_returns_false(self) -> None:
        self.assertFalse(self.store.update_account_status("ghost", enabled=False))

    def test_unknown_flag_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.store.update_account_status("gina", is_admin=True)
        with self.assertRaises(ValueError):
            self.store.update_account_status("gina")

    def test_list_users_ordered_by_id(self) -> None:
        for name in ("zed", "amy", "max"):
            self.store.save(_user(name))
        self.assertEqual([u.username for u in self.store.list_users()], ["zed", "amy", "max"])


if __name__ == "__main__":
    unittest.main()
