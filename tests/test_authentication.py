"""Tests for app.services.authentication and the bcrypt/JWT helpers in app.core.security."""

import unittest
from unittest.mock import patch

import jwt

from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from app.services import authentication
from app.services.authentication import (
    BAD_CREDENTIALS_MESSAGE,
    AccountDisabled,
    AccountExpired,
    AccountLocked,
    BadCredentials,
    CredentialsExpired,
    authenticate,
)
from app.services.identity_store import IdentityStore
from app.services.seed import create_user
from tests.support import make_settings, memory_session_factory


class TestPasswordHashing(unittest.TestCase):
    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        digest = hash_password("student", rounds=4)
        self.assertNotEqual(digest, "student")
        self.assertTrue(digest.startswith("$2"))
        self.assertTrue(verify_password("student", digest))
        self.assertFalse(verify_password("Student", digest))

    def test_salted(self) -> None:
        self.assertNotEqual(hash_password("same", rounds=4), hash_password("same", rounds=4))

    def test_verify_against_garbage_hash_is_false(self) -> None:
        self.assertFalse(verify_password("x", "not-a-bcrypt-hash"))


class TestSessionTokens(unittest.TestCase):
    def test_round_trip_carries_username_only(self) -> None:
        settings = make_settings()
        payload = decode_access_token(create_access_token("student", settings), settings)
        self.assertEqual(payload["sub"], "student")
        self.assertNotIn("authorities", payload)
        self.assertIn("exp", payload)

    def test_wrong_secret_rejected(self) -> None:
        token = create_access_token("student", make_settings())
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(token, make_settings(JWT_SECRET="another-secret"))


class TestAuthenticate(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.session = memory_session_factory()()
        cls.store = IdentityStore(cls.session)
        create_user(cls.store, "student", "student", ["STUDENT"])
        create_user(cls.store, "admin", "admin", ["ADMIN"])

    @classmethod
    def tearDownClass(cls) -> None:
        cls.session.close()

    def tearDown(self) -> None:
        for flag in ("enabled", "account_non_locked", "account_non_expired", "credentials_non_expired"):
            self.store.update_account_status("student", **{flag: True})
        self.session.expire_all()

    def test_valid_credentials_return_principal(self) -> None:
        p = authenticate(self.store, "student", "student")
        self.assertEqual(p.username, "student")
        self.assertEqual(p.authorities, frozenset({"ROLE_STUDENT"}))

    def test_wrong_password(self) -> None:
        with self.assertRaises(BadCredentials) as ctx:
            authenticate(self.store, "student", "wrong")
        self.assertEqual(str(ctx.exception), BAD_CREDENTIALS_MESSAGE)

    def test_unknown_user_looks_like_wrong_password(self) -> None:
        with self.assertRaises(BadCredentials) as ctx:
            authenticate(self.store, "nobody", "student")
        self.assertEqual(str(ctx.exception), BAD_CREDENTIALS_MESSAGE)

    def test_unknown_user_still_runs_a_password_check(self) -> None:
        with patch.object(authentication, "verify_password", return_value=False) as verify:
            with self.assertRaises(BadCredentials):
                authenticate(self.store, "nobody", "student")
        verify.assert_called_once()

    def test_locked_account(self) -> None:
        self.store.update_account_status("student", account_non_locked=False)
        self.session.expire_all()
        with self.assertRaises(AccountLocked):
            authenticate(self.store, "student", "student")

    def test_disabled_account(self) -> None:
        self.store.update_account_status("student", enabled=False)
        self.session.expire_all()
        with self.assertRaises(AccountDisabled):
            authenticate(self.store, "student", "student")

    def test_expired_account(self) -> None:
        self.store.update_account_status("student", account_non_expired=False)
        self.session.expire_all()
        with self.assertRaises(AccountExpired):
            authenticate(self.store, "student", "student")

    def test_expired_credentials(self) -> None:
        self.store.update_account_status("student", credentials_non_expired=False)
        self.session.expire_all()
        with self.assertRaises(CredentialsExpired):
            authenticate(self.store, "student", "student")

    def test_locked_account_with_wrong_password_reports_bad_credentials(self) -> None:
        self.store.update_account_status("student", account_non_locked=False)
        self.session.expire_all()
        with self.assertRaises(BadCredentials):
            authenticate(self.store, "student", "wrong")


if __name__ == "__main__":
    unittest.main()
