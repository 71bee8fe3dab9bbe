"""Unit tests for warden.services.tokens: issuance, TTL expiry, opacity and privilege re-check."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from warden.core.errors import ApiError, ErrorKind
from warden.models import Token
from warden.schemas.auth import Principal
from warden.services import users
from warden.services.tokens import (
    TokenRecord,
    TokenState,
    classify_token,
    issue_token,
    validate_token,
)
from tests.support import build_test_context

TTL = 1000 * 60 * 60 * 24 * 7 * 2


def _store_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection reset by peer"))


class TokenServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.context = build_test_context()
        self.db = self.context.session_factory()
        self.user = users.create_user(self.db, "alice", "longenough1", now=1_000)

    def tearDown(self) -> None:
        self.db.close()


class TestIssueAndValidate(TokenServiceTestCase):
    """validate_token(issue_token(U)) resolves to U's id and current privilege."""

    def test_round_trip(self) -> None:
        issued = issue_token(self.db, self.user.user_id, now=5_000)
        self.assertEqual(issued.user_id, self.user.user_id)
        principal = validate_token(self.db, issued.token_string, TTL, now=5_000)
        self.assertEqual(principal, Principal(user_id=self.user.user_id, is_admin=False))

    def test_issue_writes_exactly_one_row(self) -> None:
        issued = issue_token(self.db, self.user.user_id, now=5_000)
        rows = self.db.query(Token).all()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].token_string, issued.token_string)
        self.assertEqual(rows[0].creation_time, 5_000)

    def test_tokens_are_unique_across_issues(self) -> None:
        other = users.create_user(self.db, "bob", "longenough2", now=1_000)
        tokens = {
            issue_token(self.db, user_id).token_string
            for user_id in [self.user.user_id, other.user_id] * 100
        }
        self.assertEqual(len(tokens), 200)


class TestExpiry(TokenServiceTestCase):
    """A token is valid while elapsed <= TTL; the bound is inclusive."""

    def test_elapsed_equal_to_ttl_is_valid(self) -> None:
        issued = issue_token(self.db, self.user.user_id, now=10_000)
        principal = validate_token(self.db, issued.token_string, 500, now=10_500)
        self.assertEqual(principal.user_id, self.user.user_id)

    def test_elapsed_past_ttl_is_unauthorized(self) -> None:
        issued = issue_token(self.db, self.user.user_id, now=10_000)
        with self.assertRaises(ApiError) as ctx:
            validate_token(self.db, issued.token_string, 500, now=10_501)
        self.assertIs(ctx.exception.kind, ErrorKind.UNAUTHORIZED)

    def test_default_ttl_is_two_weeks(self) -> None:
        self.assertEqual(self.context.settings.TOKEN_VALID_DURATION_MILLIS, TTL)


class TestUnknownAndExpiredAreIndistinguishable(TokenServiceTestCase):
    """Expired and never-issued tokens raise the same error with the same message."""

    def test_same_error(self) -> None:
        issued = issue_token(self.db, self.user.user_id, now=0)
        with self.assertRaises(ApiError) as expired:
            validate_token(self.db, issued.token_string, TTL, now=TTL + 1)
        with self.assertRaises(ApiError) as unknown:
            validate_token(self.db, "A" * 43, TTL, now=TTL + 1)
        self.assertIs(expired.exception.kind, unknown.exception.kind)
        self.assertEqual(expired.exception.status_code, unknown.exception.status_code)
        self.assertEqual(expired.exception.message, unknown.exception.message)


class TestPrivilegeRecheck(TokenServiceTestCase):
    """is_admin comes from the user row at validation time, not from issuance."""

    def test_promotion_and_revocation_apply_to_existing_token(self) -> None:
        issued = issue_token(self.db, self.user.user_id, now=1_000)

        self.user.is_admin = True
        self.db.commit()
        self.assertTrue(validate_token(self.db, issued.token_string, TTL, now=2_000).is_admin)

        self.user.is_admin = False
        self.db.commit()
        self.assertFalse(validate_token(self.db, issued.token_string, TTL, now=3_000).is_admin)


class TestClassifyToken(unittest.TestCase):
    def test_states(self) -> None:
        record = TokenRecord(user_id=1, creation_time=100, is_admin=False)
        self.assertIs(classify_token(None, 10, 100), TokenState.UNKNOWN)
        self.assertIs(classify_token(record, 10, 110), TokenState.VALID)
        self.assertIs(classify_token(record, 10, 111), TokenState.EXPIRED)


class TestStoreFailures(unittest.TestCase):
    """Store errors surface as INTERNAL_SERVER_ERROR, distinct from UNAUTHORIZED, and are not retried."""

    def test_lookup_failure(self) -> None:
        session = MagicMock()
        session.query.side_effect = _store_error()
        with self.assertRaises(ApiError) as ctx:
            validate_token(session, "A" * 43, TTL)
        self.assertIs(ctx.exception.kind, ErrorKind.INTERNAL_SERVER_ERROR)
        self.assertNotIn("connection reset", ctx.exception.message)
        session.query.assert_called_once()

    def test_insert_failure(self) -> None:
        session = MagicMock()
        session.commit.side_effect = _store_error()
        with self.assertRaises(ApiError) as ctx:
            issue_token(session, 1)
        self.assertIs(ctx.exception.kind, ErrorKind.INTERNAL_SERVER_ERROR)
        session.commit.assert_called_once()
        session.rollback.assert_called_once()


if __name__ == "__main__":
    unittest.main()
