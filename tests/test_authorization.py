"""Unit tests for burger_queen.services.authorization: claims, target parsing, allow/deny rules."""

import unittest

from burger_queen.core.errors import AuthorizationError, ValidationError
from burger_queen.services.authorization import (
    EMPTY_UPDATE_MESSAGE,
    ORDER_STATUSES,
    AuthClaims,
    ByEmail,
    ById,
    Role,
    authorize_create_user,
    authorize_delete_user,
    authorize_list_users,
    authorize_order_delete,
    authorize_order_update,
    authorize_product_write,
    authorize_read_user,
    authorize_update_user,
    can_create_order,
    can_delete_user,
    can_list_users,
    can_read_order,
    can_read_user,
    can_update_user,
    parse_target,
    validate_new_user,
    validate_order_status,
    validate_user_update,
)

HEX_ID = "64b7f0c2a1d3e4f5a6b7c8d9"


def _claims(
    user_id: str = "u1",
    email: str = "a@x.com",
    role: Role = Role.USER,
    this_email: str | None = None,
) -> AuthClaims:
    """Build claims for a caller; this_email defaults to email like a real token."""
    return AuthClaims(
        user_id=user_id,
        email=email,
        role=role,
        this_email=email if this_email is None else this_email,
    )


ADMIN = _claims(user_id="admin1", email="admin@x.com", role=Role.ADMIN)
USER = _claims()


class TestRoleParse(unittest.TestCase):
    """Role.parse normalizes string tags and legacy boolean flags."""

    def test_string_tags(self) -> None:
        self.assertIs(Role.parse("admin"), Role.ADMIN)
        self.assertIs(Role.parse("user"), Role.USER)
        self.assertIs(Role.parse(" Admin "), Role.ADMIN)

    def test_boolean_flag(self) -> None:
        self.assertIs(Role.parse(True), Role.ADMIN)
        self.assertIs(Role.parse(False), Role.USER)

    def test_roles_mapping(self) -> None:
        self.assertIs(Role.parse({"admin": True}), Role.ADMIN)
        self.assertIs(Role.parse({"admin": False}), Role.USER)
        self.assertIs(Role.parse({}), Role.USER)

    def test_unknown_string_raises(self) -> None:
        with self.assertRaises(ValueError):
            Role.parse("chef")

    def test_unsupported_type_raises(self) -> None:
        with self.assertRaises(ValueError):
            Role.parse(42)


class TestAuthClaimsFromTokenPayload(unittest.TestCase):
    """Claims are built from the decoded JWT payload."""

    def test_full_payload(self) -> None:
        claims = AuthClaims.from_token_payload(
            {"userId": "u1", "email": "a@x.com", "role": "admin"}
        )
        self.assertEqual(claims.user_id, "u1")
        self.assertEqual(claims.email, "a@x.com")
        self.assertTrue(claims.is_admin)
        self.assertEqual(claims.this_email, "a@x.com")

    def test_legacy_rol_key(self) -> None:
        claims = AuthClaims.from_token_payload({"userId": "u1", "email": "a@x.com", "rol": "admin"})
        self.assertIs(claims.role, Role.ADMIN)

    def test_unknown_role_is_standard_user(self) -> None:
        claims = AuthClaims.from_token_payload({"userId": "u1", "email": "a@x.com", "role": "chef"})
        self.assertIs(claims.role, Role.USER)

    def test_missing_identity_raises(self) -> None:
        with self.assertRaises(ValueError):
            AuthClaims.from_token_payload({"email": "a@x.com", "role": "user"})
        with self.assertRaises(ValueError):
            AuthClaims.from_token_payload({"userId": "u1", "role": "user"})

    def test_claims_are_immutable(self) -> None:
        with self.assertRaises(AttributeError):
            USER.role = Role.ADMIN  # type: ignore[misc]


class TestParseTarget(unittest.TestCase):
    """'@' means email, 24 hex characters means id, anything else resolves to nothing."""

    def test_email(self) -> None:
        self.assertEqual(parse_target("a@x.com"), ByEmail("a@x.com"))

    def test_hex_id(self) -> None:
        self.assertEqual(parse_target(HEX_ID), ById(HEX_ID))

    def test_hex_id_is_lowercased(self) -> None:
        self.assertEqual(parse_target(HEX_ID.upper()), ById(HEX_ID))

    def test_at_sign_wins_over_hex(self) -> None:
        self.assertIsInstance(parse_target(HEX_ID + "@x"), ByEmail)

    def test_other_strings_do_not_resolve(self) -> None:
        for raw in ("", "u1", "123", HEX_ID[:-1], HEX_ID + "0", "z" * 24):
            with self.subTest(raw=raw):
                self.assertIsNone(parse_target(raw))


class TestListAndCreateUsers(unittest.TestCase):
    """Listing and creating users is admin-only."""

    def test_admin_may_list(self) -> None:
        self.assertTrue(can_list_users(ADMIN))
        authorize_list_users(ADMIN)

    def test_non_admin_denied_list(self) -> None:
        self.assertFalse(can_list_users(USER))
        with self.assertRaises(AuthorizationError) as ctx:
            authorize_list_users(USER)
        self.assertEqual(ctx.exception.status_code, 403)

    def test_non_admin_denied_create(self) -> None:
        with self.assertRaises(AuthorizationError):
            authorize_create_user(USER)
        authorize_create_user(ADMIN)


class TestSelfOrAdmin(unittest.TestCase):
    """Read/update/delete allowed iff target is the caller's id or email, or caller is admin."""

    def test_self_by_id(self) -> None:
        self.assertTrue(can_read_user(USER, "u1"))
        self.assertTrue(can_delete_user(USER, "u1"))
        self.assertTrue(can_update_user(USER, "u1", {"password": "new"}))

    def test_self_by_email(self) -> None:
        self.assertTrue(can_read_user(USER, "a@x.com"))
        self.assertTrue(can_delete_user(USER, "a@x.com"))
        self.assertTrue(can_update_user(USER, "a@x.com", {"password": "new"}))

    def test_self_by_id_in_any_case(self) -> None:
        claims = _claims(user_id=HEX_ID)
        self.assertTrue(can_read_user(claims, HEX_ID.upper()))
        self.assertTrue(can_delete_user(claims, HEX_ID.upper()))
        self.assertFalse(can_read_user(claims, ("0" * 24).upper()))

    def test_other_user_denied(self) -> None:
        for target in ("other@x.com", HEX_ID, "u2"):
            with self.subTest(target=target):
                self.assertFalse(can_read_user(USER, target))
                self.assertFalse(can_delete_user(USER, target))
                self.assertFalse(can_update_user(USER, target, {"password": "new"}))
                with self.assertRaises(AuthorizationError):
                    authorize_read_user(USER, target)
                with self.assertRaises(AuthorizationError):
                    authorize_delete_user(USER, target)
                with self.assertRaises(AuthorizationError):
                    authorize_update_user(USER, target, {"password": "new"})

    def test_admin_allowed_on_anyone(self) -> None:
        for target in ("other@x.com", HEX_ID, "not-even-an-id"):
            with self.subTest(target=target):
                authorize_read_user(ADMIN, target)
                authorize_delete_user(ADMIN, target)
                authorize_update_user(ADMIN, target, {"role": "admin"})

    def test_legacy_this_email_signal_counts(self) -> None:
        claims = _claims(email="a@x.com", this_email="old@x.com")
        self.assertTrue(can_read_user(claims, "old@x.com"))
        self.assertTrue(can_read_user(claims, "a@x.com"))
        self.assertFalse(can_read_user(claims, "b@x.com"))


class TestRoleChange(unittest.TestCase):
    """A non-admin may not send a role, not even for their own record."""

    def test_self_update_with_role_denied(self) -> None:
        self.assertFalse(can_update_user(USER, "a@x.com", {"role": "admin"}))
        with self.assertRaises(AuthorizationError):
            authorize_update_user(USER, "a@x.com", {"role": "admin"})

    def test_self_update_with_own_role_still_denied(self) -> None:
        with self.assertRaises(AuthorizationError):
            authorize_update_user(USER, "u1", {"role": "user"})

    def test_self_update_without_role_allowed(self) -> None:
        authorize_update_user(USER, "u1", {"email": "new@x.com", "password": "pw"})

    def test_admin_may_change_roles(self) -> None:
        self.assertTrue(can_update_user(ADMIN, "a@x.com", {"role": "admin"}))


class TestValidateUserUpdate(unittest.TestCase):
    """Empty updates are rejected for every caller."""

    def test_empty_body(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            validate_user_update({})
        self.assertEqual(ctx.exception.message, EMPTY_UPDATE_MESSAGE)
        self.assertEqual(ctx.exception.status_code, 400)

    def test_empty_email_or_password(self) -> None:
        for payload in ({"email": ""}, {"password": ""}, {"email": "a@x.com", "password": ""}):
            with self.subTest(payload=payload):
                with self.assertRaises(ValidationError):
                    validate_user_update(payload)

    def test_non_empty_passes(self) -> None:
        validate_user_update({"password": "new"})
        validate_user_update({"role": "admin"})


class TestValidateNewUser(unittest.TestCase):
    """Creation requires email, password and role."""

    def test_all_fields(self) -> None:
        email, password, role = validate_new_user(
            {"email": "a@x.com", "password": "pw", "role": "admin"}
        )
        self.assertEqual((email, password, role), ("a@x.com", "pw", Role.ADMIN))

    def test_missing_fields(self) -> None:
        for payload in (
            {"password": "pw", "role": "user"},
            {"email": "a@x.com", "role": "user"},
            {"email": "a@x.com", "password": "pw"},
            {"email": "a@x.com", "password": "pw", "role": ""},
            {"email": "", "password": "pw", "role": "user"},
        ):
            with self.subTest(payload=payload):
                with self.assertRaises(ValidationError):
                    validate_new_user(payload)

    def test_unknown_role(self) -> None:
        with self.assertRaises(ValidationError):
            validate_new_user({"email": "a@x.com", "password": "pw", "role": "chef"})


class TestProductsAndOrders(unittest.TestCase):
    """Product writes and order update/delete are admin-only; order read/create are open."""

    def test_product_write(self) -> None:
        authorize_product_write(ADMIN)
        with self.assertRaises(AuthorizationError):
            authorize_product_write(USER)

    def test_order_read_and_create_open_to_all(self) -> None:
        for claims in (ADMIN, USER):
            self.assertTrue(can_read_order(claims))
            self.assertTrue(can_create_order(claims))

    def test_order_update_and_delete(self) -> None:
        authorize_order_update(ADMIN)
        authorize_order_delete(ADMIN)
        with self.assertRaises(AuthorizationError):
            authorize_order_update(USER)
        with self.assertRaises(AuthorizationError):
            authorize_order_delete(USER)


class TestOrderStatus(unittest.TestCase):
    """preparing is recognized alongside the four documented states."""

    def test_recognized(self) -> None:
        for status in ("pending", "canceled", "preparing", "delivering", "delivered"):
            with self.subTest(status=status):
                self.assertEqual(validate_order_status(status), status)
        self.assertEqual(len(ORDER_STATUSES), 5)

    def test_unrecognized(self) -> None:
        for status in ("done", "", None, "Pending", ["pending"]):
            with self.subTest(status=status):
                with self.assertRaises(ValidationError):
                    validate_order_status(status)


if __name__ == "__main__":
    unittest.main()
