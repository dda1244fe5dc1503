"""Unit tests for app.services.role_policy: create/update/delete decision tables."""

import unittest

from app.models.user import Role
from app.services.role_policy import (
    ADMIN_CAPABILITIES,
    MANAGER_CAPABILITIES,
    STAFF_CAPABILITIES,
    can_create,
    can_delete,
    can_update,
    role_capabilities,
    role_display,
)

A, M, S = Role.ADMIN, Role.MANAGER, Role.STAFF


class TestCanCreate(unittest.TestCase):
    """Admin creates managers and staff; manager creates staff; staff creates nobody."""

    EXPECTED = {
        (A, A): False, (A, M): True, (A, S): True,
        (M, A): False, (M, M): False, (M, S): True,
        (S, A): False, (S, M): False, (S, S): False,
    }

    def test_full_table(self) -> None:
        for (actor, target), allowed in self.EXPECTED.items():
            with self.subTest(actor=actor.value, target=target.value):
                self.assertEqual(can_create(actor, target), allowed)

    def test_nobody_creates_a_peer_or_superior(self) -> None:
        for actor in Role:
            for target in Role:
                if target.rank >= actor.rank:
                    with self.subTest(actor=actor.value, target=target.value):
                        self.assertFalse(can_create(actor, target))

    def test_creation_follows_rank_order(self) -> None:
        self.assertGreater(A.rank, M.rank)
        self.assertGreater(M.rank, S.rank)
        for actor in (A, M):
            for target in Role:
                with self.subTest(actor=actor.value, target=target.value):
                    self.assertEqual(can_create(actor, target), target.rank < actor.rank)

    def test_raw_string_role_is_rejected(self) -> None:
        with self.assertRaises(AssertionError):
            can_create("superuser", S)  # type: ignore[arg-type]


class TestCanUpdate(unittest.TestCase):
    """Update rights depend on the target's current role and whether the role field changes."""

    def test_admin_updates_any_target_without_role_change(self) -> None:
        for target in Role:
            with self.subTest(target=target.value):
                self.assertTrue(can_update(A, target))

    def test_admin_changes_staff_and_manager_roles(self) -> None:
        self.assertTrue(can_update(A, S, new_role=M))
        self.assertTrue(can_update(A, M, new_role=S))
        self.assertTrue(can_update(A, S, new_role=A))

    def test_admin_cannot_move_admin_off_admin(self) -> None:
        self.assertFalse(can_update(A, A, new_role=M))
        self.assertFalse(can_update(A, A, new_role=S))

    def test_admin_role_noop_on_admin_is_allowed(self) -> None:
        self.assertTrue(can_update(A, A, new_role=A))

    def test_admin_role_change_without_new_role_on_admin_is_denied(self) -> None:
        self.assertFalse(can_update(A, A, changing_role=True))

    def test_manager_updates_staff_only(self) -> None:
        self.assertTrue(can_update(M, S))
        self.assertFalse(can_update(M, M))
        self.assertFalse(can_update(M, A))

    def test_manager_never_touches_role_field(self) -> None:
        self.assertFalse(can_update(M, S, changing_role=True))
        self.assertFalse(can_update(M, S, new_role=S))
        self.assertFalse(can_update(M, S, new_role=M))

    def test_staff_updates_nobody(self) -> None:
        for target in Role:
            with self.subTest(target=target.value):
                self.assertFalse(can_update(S, target))
                self.assertFalse(can_update(S, target, new_role=S))


class TestCanDelete(unittest.TestCase):
    """Only staff accounts can be deleted, and only by admins or managers."""

    EXPECTED = {
        (A, A): False, (A, M): False, (A, S): True,
        (M, A): False, (M, M): False, (M, S): True,
        (S, A): False, (S, M): False, (S, S): False,
    }

    def test_full_table(self) -> None:
        for (actor, target), allowed in self.EXPECTED.items():
            with self.subTest(actor=actor.value, target=target.value):
                self.assertEqual(can_delete(actor, target), allowed)


class TestProfileHelpers(unittest.TestCase):
    """Static role display names and capability summaries."""

    def test_display_names(self) -> None:
        self.assertEqual(role_display(A), "System Administrator")
        self.assertEqual(role_display(M), "Management Team")
        self.assertEqual(role_display(S), "Staff Member")

    def test_capabilities_by_role(self) -> None:
        self.assertIs(role_capabilities(A), ADMIN_CAPABILITIES)
        self.assertIs(role_capabilities(M), MANAGER_CAPABILITIES)
        self.assertIs(role_capabilities(S), STAFF_CAPABILITIES)

    def test_capability_flags_narrow_down_the_hierarchy(self) -> None:
        self.assertTrue(ADMIN_CAPABILITIES.can_manage_roles)
        self.assertTrue(MANAGER_CAPABILITIES.can_manage_users)
        self.assertFalse(MANAGER_CAPABILITIES.can_manage_roles)
        self.assertFalse(STAFF_CAPABILITIES.can_manage_users)
        self.assertIn("Full system access", ADMIN_CAPABILITIES.access_permissions)
        self.assertIn("Staff scheduling", MANAGER_CAPABILITIES.access_permissions)
        self.assertIn("Customer service", STAFF_CAPABILITIES.access_permissions)


if __name__ == "__main__":
    unittest.main()
