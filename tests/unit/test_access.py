"""Tests for the administrative permission and the reentrancy guard."""

import pytest

from exchange.access import Permissions, ReentrancyGuard
from exchange.errors import Reentrancy, Unauthorized
from tests.helpers import ADMIN, ALICE


class TestPermissions:
    def test_admin_holds_permission(self):
        permissions = Permissions(ADMIN)
        assert permissions.has_permission(ADMIN)
        assert not permissions.has_permission(ALICE)

    def test_require_rejects_others(self):
        permissions = Permissions(ADMIN)
        permissions.require(ADMIN)
        with pytest.raises(Unauthorized):
            permissions.require(ALICE)


class TestReentrancyGuard:
    def test_flag_held_inside_section(self):
        guard = ReentrancyGuard()
        assert not guard.locked
        with guard.enter("deposit"):
            assert guard.locked
        assert not guard.locked

    def test_nested_entry_rejected_without_releasing(self):
        guard = ReentrancyGuard()
        with guard.enter("deposit"):
            with pytest.raises(Reentrancy, match="deposit"):
                with guard.enter("withdraw"):
                    pass
            assert guard.locked
        assert not guard.locked

    def test_released_after_exception(self):
        guard = ReentrancyGuard()
        with pytest.raises(RuntimeError):
            with guard.enter("swap"):
                raise RuntimeError("boom")
        assert not guard.locked
        with guard.enter("swap"):
            pass
