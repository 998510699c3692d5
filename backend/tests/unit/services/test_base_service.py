from __future__ import annotations

import pytest

from sessionauth.services._shared.base import BaseService, ServiceContext
from sessionauth.services._shared.errors import AuthorizationError
from sessionauth.services._shared.policies.common import is_owner
from tests.helpers.utils import not_raises


def test_is_owner_compares_as_strings():
    assert is_owner(actor_id="3", owner_id=3)
    assert not is_owner(actor_id=None, owner_id="3")
    assert not is_owner(actor_id="4", owner_id="3")


def test_ensure_owner_allows_owner():
    with not_raises(AuthorizationError):
        BaseService().ensure_owner("3", "3")


def test_ensure_owner_rejects_other_account():
    with pytest.raises(AuthorizationError, match="own resources"):
        BaseService(ctx=ServiceContext(actor_id="4")).ensure_owner("4", "3")


def test_ensure_owner_custom_message():
    with pytest.raises(AuthorizationError, match="Not your note"):
        BaseService().ensure_owner(None, "3", msg="Not your note")
