import random
from datetime import date

import pytest

from app.modules.auth.service import clear_auth_cache
from tests.fake_supabase import FakeSupabase

WEEK = date(2024, 6, 3)  # a Monday


def make_group(group_id: str, members, name: str = None) -> dict:
    return {
        "groups": [{"id": group_id, "name": name or f"Group {group_id}", "created_by": "coach-1"}],
        "group_members": [
            {"id": f"{group_id}-{m}", "group_id": group_id, "user_id": m} for m in members
        ],
    }


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def fake_supabase():
    def _build(tables=None):
        return FakeSupabase(tables)
    return _build


@pytest.fixture(autouse=True)
def _clear_auth_cache():
    clear_auth_cache()
    yield
    clear_auth_cache()
