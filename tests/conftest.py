"""Shared pytest fixtures: fake Supabase and OpenAI clients wired into the app."""

import os

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("OPENAI_API_KEY", "sk-test")
os.environ.setdefault("PUBLIC_BASE_URL", "https://api.example.test")
os.environ["RATE_LIMIT"] = "1000/minute"
os.environ["ENHANCE_RATE_LIMIT"] = "5/minute"

from collections import deque  # noqa: E402
from types import SimpleNamespace  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402
from app.core.rate_limit import limiter  # noqa: E402
from app.database.openai_client import get_openai  # noqa: E402
from app.database.supabase_client import get_supabase  # noqa: E402
from app.modules.auth.service import clear_auth_cache  # noqa: E402

TODAY = "2026-10-19"
YESTERDAY = "2026-10-18"


class FakeQuery:
    """Chainable stand-in for a postgrest request builder."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = None
        self.payload = None
        self.filters = []

    def select(self, columns="*", *args, **kwargs):
        self.op = "select"
        self.columns = columns
        return self

    def insert(self, payload, *args, **kwargs):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload, *args, **kwargs):
        self.op = "update"
        self.payload = payload
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def single(self):
        return self

    def maybe_single(self):
        return self

    def execute(self):
        self.db.calls.append(self)
        pending = self.db.responses.get((self.table, self.op))
        data = None
        if pending:
            data = pending.popleft() if len(pending) > 1 else pending[0]
        if isinstance(data, Exception):
            raise data
        return SimpleNamespace(data=data)


class FakeSupabase:
    def __init__(self):
        self.auth = MagicMock()
        self.responses = {}
        self.calls = []

    def respond(self, table, op, *results):
        """Queue results for (table, op); the last one repeats."""
        self.responses[(table, op)] = deque(results)

    def table(self, name):
        return FakeQuery(self, name)

    def calls_for(self, table, op):
        return [c for c in self.calls if c.table == table and c.op == op]


def make_user(user_id="user-1", email="jane@example.com", confirmed=True):
    return SimpleNamespace(
        id=user_id,
        email=email,
        email_confirmed_at="2026-10-19T08:00:00Z" if confirmed else None,
        user_metadata={},
        app_metadata={},
    )


def make_profile_row(user_id="user-1", tokens_used_today=0, last_usage_date=TODAY,
                     token_limit=10000, plan_name="free"):
    return {
        "id": user_id,
        "email": "jane@example.com",
        "tokens_used_today": tokens_used_today,
        "last_usage_date": last_usage_date,
        "subscription_plans": {
            "name": plan_name,
            "token_limit": token_limit,
            "price_per_month": 0,
        },
    }


def make_completion(content="Improved text.", total_tokens=120):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(total_tokens=total_tokens),
    )


@pytest.fixture(name="supabase")
def supabase_fixture():
    return FakeSupabase()


@pytest.fixture(name="llm")
def llm_fixture(mocker):
    llm = mocker.Mock()
    llm.chat.completions.create.return_value = make_completion()
    return llm


@pytest.fixture(name="client")
def client_fixture(supabase, llm):
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_openai] = lambda: llm
    clear_auth_cache()
    limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()
    clear_auth_cache()
