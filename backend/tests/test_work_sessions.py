from datetime import datetime

import pytest

from app.core.timeutils import studio_tz
from app.routers import work_sessions

from .conftest import API

pytestmark = pytest.mark.asyncio


def freeze(monkeypatch, *args):
    moment = datetime(*args, tzinfo=studio_tz())
    monkeypatch.setattr(work_sessions, "local_now", lambda: moment)
    return moment


class TestClockIn:
    """Daily clock-in rules."""

    async def test_before_workday_start_is_refused(self, client, monkeypatch, designer, designer_headers):
        freeze(monkeypatch, 2024, 5, 15, 5, 30)
        response = await client.post(f"{API}/work-sessions/", json={"userId": designer.id}, headers=designer_headers)
        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "BEFORE_WORKDAY_START"

    async def test_second_clock_in_returns_existing(self, client, monkeypatch, designer, designer_headers):
        freeze(monkeypatch, 2024, 5, 15, 8, 0)
        first = await client.post(f"{API}/work-sessions/", json={"userId": designer.id}, headers=designer_headers)
        assert first.status_code == 201

        freeze(monkeypatch, 2024, 5, 15, 14, 0)
        second = await client.post(f"{API}/work-sessions/", json={"userId": designer.id}, headers=designer_headers)
        assert second.status_code == 200
        assert second.json()["id"] == first.json()["id"]

    async def test_next_day_opens_a_new_session(self, client, monkeypatch, designer, designer_headers):
        freeze(monkeypatch, 2024, 5, 15, 8, 0)
        first = await client.post(f"{API}/work-sessions/", json={"userId": designer.id}, headers=designer_headers)

        freeze(monkeypatch, 2024, 5, 16, 7, 0)
        second = await client.post(f"{API}/work-sessions/", json={"userId": designer.id}, headers=designer_headers)
        assert second.status_code == 201
        assert second.json()["id"] != first.json()["id"]

    async def test_unknown_user(self, client, monkeypatch, admin_headers):
        freeze(monkeypatch, 2024, 5, 15, 8, 0)
        response = await client.post(f"{API}/work-sessions/", json={"userId": 9999}, headers=admin_headers)
        assert response.status_code == 404

    async def test_listing_is_scoped_for_designers(self, client, monkeypatch, designer, other_designer, designer_headers, admin_headers):
        freeze(monkeypatch, 2024, 5, 15, 8, 0)
        await client.post(f"{API}/work-sessions/", json={"userId": designer.id}, headers=admin_headers)
        await client.post(f"{API}/work-sessions/", json={"userId": other_designer.id}, headers=admin_headers)

        own = await client.get(f"{API}/work-sessions/", headers=designer_headers)
        assert {s["userId"] for s in own.json()} == {designer.id}

        everyone = await client.get(f"{API}/work-sessions/", headers=admin_headers)
        assert len(everyone.json()) == 2
