import pytest

from .conftest import API

pytestmark = pytest.mark.asyncio


class TestAdminOverview:
    """Admin home counts and the audit log."""

    async def test_dashboard_counts(self, client, admin_headers, designer, other_designer):
        response = await client.get(f"{API}/admin/dashboard", headers=admin_headers)
        assert response.status_code == 200
        stats = response.json()["statistics"]
        assert stats["activeDesigners"] == 2
        assert stats["artTypes"] == 4
        assert stats["demandsToday"] == 0
        assert stats["unviewedFeedbacks"] == 0

    async def test_logs_record_admin_writes(self, client, admin_headers):
        await client.post(f"{API}/tags/", json={"name": "Fontes"}, headers=admin_headers)
        await client.post(f"{API}/users/", json={"name": "Carla"}, headers=admin_headers)

        response = await client.get(f"{API}/admin/logs", params={"entityType": "tag"}, headers=admin_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["logs"][0]["action"] == "create"

    async def test_logs_are_admin_only(self, client, designer_headers):
        response = await client.get(f"{API}/admin/logs", headers=designer_headers)
        assert response.status_code == 403
