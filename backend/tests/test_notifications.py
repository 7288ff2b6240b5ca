import pytest

from .conftest import API, bearer

pytestmark = pytest.mark.asyncio


async def notify(client, headers, designer_id, **fields):
    payload = {"designerId": designer_id, "h1": "Reunião às 14h"}
    payload.update(fields)
    return await client.post(f"{API}/designer-notifications/", json=payload, headers=headers)


class TestDesignerNotifications:
    """Banner notifications for designers."""

    async def test_create(self, client, admin_headers, designer):
        response = await notify(client, admin_headers, designer.id, type="urgent")
        assert response.status_code == 201
        body = response.json()
        assert body["type"] == "urgent"
        assert body["enabled"] is True
        assert body["designerName"] == designer.name

    async def test_requires_a_heading(self, client, admin_headers, designer):
        response = await notify(client, admin_headers, designer.id, h1="  ", h2=None, h3="")
        assert response.status_code == 400

    async def test_invalid_type(self, client, admin_headers, designer):
        response = await notify(client, admin_headers, designer.id, type="critical")
        assert response.status_code == 422

    async def test_unknown_designer(self, client, admin_headers):
        response = await notify(client, admin_headers, 9999)
        assert response.status_code == 404

    async def test_latest_enabled_for_designer(self, client, admin_headers, designer, designer_headers):
        older = (await notify(client, admin_headers, designer.id, h1="Primeira")).json()
        newer = (await notify(client, admin_headers, designer.id, h1="Segunda")).json()

        await client.patch(
            f"{API}/designer-notifications/{newer['id']}/toggle",
            json={"enabled": False},
            headers=admin_headers,
        )

        response = await client.get(f"{API}/designer-notifications/designer/{designer.id}", headers=designer_headers)
        assert response.status_code == 200
        assert response.json()["id"] == older["id"]

    async def test_no_enabled_notification(self, client, designer, designer_headers):
        response = await client.get(f"{API}/designer-notifications/designer/{designer.id}", headers=designer_headers)
        assert response.status_code == 404

    async def test_designer_cannot_read_someone_elses(self, client, designer, other_designer):
        response = await client.get(
            f"{API}/designer-notifications/designer/{designer.id}",
            headers=bearer(other_designer),
        )
        assert response.status_code == 403

    async def test_update_cannot_empty_headings(self, client, admin_headers, designer):
        notification = (await notify(client, admin_headers, designer.id)).json()
        response = await client.put(
            f"{API}/designer-notifications/{notification['id']}",
            json={"h1": ""},
            headers=admin_headers,
        )
        assert response.status_code == 400

        ok = await client.put(
            f"{API}/designer-notifications/{notification['id']}",
            json={"h2": "Traga o briefing", "type": "important"},
            headers=admin_headers,
        )
        assert ok.status_code == 200
        assert ok.json()["type"] == "important"
        assert ok.json()["h1"] == "Reunião às 14h"

    async def test_admin_listing_and_delete(self, client, admin_headers, designer, designer_headers):
        notification = (await notify(client, admin_headers, designer.id)).json()

        forbidden = await client.get(f"{API}/designer-notifications/", headers=designer_headers)
        assert forbidden.status_code == 403

        listing = await client.get(f"{API}/designer-notifications/", headers=admin_headers)
        assert [n["id"] for n in listing.json()] == [notification["id"]]

        deleted = await client.delete(f"{API}/designer-notifications/{notification['id']}", headers=admin_headers)
        assert deleted.status_code == 200
