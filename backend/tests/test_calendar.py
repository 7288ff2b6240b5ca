import pytest

from .conftest import API

pytestmark = pytest.mark.asyncio


async def observe(client, headers, **fields):
    return await client.post(f"{API}/calendar-observations/", json=fields, headers=headers)


class TestCalendarObservations:
    """One observation per designer per day."""

    async def test_create(self, client, admin_headers, designer):
        response = await observe(client, admin_headers, designerId=designer.id, date="2024-05-15", note="Folga", type="absence")
        assert response.status_code == 201
        assert response.json()["type"] == "absence"
        assert response.json()["designerName"] == designer.name

    @pytest.mark.parametrize("day", ["15/05/2024", "2024-5-15", "2024-13-01"])
    async def test_bad_date(self, client, admin_headers, designer, day):
        response = await observe(client, admin_headers, designerId=designer.id, date=day, note="x")
        assert response.status_code == 400

    async def test_missing_fields(self, client, admin_headers, designer):
        response = await observe(client, admin_headers, designerId=designer.id, date="2024-05-15")
        assert response.status_code == 400

    async def test_duplicate_day(self, client, admin_headers, designer):
        await observe(client, admin_headers, designerId=designer.id, date="2024-05-15", note="Folga")
        response = await observe(client, admin_headers, designerId=designer.id, date="2024-05-15", note="Evento")
        assert response.status_code == 400

    async def test_update(self, client, admin_headers, designer):
        first = (await observe(client, admin_headers, designerId=designer.id, date="2024-05-15", note="Folga")).json()
        await observe(client, admin_headers, designerId=designer.id, date="2024-05-16", note="Curso")

        empty = await client.put(f"{API}/calendar-observations/{first['id']}", json={}, headers=admin_headers)
        assert empty.status_code == 400

        collision = await client.put(
            f"{API}/calendar-observations/{first['id']}", json={"date": "2024-05-16"}, headers=admin_headers
        )
        assert collision.status_code == 400

        moved = await client.put(
            f"{API}/calendar-observations/{first['id']}", json={"date": "2024-05-17", "type": "event"}, headers=admin_headers
        )
        assert moved.status_code == 200
        assert (moved.json()["date"], moved.json()["type"]) == ("2024-05-17", "event")

    async def test_listing_filters_and_order(self, client, admin_headers, designer, other_designer):
        await observe(client, admin_headers, designerId=designer.id, date="2024-05-15", note="A")
        await observe(client, admin_headers, designerId=designer.id, date="2024-05-20", note="B")
        await observe(client, admin_headers, designerId=other_designer.id, date="2024-05-15", note="C")

        own = await client.get(f"{API}/calendar-observations/", params={"designerId": designer.id}, headers=admin_headers)
        assert [o["date"] for o in own.json()] == ["2024-05-20", "2024-05-15"]

        by_day = await client.get(f"{API}/calendar-observations/", params={"date": "2024-05-15"}, headers=admin_headers)
        assert {o["note"] for o in by_day.json()} == {"A", "C"}

    async def test_designers_are_forbidden(self, client, designer_headers):
        response = await client.get(f"{API}/calendar-observations/", headers=designer_headers)
        assert response.status_code == 403

    async def test_delete(self, client, admin_headers, designer):
        observation = (await observe(client, admin_headers, designerId=designer.id, date="2024-05-15", note="A")).json()
        response = await client.delete(f"{API}/calendar-observations/{observation['id']}", headers=admin_headers)
        assert response.status_code == 200

    async def test_get_one(self, client, admin_headers, designer_headers, designer):
        created = (await observe(client, admin_headers, designerId=designer.id, date="2024-05-15", note="Folga")).json()

        response = await client.get(f"{API}/calendar-observations/{created['id']}", headers=admin_headers)
        assert response.status_code == 200
        assert (response.json()["date"], response.json()["note"]) == ("2024-05-15", "Folga")
        assert response.json()["designerName"] == designer.name

        forbidden = await client.get(f"{API}/calendar-observations/{created['id']}", headers=designer_headers)
        assert forbidden.status_code == 403

        missing = await client.get(f"{API}/calendar-observations/{created['id'] + 1}", headers=admin_headers)
        assert missing.status_code == 404
        assert missing.json()["detail"] == "Observation not found"
