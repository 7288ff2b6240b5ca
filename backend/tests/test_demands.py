from datetime import date, datetime

import pytest

from app.core.timeutils import to_ms
from app.models.settings import SystemSettings
from app.services.demands import DAY_CODES, day_code

from .conftest import API

pytestmark = pytest.mark.asyncio

# A Wednesday
DAY = date(2024, 5, 15)


def at(hour: int, minute: int = 0) -> int:
    return to_ms(datetime(DAY.year, DAY.month, DAY.day, hour, minute))


async def post_demand(client, headers, user_id, items, timestamp=None):
    payload = {"userId": user_id, "items": items}
    if timestamp is not None:
        payload["timestamp"] = timestamp
    return await client.post(f"{API}/demands/", json=payload, headers=headers)


class TestDemandTotals:
    """Server-side pricing of demand items."""

    async def test_totals_with_variations(self, client, designer, designer_headers, art_types):
        items = [
            {"artTypeId": art_types["Post feed"].id, "quantity": 2, "variationQuantity": 1},
            {"artTypeId": art_types["Story"].id, "quantity": 1},
            {"artTypeId": art_types["Variação"].id, "quantity": 3},
        ]
        response = await post_demand(client, designer_headers, designer.id, items, at(9))
        assert response.status_code == 201
        body = response.json()

        # 2 * 5 + 1 * 5 variation, 1 * 3, variation art type is worth 0
        assert body["totalPoints"] == 18
        assert body["totalPoints"] == sum(item["totalPoints"] for item in body["items"])
        # Variation art types are not counted as arts
        assert body["totalQuantity"] == 3
        assert body["userName"] == designer.name
        assert body["items"][0]["variationPoints"] == 5

    async def test_variation_points_follow_settings(self, client, db, designer, designer_headers, art_types):
        SystemSettings.get_instance(db).variation_points = 2
        db.commit()

        items = [{"artTypeId": art_types["Story"].id, "quantity": 1, "variationQuantity": 3}]
        response = await post_demand(client, designer_headers, designer.id, items)
        assert response.json()["totalPoints"] == 3 + 3 * 2

    async def test_unknown_art_type(self, client, designer, designer_headers):
        response = await post_demand(client, designer_headers, designer.id, [{"artTypeId": 9999}])
        assert response.status_code == 400

    async def test_empty_items(self, client, designer, designer_headers):
        response = await post_demand(client, designer_headers, designer.id, [])
        assert response.status_code == 400

    async def test_zero_quantity(self, client, designer, designer_headers, art_types):
        items = [{"artTypeId": art_types["Story"].id, "quantity": 0}]
        response = await post_demand(client, designer_headers, designer.id, items)
        assert response.status_code == 400

    async def test_designer_cannot_log_for_someone_else(self, client, other_designer, designer_headers, art_types):
        items = [{"artTypeId": art_types["Story"].id}]
        response = await post_demand(client, designer_headers, other_designer.id, items)
        assert response.status_code == 403


class TestExecutionCodes:
    """Daily execution codes stay 1..n in timestamp order."""

    async def test_day_codes(self):
        assert day_code(date(2024, 5, 13)) == "S"
        assert day_code(DAY) == "QA"
        assert day_code(date(2024, 5, 19)) == "D"
        assert len(set(DAY_CODES.values())) == 7

    async def test_codes_follow_timestamps(self, client, designer, designer_headers, art_types):
        items = [{"artTypeId": art_types["Story"].id}]
        late = (await post_demand(client, designer_headers, designer.id, items, at(10))).json()
        assert late["executionCode"] == "QA1"

        early = (await post_demand(client, designer_headers, designer.id, items, at(9))).json()
        assert early["executionCode"] == "QA1"

        late_now = await client.get(f"{API}/demands/{late['id']}", headers=designer_headers)
        assert late_now.json()["executionCode"] == "QA2"

    async def test_delete_closes_the_gap(self, client, designer, designer_headers, art_types):
        items = [{"artTypeId": art_types["Story"].id}]
        ids = []
        for hour in (9, 10, 11):
            ids.append((await post_demand(client, designer_headers, designer.id, items, at(hour))).json()["id"])

        response = await client.delete(f"{API}/demands/{ids[0]}", headers=designer_headers)
        assert response.status_code == 200

        listing = await client.get(f"{API}/demands/", headers=designer_headers)
        codes = {d["id"]: d["executionCode"] for d in listing.json()}
        assert codes == {ids[1]: "QA1", ids[2]: "QA2"}

    async def test_codes_are_per_designer(self, client, admin_headers, designer, other_designer, art_types):
        items = [{"artTypeId": art_types["Story"].id}]
        await post_demand(client, admin_headers, designer.id, items, at(9))
        other = await post_demand(client, admin_headers, other_designer.id, items, at(10))
        assert other.json()["executionCode"] == "QA1"

    async def test_update_replaces_items_and_moves_day(self, client, designer, designer_headers, art_types):
        items = [{"artTypeId": art_types["Story"].id}]
        first = (await post_demand(client, designer_headers, designer.id, items, at(9))).json()
        second = (await post_demand(client, designer_headers, designer.id, items, at(10))).json()

        thursday = to_ms(datetime(2024, 5, 16, 9, 0))
        response = await client.put(
            f"{API}/demands/{first['id']}",
            json={"items": [{"artTypeId": art_types["Post feed"].id, "quantity": 2}], "timestamp": thursday},
            headers=designer_headers,
        )
        assert response.status_code == 200
        assert response.json()["totalPoints"] == 10
        assert response.json()["executionCode"] == "QI1"

        remaining = await client.get(f"{API}/demands/{second['id']}", headers=designer_headers)
        assert remaining.json()["executionCode"] == "QA1"


class TestDemandVisibility:
    async def test_designer_sees_only_own(self, client, admin_headers, designer_headers, designer, other_designer, art_types):
        items = [{"artTypeId": art_types["Story"].id}]
        await post_demand(client, admin_headers, designer.id, items)
        theirs = (await post_demand(client, admin_headers, other_designer.id, items)).json()

        listing = await client.get(f"{API}/demands/", headers=designer_headers)
        assert {d["userId"] for d in listing.json()} == {designer.id}

        forbidden = await client.get(f"{API}/demands/{theirs['id']}", headers=designer_headers)
        assert forbidden.status_code == 403

    async def test_admin_filters_by_user_and_range(self, client, admin_headers, designer, other_designer, art_types):
        items = [{"artTypeId": art_types["Story"].id}]
        await post_demand(client, admin_headers, designer.id, items, at(9))
        await post_demand(client, admin_headers, designer.id, items, at(15))
        await post_demand(client, admin_headers, other_designer.id, items, at(9))

        response = await client.get(
            f"{API}/demands/",
            params={"userId": designer.id, "startDate": at(8), "endDate": at(12)},
            headers=admin_headers,
        )
        assert len(response.json()) == 1
