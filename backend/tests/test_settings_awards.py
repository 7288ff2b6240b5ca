from datetime import datetime

import pytest

from app.core.timeutils import local_now, to_ms
from app.models.settings import SystemSettings

from .conftest import API

pytestmark = pytest.mark.asyncio


class TestSettings:
    """Singleton settings and the awards update flag."""

    async def test_read_is_public(self, client):
        response = await client.get(f"{API}/settings/")
        assert response.status_code == 200
        body = response.json()
        assert body["variationPoints"] == 5
        assert body["dailyArtGoal"] == 8
        assert body["awardsHasUpdates"] is False

    async def test_update_requires_admin(self, client, designer_headers):
        response = await client.put(f"{API}/settings/", json={"brandTitle": "X"}, headers=designer_headers)
        assert response.status_code == 403

    async def test_non_award_change_leaves_flag(self, client, admin_headers):
        response = await client.put(
            f"{API}/settings/",
            json={"brandTitle": "Estúdio", "dailyArtGoal": 6},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["brandTitle"] == "Estúdio"
        assert response.json()["dailyArtGoal"] == 6
        assert response.json()["awardsHasUpdates"] is False

    async def test_award_change_raises_flag(self, client, admin_headers):
        response = await client.put(
            f"{API}/settings/",
            json={"motivationalMessage": "Bora!"},
            headers=admin_headers,
        )
        assert response.json()["awardsHasUpdates"] is True

    async def test_resaving_unchanged_award_field_raises_flag(self, client, admin_headers):
        """The settings page re-sends every field; designers are still alerted."""
        response = await client.put(
            f"{API}/settings/",
            json={"showAwardsChart": False},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["showAwardsChart"] is False
        assert response.json()["awardsHasUpdates"] is True

    async def test_explicit_flag_wins(self, client, admin_headers):
        response = await client.put(
            f"{API}/settings/",
            json={"showAwardsChart": True, "awardsHasUpdates": False},
            headers=admin_headers,
        )
        assert response.json()["showAwardsChart"] is True
        assert response.json()["awardsHasUpdates"] is False

    async def test_null_for_required_field_is_ignored(self, client, admin_headers):
        response = await client.put(f"{API}/settings/", json={"variationPoints": None}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["variationPoints"] == 5

    async def test_apply_changes_reports_only_real_changes(self, db):
        system = SystemSettings.get_instance(db)
        changed = system.apply_changes({"daily_art_goal": system.daily_art_goal, "brand_title": "Novo"})
        assert set(changed) == {"brand_title"}


class TestAwards:
    async def test_create_sets_flag_and_resolves_name(self, client, db, admin_headers, designer):
        response = await client.post(
            f"{API}/awards/",
            json={"designerId": designer.id, "month": "Maio 2024", "description": "Mais pontos"},
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.json()["designerName"] == designer.name
        assert SystemSettings.get_instance(db).awards_has_updates is True

    async def test_unknown_designer(self, client, admin_headers):
        response = await client.post(
            f"{API}/awards/",
            json={"designerId": 9999, "month": "Maio 2024"},
            headers=admin_headers,
        )
        assert response.status_code == 400

    async def test_reset_updates_by_designer(self, client, db, admin_headers, designer, designer_headers):
        await client.post(f"{API}/awards/", json={"designerId": designer.id, "month": "Maio"}, headers=admin_headers)

        response = await client.put(f"{API}/awards/reset-updates", headers=designer_headers)
        assert response.status_code == 200
        assert SystemSettings.get_instance(db).awards_has_updates is False

    async def test_delete_sets_flag(self, client, db, admin_headers, designer, designer_headers):
        award = (await client.post(
            f"{API}/awards/", json={"designerId": designer.id, "month": "Maio"}, headers=admin_headers
        )).json()
        await client.put(f"{API}/awards/reset-updates", headers=designer_headers)

        response = await client.delete(f"{API}/awards/{award['id']}", headers=admin_headers)
        assert response.status_code == 200
        assert SystemSettings.get_instance(db).awards_has_updates is True

    async def test_ranking(self, client, db, admin_headers, designer, other_designer, designer_headers):
        for month, winner in (("Jan", designer), ("Fev", designer), ("Mar", other_designer)):
            await client.post(f"{API}/awards/", json={"designerId": winner.id, "month": month}, headers=admin_headers)

        response = await client.get(f"{API}/awards/ranking", headers=designer_headers)
        assert response.status_code == 200
        assert [(r["designerId"], r["awards"]) for r in response.json()] == [(designer.id, 2), (other_designer.id, 1)]

    async def test_chart_data_for_current_month(self, client, admin_headers, designer, other_designer, art_types, designer_headers):
        now = local_now().replace(tzinfo=None)
        timestamp = to_ms(datetime(now.year, now.month, 1, 12, 0))
        for user, quantity in ((designer, 1), (other_designer, 3)):
            await client.post(
                f"{API}/demands/",
                json={"userId": user.id, "items": [{"artTypeId": art_types["Post feed"].id, "quantity": quantity}], "timestamp": timestamp},
                headers=admin_headers,
            )

        response = await client.get(f"{API}/awards/chart-data", headers=designer_headers)
        assert [(e["name"], e["points"]) for e in response.json()] == [("Bruno", 15), ("Ana Souza", 5)]
        assert response.json()[1]["color"] == "#123456"
