from datetime import date, datetime

import pytest

from app.core.timeutils import now_ms, to_ms
from app.models.demand import Demand
from app.models.work_session import WorkSession
from app.services import analytics
from app.services.periods import DateRange

from .conftest import API, bearer

pytestmark = pytest.mark.asyncio

# A Wednesday
DAY = date(2024, 5, 15)


def at(day: date, hour: int, minute: int = 0) -> int:
    return to_ms(datetime(day.year, day.month, day.day, hour, minute))


def add_demand(db, user, timestamp, points, arts):
    db.add(Demand(
        user_id=user.id,
        user_name=user.name,
        total_points=points,
        total_quantity=arts,
        timestamp=timestamp,
    ))
    db.commit()


class TestHelpers:
    """Pure helpers."""

    async def test_round_half_up(self):
        assert analytics.round_half_up(2.5) == 3
        assert analytics.round_half_up(0.25, 1) == 0.3
        assert analytics.round_half_up(1.24, 1) == 1.2

    @pytest.mark.parametrize("arts, goal, status", [
        (8, 8, "success"),
        (7, 10, "warning"),
        (6, 10, "neutral"),
    ])
    async def test_performance_status(self, arts, goal, status):
        assert analytics.performance_status(arts, goal)["status"] == status

    async def test_zero_goal_falls_back(self):
        result = analytics.performance_status(5, 0)
        assert result["goal"] == 10
        assert result["percentage"] == 50


class TestDashboardStats:
    async def test_averages_over_working_days(self, db, designer, other_designer):
        add_demand(db, designer, at(DAY, 9), 5, 1)
        add_demand(db, designer, at(DAY, 10), 3, 1)

        stats = analytics.dashboard_stats(db, DateRange(date(2024, 5, 13), date(2024, 5, 18)))
        assert stats["workingDays"] == 6
        assert (stats["totalPoints"], stats["totalArts"], stats["totalDemands"]) == (8, 2, 2)
        assert stats["topPerformer"] == {"name": "Ana Souza", "points": 8}

        # Designers without output are left out
        [row] = stats["designers"]
        assert row["id"] == designer.id
        assert row["avgPoints"] == 1
        assert row["avgArts"] == 0.3
        assert row["color"] == "#123456"

    async def test_rows_use_full_name_without_studio_prefix(self, db, other_designer):
        add_demand(db, other_designer, at(DAY, 9), 4, 1)

        stats = analytics.dashboard_stats(db, DateRange(DAY, DAY))
        [row] = stats["designers"]
        assert (row["name"], row["fullName"]) == ("Bruno Lima", "Bruno Lima")
        assert stats["topPerformer"] == {"name": "Bruno Lima", "points": 4}

    async def test_top_performer_counts_inactive_designers(self, db, designer, other_designer):
        add_demand(db, designer, at(DAY, 9), 3, 1)
        add_demand(db, other_designer, at(DAY, 10), 9, 2)
        other_designer.active = False
        db.commit()

        stats = analytics.dashboard_stats(db, DateRange(DAY, DAY))
        assert [row["id"] for row in stats["designers"]] == [designer.id]
        assert stats["topPerformer"] == {"name": "Bruno Lima", "points": 9}
        assert stats["totalPoints"] == 12

    async def test_empty_range(self, db, designer):
        stats = analytics.dashboard_stats(db, DateRange(DAY, DAY))
        assert stats["designers"] == []
        assert stats["topPerformer"] == {"name": "-", "points": 0}


class TestHistoryAndCharts:
    async def test_history_takes_first_session_of_the_day(self, db, designer):
        db.add_all([
            WorkSession(user_id=designer.id, timestamp=at(DAY, 9, 30)),
            WorkSession(user_id=designer.id, timestamp=at(DAY, 8, 15)),
        ])
        db.commit()
        add_demand(db, designer, at(DAY, 11), 10, 2)

        history = analytics.session_history(db, DateRange(DAY, DAY))
        [row] = history["rows"]
        assert row["startTime"] == "08:15"
        assert row["date"] == "2024-05-15"
        assert (row["totalArts"], row["totalPoints"]) == (2, 10)
        assert history["totalDemands"] == 1

    async def test_daily_goal_chart(self, db, designer, other_designer):
        add_demand(db, designer, at(DAY, 9), 40, 8)
        add_demand(db, other_designer, at(DAY, 9), 35, 7)

        chart = analytics.daily_goal_chart(db, DAY)
        assert chart["dailyGoal"] == 8
        assert len(chart["days"]) == 6
        wednesday = chart["days"][2]
        assert wednesday["date"] == "2024-05-15"
        assert [d["designerId"] for d in wednesday["designers"]] == [designer.id]

    async def test_weekly_ignores_sundays(self, db, designer):
        add_demand(db, designer, at(DAY, 9), 5, 1)
        add_demand(db, designer, at(date(2024, 5, 19), 9), 50, 10)

        weeks = analytics.weekly_productivity(db, 2024, 5)
        assert [w["arts"] for w in weeks] == [0, 0, 1, 0, 0]
        assert weeks[2]["designers"][0]["designerId"] == designer.id

    async def test_monthly_and_yearly(self, db, designer, other_designer):
        add_demand(db, designer, at(date(2024, 2, 10), 9), 30, 12)
        add_demand(db, other_designer, at(date(2024, 5, 10), 9), 20, 6)
        add_demand(db, designer, at(date(2023, 12, 10), 9), 99, 99)

        months = analytics.monthly_productivity(db, 2024)
        assert len(months) == 12
        assert (months[1]["arts"], months[4]["arts"]) == (12, 6)

        year = analytics.yearly_productivity(db, 2024)
        assert (year["arts"], year["points"], year["demands"]) == (18, 50, 2)
        assert year["avgMonthlyArts"] == 2
        assert {row["designerId"] for row in year["designers"]} == {designer.id, other_designer.id}

        mine = analytics.yearly_productivity(db, 2024, designer.id)
        assert mine["arts"] == 12


class TestAnalyticsRoutes:
    async def test_dashboard_custom_period(self, client, db, admin_headers, designer):
        add_demand(db, designer, at(DAY, 9), 5, 1)
        response = await client.get(
            f"{API}/analytics/dashboard",
            params={"period": "custom", "startDate": "2024-05-15", "endDate": "2024-05-13"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["range"]["startDate"] == "2024-05-13"
        assert response.json()["totalPoints"] == 5

    async def test_dashboard_is_admin_only(self, client, designer_headers):
        response = await client.get(f"{API}/analytics/dashboard", headers=designer_headers)
        assert response.status_code == 403

    async def test_daily_performance_for_owner(self, client, db, designer, designer_headers):
        add_demand(db, designer, now_ms(), 30, 6)
        response = await client.get(f"{API}/analytics/daily-performance/{designer.id}", headers=designer_headers)
        assert response.status_code == 200
        body = response.json()
        assert (body["artsToday"], body["goal"], body["percentage"], body["status"]) == (6, 8, 75, "warning")

    async def test_daily_performance_of_someone_else(self, client, designer, other_designer):
        response = await client.get(
            f"{API}/analytics/daily-performance/{designer.id}",
            headers=bearer(other_designer),
        )
        assert response.status_code == 403

    async def test_weekly_route(self, client, admin_headers):
        response = await client.get(f"{API}/analytics/weekly", params={"year": 2024, "month": 5}, headers=admin_headers)
        assert response.status_code == 200
        assert len(response.json()) == 5

    async def test_invalid_period(self, client, admin_headers):
        response = await client.get(f"{API}/analytics/history", params={"period": "decade"}, headers=admin_headers)
        assert response.status_code == 422
