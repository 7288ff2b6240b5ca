import pytest

from app.models.lesson import LessonProgress

from .conftest import API

pytestmark = pytest.mark.asyncio


async def add_lesson(client, headers, title):
    return await client.post(
        f"{API}/lessons/",
        json={"title": title, "videoUrl": f"https://videos.example.com/{title}"},
        headers=headers,
    )


class TestLessons:
    """Lesson catalogue maintained by admins."""

    async def test_lessons_are_appended(self, client, admin_headers, designer_headers):
        first = (await add_lesson(client, admin_headers, "grid")).json()
        second = (await add_lesson(client, admin_headers, "type")).json()
        assert (first["orderIndex"], second["orderIndex"]) == (0, 1)

        listing = await client.get(f"{API}/lessons/", headers=designer_headers)
        assert [lesson["title"] for lesson in listing.json()] == ["grid", "type"]

    async def test_update(self, client, admin_headers):
        lesson = (await add_lesson(client, admin_headers, "grid")).json()
        response = await client.put(
            f"{API}/lessons/{lesson['id']}",
            json={"title": "Grids 101", "description": "Basics"},
            headers=admin_headers,
        )
        assert response.json()["title"] == "Grids 101"
        assert response.json()["description"] == "Basics"

    async def test_delete_removes_progress(self, client, db, admin_headers, designer, designer_headers):
        lesson = (await add_lesson(client, admin_headers, "grid")).json()
        await client.post(
            f"{API}/lesson-progress/",
            json={"lessonId": lesson["id"], "designerId": designer.id},
            headers=designer_headers,
        )

        response = await client.delete(f"{API}/lessons/{lesson['id']}", headers=admin_headers)
        assert response.status_code == 200
        assert db.query(LessonProgress).count() == 0


class TestLessonProgress:
    async def test_mark_is_idempotent(self, client, admin_headers, designer, designer_headers):
        lesson = (await add_lesson(client, admin_headers, "grid")).json()
        mark = {"lessonId": lesson["id"], "designerId": designer.id}

        first = await client.post(f"{API}/lesson-progress/", json=mark, headers=designer_headers)
        second = await client.post(f"{API}/lesson-progress/", json=mark, headers=designer_headers)
        assert first.json()["id"] == second.json()["id"]
        assert second.json()["viewed"] is True

        progress = await client.get(f"{API}/lesson-progress/{designer.id}", headers=designer_headers)
        assert len(progress.json()) == 1

    async def test_unmark_is_idempotent(self, client, admin_headers, designer, designer_headers):
        lesson = (await add_lesson(client, admin_headers, "grid")).json()
        await client.post(
            f"{API}/lesson-progress/",
            json={"lessonId": lesson["id"], "designerId": designer.id},
            headers=designer_headers,
        )

        response = await client.delete(f"{API}/lesson-progress/{lesson['id']}/{designer.id}", headers=designer_headers)
        assert response.status_code == 200

        again = await client.delete(f"{API}/lesson-progress/{lesson['id']}/{designer.id}", headers=designer_headers)
        assert again.status_code == 200
        assert again.json()["message"] == "Lesson marked as not viewed"

        progress = await client.get(f"{API}/lesson-progress/{designer.id}", headers=designer_headers)
        assert all(p["lessonId"] != lesson["id"] or not p["viewed"] for p in progress.json())

    async def test_cannot_read_other_designers_progress(self, client, other_designer, designer_headers):
        response = await client.get(f"{API}/lesson-progress/{other_designer.id}", headers=designer_headers)
        assert response.status_code == 403

    async def test_unknown_lesson(self, client, designer, designer_headers):
        response = await client.post(
            f"{API}/lesson-progress/",
            json={"lessonId": 9999, "designerId": designer.id},
            headers=designer_headers,
        )
        assert response.status_code == 404
