import pytest

from .conftest import API

pytestmark = pytest.mark.asyncio


async def give_feedback(client, headers, designer_id, comment="Ajustar o contraste"):
    return await client.post(
        f"{API}/feedbacks/",
        json={"designerId": designer_id, "imageUrls": ["https://cdn.example.com/a.png"], "comment": comment},
        headers=headers,
    )


class TestFeedback:
    """Admin feedback and the designer's reply."""

    async def test_create_resolves_names(self, client, admin, admin_headers, designer):
        response = await give_feedback(client, admin_headers, designer.id)
        assert response.status_code == 201
        body = response.json()
        assert body["designerName"] == designer.name
        assert body["adminName"] == admin.name
        assert body["viewed"] is False

    async def test_unknown_designer(self, client, admin_headers):
        response = await give_feedback(client, admin_headers, 9999)
        assert response.status_code == 404

    async def test_designer_marks_viewed_and_replies(self, client, admin_headers, designer, designer_headers):
        feedback = (await give_feedback(client, admin_headers, designer.id)).json()

        viewed = await client.put(f"{API}/feedbacks/{feedback['id']}/view", headers=designer_headers)
        assert viewed.json()["viewed"] is True
        assert viewed.json()["viewedAt"] is not None

        replied = await client.put(
            f"{API}/feedbacks/{feedback['id']}/response",
            json={"response": " Feito! "},
            headers=designer_headers,
        )
        assert replied.json()["response"] == "Feito!"
        assert replied.json()["responseAt"] is not None

    async def test_other_designer_cannot_reply(self, client, admin_headers, designer, other_designer):
        from .conftest import bearer

        feedback = (await give_feedback(client, admin_headers, designer.id)).json()
        response = await client.put(
            f"{API}/feedbacks/{feedback['id']}/response",
            json={"response": "Nope"},
            headers=bearer(other_designer),
        )
        assert response.status_code == 403

    async def test_listing_is_scoped(self, client, admin_headers, designer, other_designer, designer_headers):
        await give_feedback(client, admin_headers, designer.id)
        await give_feedback(client, admin_headers, other_designer.id)

        own = await client.get(f"{API}/feedbacks/", headers=designer_headers)
        assert [f["designerId"] for f in own.json()] == [designer.id]

        filtered = await client.get(f"{API}/feedbacks/", params={"designerId": other_designer.id}, headers=admin_headers)
        assert [f["designerId"] for f in filtered.json()] == [other_designer.id]

    async def test_delete(self, client, admin_headers, designer):
        feedback = (await give_feedback(client, admin_headers, designer.id)).json()
        response = await client.delete(f"{API}/feedbacks/{feedback['id']}", headers=admin_headers)
        assert response.status_code == 200

        missing = await client.delete(f"{API}/feedbacks/{feedback['id']}", headers=admin_headers)
        assert missing.status_code == 404
