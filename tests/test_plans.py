"""Plans router tests: persistence, ownership, charts and comparisons."""

import pytest

from conftest import SAMPLE_RECOMMENDATION, auth_headers

pytestmark = pytest.mark.asyncio

URL = "/api/v1/plans"


def plan_payload(destination="Bali", with_recommendation=False, total=None, **overrides):
    payload = {
        "destination": destination,
        "duration": 4,
        "people_count": 2,
        "travel_style": "standard",
    }
    if with_recommendation:
        recommendation = {**SAMPLE_RECOMMENDATION}
        if total is not None:
            recommendation["costBreakdown"] = {
                "transportation": total / 2,
                "accommodation": total / 2,
                "food": 0,
                "activities": 0,
                "total": total,
            }
        payload["ai_recommendation"] = recommendation
    payload.update(overrides)
    return payload


async def create(client, headers=None, **kwargs):
    response = await client.post(URL, json=plan_payload(**kwargs), headers=headers or auth_headers())
    assert response.status_code == 201
    return response.json()


class TestCreatePlan:

    async def test_without_recommendation_has_zero_cost(self, client):
        plan = await create(client)

        assert plan["total_cost"] == 0
        assert plan["cost_breakdown"] is None
        assert plan["ai_recommendation"] is None
        assert plan["user_id"] == "user-1"

    async def test_cost_is_derived_from_recommendation(self, client):
        plan = await create(client, with_recommendation=True)

        assert plan["total_cost"] == 8000000
        assert plan["cost_breakdown"]["accommodation"] == 3500000
        assert plan["ai_recommendation"] == SAMPLE_RECOMMENDATION

    async def test_rejects_non_positive_duration(self, client):
        response = await client.post(URL, json=plan_payload(duration=0), headers=auth_headers())

        assert response.status_code == 422

    async def test_requires_authentication(self, client):
        response = await client.post(URL, json=plan_payload())

        assert response.status_code in (401, 403)

    async def test_rejects_invalid_token(self, client):
        response = await client.get(URL, headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401


class TestListAndDelete:

    async def test_lists_newest_first(self, client):
        first = await create(client, destination="Bali")
        second = await create(client, destination="Lombok")

        response = await client.get(URL, headers=auth_headers())

        assert [plan["id"] for plan in response.json()] == [second["id"], first["id"]]

    async def test_deleted_plan_is_gone_from_listing(self, client):
        kept = await create(client, destination="Bali")
        removed = await create(client, destination="Lombok")

        response = await client.delete(f"{URL}/{removed['id']}", headers=auth_headers())
        assert response.status_code == 200

        listing = await client.get(URL, headers=auth_headers())
        assert [plan["id"] for plan in listing.json()] == [kept["id"]]

        missing = await client.get(f"{URL}/{removed['id']}", headers=auth_headers())
        assert missing.status_code == 404

    async def test_plans_are_private_to_their_owner(self, client):
        plan = await create(client)
        other = auth_headers(user_id="user-2", email="budi@example.com")

        assert (await client.get(URL, headers=other)).json() == []
        assert (await client.get(f"{URL}/{plan['id']}", headers=other)).status_code == 404
        assert (await client.delete(f"{URL}/{plan['id']}", headers=other)).status_code == 404

    async def test_delete_all_only_touches_own_plans(self, client):
        await create(client)
        await create(client)
        other = auth_headers(user_id="user-2", email="budi@example.com")
        await create(client, headers=other)

        response = await client.delete(URL, headers=auth_headers())

        assert response.json()["deleted"] == 2
        assert (await client.get(URL, headers=auth_headers())).json() == []
        assert len((await client.get(URL, headers=other)).json()) == 1


class TestCostChart:

    async def test_chart_slices_for_estimated_plan(self, client):
        plan = await create(client, with_recommendation=True)

        response = await client.get(f"{URL}/{plan['id']}/cost-chart", headers=auth_headers())

        body = response.json()
        assert body["has_estimate"] is True
        assert body["formatted_total"] == "Rp 8.000.000"
        slices = {item["name"]: item for item in body["slices"]}
        assert list(slices) == ["transportation", "accommodation", "food", "activities"]
        assert slices["accommodation"]["percent"] == 44
        assert slices["transportation"]["value_in_million"] == 2.0

    async def test_plan_without_estimate(self, client):
        plan = await create(client)

        response = await client.get(f"{URL}/{plan['id']}/cost-chart", headers=auth_headers())

        body = response.json()
        assert body["has_estimate"] is False
        assert body["slices"] == []


class TestComparePlans:

    async def test_needs_two_plans(self, client):
        await create(client)

        response = await client.get(f"{URL}/compare", headers=auth_headers())

        assert response.status_code == 400
        assert "two plans" in response.json()["detail"]

    async def test_compares_all_plans_by_default(self, client):
        cheap = await create(client, destination="Bandung", with_recommendation=True, total=2000000)
        pricey = await create(client, destination="Bali", with_recommendation=True, total=9000000)

        response = await client.get(f"{URL}/compare", headers=auth_headers())

        body = response.json()
        assert response.status_code == 200
        assert [row["label"] for row in body["rows"]] == ["Plan 1", "Plan 2"]
        assert body["cheapest_id"] == cheap["id"]
        assert body["most_expensive_id"] == pricey["id"]
        assert body["difference"] == 7000000
        assert body["formatted_difference"] == "Rp 7.000.000"

    async def test_compares_selected_plans_in_requested_order(self, client):
        a = await create(client, destination="Bali")
        await create(client, destination="Lombok")
        c = await create(client, destination="Bandung")

        response = await client.get(
            f"{URL}/compare", params=[("ids", a["id"]), ("ids", c["id"])], headers=auth_headers()
        )

        rows = response.json()["rows"]
        assert [row["plan_id"] for row in rows] == [a["id"], c["id"]]

    async def test_unknown_plan_in_selection(self, client):
        a = await create(client)

        response = await client.get(
            f"{URL}/compare", params=[("ids", a["id"]), ("ids", "nope")], headers=auth_headers()
        )

        assert response.status_code == 404
