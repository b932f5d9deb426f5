# tests/test_months_api.py
from __future__ import annotations

from decimal import Decimal

import pytest

BASE = "/api/v1/me/months"


async def add_sale(client, headers, month: str, day: str, individual, store):
    r = await client.post(
        f"{BASE}/{month}/sales",
        headers=headers,
        json={"date": day, "individual_sale": str(individual), "store_sale": str(store)},
    )
    assert r.status_code == 201, r.text
    return r.json()


@pytest.mark.asyncio
async def test_new_month_is_created_lazily_with_zero_goal(client, login):
    headers = await login("ana@example.com")

    r = await client.get(f"{BASE}/2024-07", headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["month"] == "2024-07"
    assert Decimal(body["store_goal"]) == 0
    assert body["entries"] == []
    assert body["commission"]["eligible"] is False
    assert body["commission"]["reason_code"] == "GOAL_NOT_SET"
    assert body["remaining_business_days"] == 13

    r = await client.get(BASE, headers=headers)
    assert [m["month"] for m in r.json()["items"]] == ["2024-07"]


@pytest.mark.asyncio
async def test_month_summary_with_partial_commission(client, login):
    headers = await login("ana@example.com")

    r = await client.put(f"{BASE}/2024-07/goal", headers=headers, json={"store_goal": "100000"})
    assert r.status_code == 200

    await add_sale(client, headers, "2024-07", "2024-07-01", "25000", "30000")
    await add_sale(client, headers, "2024-07", "2024-07-02", "30000", "35000")
    await add_sale(client, headers, "2024-07", "2024-07-03", "20000", "25000")

    r = await client.get(f"{BASE}/2024-07", headers=headers)
    assert r.status_code == 200
    body = r.json()

    assert Decimal(body["total_individual"]) == Decimal("75000")
    assert Decimal(body["total_store"]) == Decimal("90000")

    commission = body["commission"]
    assert commission["eligible"] is True
    assert commission["reason_code"] == "MINIMUM_GOAL_MET"
    assert Decimal(commission["rate"]) == Decimal("0.0070")
    assert Decimal(commission["amount"]) == Decimal("367.50")
    assert Decimal(commission["lost_amount"]) == Decimal("157.50")
    assert Decimal(commission["tier"]["min"]) == Decimal("70000.01")

    insights = body["insights"]
    assert Decimal(insights["next_tier"]["min"]) == Decimal("80000.01")
    assert Decimal(insights["amount_to_next_tier"]) == Decimal("5000.01")

    assert Decimal(body["store_goal_percentage"]) == Decimal("90")
    assert Decimal(body["contribution_percentage"]) == Decimal("83.33")
    # (100000 - 90000) / 13 business days
    assert Decimal(body["required_daily_average"]) == Decimal("769.23")

    # newest first
    assert [e["date"] for e in body["entries"]] == ["2024-07-03", "2024-07-02", "2024-07-01"]


@pytest.mark.asyncio
async def test_goal_must_be_positive(client, login):
    headers = await login("ana@example.com")

    r = await client.put(f"{BASE}/2024-07/goal", headers=headers, json={"store_goal": "0"})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_sale_amounts_must_be_positive(client, login):
    headers = await login("ana@example.com")

    r = await client.post(
        f"{BASE}/2024-07/sales",
        headers=headers,
        json={"date": "2024-07-01", "individual_sale": "0", "store_sale": "100"},
    )
    assert r.status_code == 422

    r = await client.post(
        f"{BASE}/2024-07/sales",
        headers=headers,
        json={"date": "2024-07-01", "individual_sale": "100", "store_sale": "-5"},
    )
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_sale_date_must_fall_in_month(client, login):
    headers = await login("ana@example.com")

    r = await client.post(
        f"{BASE}/2024-07/sales",
        headers=headers,
        json={"date": "2024-08-01", "individual_sale": "100", "store_sale": "100"},
    )
    assert r.status_code == 422
    assert r.json()["detail"]["error"] == "SALE_DATE_OUTSIDE_MONTH"


@pytest.mark.asyncio
async def test_malformed_month_is_rejected(client, login):
    headers = await login("ana@example.com")

    r = await client.get(f"{BASE}/2024-13", headers=headers)
    assert r.status_code == 422

    r = await client.get(f"{BASE}/july", headers=headers)
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_update_and_delete_sale(client, login):
    headers = await login("ana@example.com")
    created = await add_sale(client, headers, "2024-07", "2024-07-01", "1000", "5000")
    sale_id = created["id"]

    r = await client.patch(
        f"{BASE}/2024-07/sales/{sale_id}",
        headers=headers,
        json={"individual_sale": "1500.50", "date": "2024-07-05"},
    )
    assert r.status_code == 200
    body = r.json()
    assert Decimal(body["individual_sale"]) == Decimal("1500.50")
    assert Decimal(body["store_sale"]) == Decimal("5000")
    assert body["date"] == "2024-07-05"

    r = await client.patch(f"{BASE}/2024-07/sales/{sale_id}", headers=headers, json={"date": "2024-06-30"})
    assert r.status_code == 422

    r = await client.patch(f"{BASE}/2024-07/sales/{sale_id}", headers=headers, json={})
    assert r.status_code == 400

    r = await client.delete(f"{BASE}/2024-07/sales/{sale_id}", headers=headers)
    assert r.status_code == 204

    r = await client.get(f"{BASE}/2024-07", headers=headers)
    assert r.json()["entries"] == []

    r = await client.delete(f"{BASE}/2024-07/sales/{sale_id}", headers=headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_sales_are_scoped_to_their_owner(client, login):
    ana = await login("ana@example.com")
    bruno = await login("bruno@example.com")

    created = await add_sale(client, ana, "2024-07", "2024-07-01", "1000", "5000")

    r = await client.delete(f"{BASE}/2024-07/sales/{created['id']}", headers=bruno)
    assert r.status_code == 404

    r = await client.get(f"{BASE}/2024-07", headers=bruno)
    assert r.json()["entries"] == []


@pytest.mark.asyncio
async def test_sale_is_scoped_to_its_month(client, login):
    headers = await login("ana@example.com")
    created = await add_sale(client, headers, "2024-07", "2024-07-01", "1000", "5000")

    r = await client.patch(
        f"{BASE}/2024-06/sales/{created['id']}",
        headers=headers,
        json={"individual_sale": "2000"},
    )
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_history_lists_months_newest_first_with_commission(client, login):
    headers = await login("ana@example.com")

    await client.put(f"{BASE}/2024-06/goal", headers=headers, json={"store_goal": "100000"})
    await add_sale(client, headers, "2024-06", "2024-06-10", "75000", "100000")
    await add_sale(client, headers, "2024-07", "2024-07-01", "1000", "5000")

    r = await client.get(BASE, headers=headers)
    assert r.status_code == 200
    items = r.json()["items"]

    assert [i["month"] for i in items] == ["2024-07", "2024-06"]
    june = items[1]
    assert june["entries_count"] == 1
    assert Decimal(june["commission"]["amount"]) == Decimal("525.00")
    assert june["commission"]["reason_code"] == "GOAL_MET"


@pytest.mark.asyncio
async def test_months_require_login(client):
    r = await client.get(BASE)
    assert r.status_code in (401, 403)
