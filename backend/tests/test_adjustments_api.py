import uuid

import pytest

from db.repositories import ItemRepository, StockRepository, WarehouseRepository

from conftest import API

pytestmark = pytest.mark.anyio


def _body(stock, refs, **overrides):
    body = {
        "type": "Addition",
        "reason": "Purchased",
        "stock_id": str(stock.id),
        "party_id": str(refs.party.id),
        "quantity": 5,
        "cost": 12.5,
        "remarks": "Restocked after flood response",
    }
    body.update(overrides)
    return body


async def _quantity(client, stock):
    resp = await client.get(f"{API}/stocks/{stock.id}")
    assert resp.status_code == 200
    return resp.json()["quantity"]


async def test_adjustment_backfills_item_and_store_from_stock(client, stock, refs):
    resp = await client.post(f"{API}/adjustments", json=_body(stock, refs))
    assert resp.status_code == 201, resp.text
    adjustment = resp.json()
    assert adjustment["item_id"] == str(refs.item.id)
    assert adjustment["store_id"] == str(refs.warehouse.id)
    assert adjustment["item"]["name"] == "Bar Soap"
    assert adjustment["party"]["name"] == "Red Cross Society"


async def test_addition_increases_stock(client, stock, refs):
    resp = await client.post(f"{API}/adjustments", json=_body(stock, refs, quantity=5))
    assert resp.status_code == 201
    assert await _quantity(client, stock) == 15


async def test_deduction_decreases_stock(client, stock, refs):
    body = _body(stock, refs, type="Deduction", reason="Damaged", quantity=4)
    resp = await client.post(f"{API}/adjustments", json=body)
    assert resp.status_code == 201
    assert await _quantity(client, stock) == 6


async def test_deduction_cannot_exceed_stock(client, stock, refs):
    body = _body(stock, refs, type="Deduction", reason="Consumed", quantity=11)
    resp = await client.post(f"{API}/adjustments", json=body)
    assert resp.status_code == 400
    assert "quantity" in resp.json()["errors"]

    assert await _quantity(client, stock) == 10
    resp = await client.get(f"{API}/adjustments")
    assert resp.json()["total"] == 0


async def test_adjustment_rejects_unknown_reason(client, stock, refs):
    resp = await client.post(f"{API}/adjustments", json=_body(stock, refs, reason="Stolen"))
    assert resp.status_code == 400
    assert "reason" in resp.json()["errors"]
    assert await _quantity(client, stock) == 10


async def test_adjustment_rejects_unknown_stock(client, stock, refs):
    body = _body(stock, refs, stock_id=str(uuid.uuid4()))
    resp = await client.post(f"{API}/adjustments", json=body)
    assert resp.status_code == 400
    assert "stock_id" in resp.json()["errors"]


async def test_editing_adjustment_leaves_stock_alone(client, stock, refs):
    resp = await client.post(f"{API}/adjustments", json=_body(stock, refs, quantity=5))
    adjustment = resp.json()

    resp = await client.patch(
        f"{API}/adjustments/{adjustment['id']}",
        json={"quantity": 50, "remarks": "Corrected count"},
    )
    assert resp.status_code == 200
    assert resp.json()["quantity"] == 50
    assert resp.json()["remarks"] == "Corrected count"
    assert await _quantity(client, stock) == 15

    resp = await client.delete(f"{API}/adjustments/{adjustment['id']}")
    assert resp.status_code == 200
    assert await _quantity(client, stock) == 15


async def test_adjustment_schema_lists_reasons(client, config):
    resp = await client.get(f"{API}/adjustments/schema")
    assert resp.status_code == 200
    assert resp.json()["properties"]["reason"]["enum"] == list(config.adjustment_reasons)


async def test_moving_adjustment_to_another_stock_follows_its_item_and_store(
    client, stock, refs, session_maker, config
):
    async with session_maker() as session:
        tent = await ItemRepository(config).create(session, {"name": "Family Tent", "type": "Equipment"})
        depot = await WarehouseRepository(config).create(session, {"name": "North Depot"})
        other = await StockRepository(config).create(
            session, {"store_id": depot.id, "owner_id": refs.party.id, "item_id": tent.id}
        )

    resp = await client.post(f"{API}/adjustments", json=_body(stock, refs))
    adjustment = resp.json()

    resp = await client.patch(f"{API}/adjustments/{adjustment['id']}", json={"stock_id": str(other.id)})
    assert resp.status_code == 200
    moved = resp.json()
    assert moved["stock_id"] == str(other.id)
    assert moved["item_id"] == str(tent.id)
    assert moved["store_id"] == str(depot.id)
