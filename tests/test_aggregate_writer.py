"""Tests for the transactional writes of couriers and orders."""

from datetime import datetime

import pytest

import db_queries
from aggregate_writer import CourierWriter, OrderWriter
from entities import CompleteOrder, CourierInput, CourierType, OrderInput
from errors import NotFound, OwnershipMismatch, StorageError, UnknownCourierType
from fake_storage import FakeStorage

COMPLETE_TIME = datetime(2023, 5, 1, 12, 30)


async def test_add_couriers_returns_stored_values(storage, foot_courier, auto_courier):
    added = await CourierWriter(storage).add([foot_courier, auto_courier])

    assert [x.courier_id for x in added] == [1, 2]
    assert added[0].courier_type is CourierType.FOOT
    assert added[0].regions == [1, 2, 3]
    assert added[0].working_hours == ['10:00-12:00']
    assert added[1].courier_type is CourierType.AUTO
    assert added[1].working_hours == ['08:00-10:00', '18:00-21:30']
    assert storage.commits == 1
    assert len(storage.rows('couriers_regions')) == 4
    assert len(storage.rows('couriers_working_hours')) == 3


async def test_add_couriers_is_atomic(storage, foot_courier, auto_courier):
    # the first courier goes through, the second one fails on its working hours
    storage.fail_on(db_queries.INSERT_COURIER_WORKING_HOURS, after=1)

    with pytest.raises(StorageError):
        await CourierWriter(storage).add([foot_courier, auto_courier])

    assert storage.rows('couriers') == []
    assert storage.rows('couriers_regions') == []
    assert storage.rows('couriers_working_hours') == []
    assert storage.rollbacks == 1


async def test_add_couriers_unknown_type_rolls_back(foot_courier):
    storage = FakeStorage(courier_types=('FOOT', 'BIKE'))
    car = CourierInput(courier_type=CourierType.AUTO, regions=[1], working_hours=['09:00-18:00'])

    with pytest.raises(UnknownCourierType):
        await CourierWriter(storage).add([foot_courier, car])

    assert storage.rows('couriers') == []
    assert storage.rows('couriers_regions') == []


async def test_add_orders_returns_open_orders(storage, small_order):
    big_order = OrderInput(weight=20.0, region=3, delivery_hours=['09:00-10:00', '20:00-22:00'], cost=0)

    added = await OrderWriter(storage).add([small_order, big_order])

    assert [x.order_id for x in added] == [1, 2]
    assert added[0].weight == 2.5
    assert added[0].region == 1
    assert added[0].cost == 100
    assert added[0].delivery_hours == ['10:30-11:30']
    assert added[1].delivery_hours == ['09:00-10:00', '20:00-22:00']
    assert all(x.courier_id is None and x.completed_time is None for x in added)


async def test_add_orders_is_atomic(storage, small_order):
    storage.fail_on(db_queries.INSERT_ORDER, after=2)

    with pytest.raises(StorageError):
        await OrderWriter(storage).add([small_order, small_order, small_order])

    assert storage.rows('orders') == []
    assert storage.rows('delivery_hours_of_orders') == []


async def test_set_completed(storage, foot_courier, small_order):
    await CourierWriter(storage).add([foot_courier])
    writer = OrderWriter(storage)
    await writer.add([small_order])
    storage.assign(1, 1)

    completed = await writer.set_completed([CompleteOrder(courier_id=1, order_id=1, complete_time=COMPLETE_TIME)])

    assert len(completed) == 1
    assert completed[0].order_id == 1
    assert completed[0].courier_id == 1
    assert completed[0].completed_time == COMPLETE_TIME
    assert completed[0].delivery_hours == ['10:30-11:30']


async def test_set_completed_without_recorded_courier(storage, foot_courier, small_order):
    await CourierWriter(storage).add([foot_courier])
    writer = OrderWriter(storage)
    await writer.add([small_order])

    with pytest.raises(OwnershipMismatch):
        await writer.set_completed([CompleteOrder(courier_id=1, order_id=1, complete_time=COMPLETE_TIME)])

    order = storage.rows('orders')[0]
    assert order['courier_id'] is None
    assert order['completed_time'] is None


async def test_set_completed_by_another_courier(storage, foot_courier, auto_courier, small_order):
    await CourierWriter(storage).add([foot_courier, auto_courier])
    writer = OrderWriter(storage)
    await writer.add([small_order])
    storage.assign(1, 1)

    with pytest.raises(OwnershipMismatch):
        await writer.set_completed([CompleteOrder(courier_id=2, order_id=1, complete_time=COMPLETE_TIME)])

    order = storage.rows('orders')[0]
    assert order['courier_id'] == 1
    assert order['completed_time'] is None


async def test_set_completed_is_atomic(storage, foot_courier, auto_courier, small_order):
    await CourierWriter(storage).add([foot_courier, auto_courier])
    writer = OrderWriter(storage)
    await writer.add([small_order, small_order])
    storage.assign(1, 1)
    storage.assign(2, 1)

    # the first completion is valid, the second one claims the order for another courier
    with pytest.raises(OwnershipMismatch):
        await writer.set_completed([CompleteOrder(courier_id=1, order_id=1, complete_time=COMPLETE_TIME),
                                    CompleteOrder(courier_id=2, order_id=2, complete_time=COMPLETE_TIME)])

    assert all(x['completed_time'] is None for x in storage.rows('orders'))


async def test_set_completed_unknown_order(storage):
    with pytest.raises(NotFound):
        await OrderWriter(storage).set_completed([CompleteOrder(courier_id=1, order_id=42,
                                                                complete_time=COMPLETE_TIME)])


async def test_set_completed_twice_by_the_same_courier(storage, foot_courier, small_order):
    await CourierWriter(storage).add([foot_courier])
    writer = OrderWriter(storage)
    await writer.add([small_order])
    storage.assign(1, 1)
    later = datetime(2023, 5, 2, 9, 0)

    await writer.set_completed([CompleteOrder(courier_id=1, order_id=1, complete_time=COMPLETE_TIME)])
    completed = await writer.set_completed([CompleteOrder(courier_id=1, order_id=1, complete_time=later)])

    assert completed[0].courier_id == 1
    assert completed[0].completed_time == later


async def test_set_completed_is_atomic_on_storage_error(storage, foot_courier, small_order):
    await CourierWriter(storage).add([foot_courier])
    writer = OrderWriter(storage)
    await writer.add([small_order, small_order])
    storage.assign(1, 1)
    storage.assign(2, 1)
    # the update of the first order goes through, the one of the second order fails
    storage.fail_on(db_queries.UPDATE_ORDER_COMPLETED, after=1)

    with pytest.raises(StorageError):
        await writer.set_completed([CompleteOrder(courier_id=1, order_id=1, complete_time=COMPLETE_TIME),
                                    CompleteOrder(courier_id=1, order_id=2, complete_time=COMPLETE_TIME)])

    assert [(x['courier_id'], x['completed_time']) for x in storage.rows('orders')] == [(1, None), (1, None)]
    assert storage.rollbacks == 1
