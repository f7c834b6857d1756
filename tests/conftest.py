import pytest

import Application
from entities import CourierInput, CourierType, OrderInput
from fake_storage import FakeStorage


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
async def client(aiohttp_client, storage):
    return await aiohttp_client(Application.create_app(storage))


@pytest.fixture
def foot_courier():
    return CourierInput(courier_type=CourierType.FOOT, regions=[1, 2, 3], working_hours=['10:00-12:00'])


@pytest.fixture
def auto_courier():
    return CourierInput(courier_type=CourierType.AUTO, regions=[7], working_hours=['08:00-10:00', '18:00-21:30'])


@pytest.fixture
def small_order():
    return OrderInput(weight=2.5, region=1, delivery_hours=['10:30-11:30'], cost=100)
