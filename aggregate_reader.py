import logging
from datetime import date, datetime, time
from typing import List

import db_queries
from db_connection import Executor, Storage
from entities import CourierRecord, CourierType, OrderRecord
from errors import NotFound


# aggregates are rebuilt from the rows on every read, nothing is cached
# load_* coroutines accept any executor, so the writer reuses them inside of its transactions


async def load_courier(db: Executor, courier_id: int) -> CourierRecord:
    """
    Reads the courier row and its regions and working hours.
    :raises NotFound: if there is no courier with this id; a courier without child rows is returned as is
    """
    row = await db.fetchone(db_queries.SELECT_COURIER, (courier_id,))
    if row is None:
        logging.info(f'load_courier: courier_id={courier_id}; courier not found')
        raise NotFound(f'courier {courier_id} not found')

    regions = await db.fetchall(db_queries.SELECT_COURIER_REGIONS, (courier_id,))
    working_hours = await db.fetchall(db_queries.SELECT_COURIER_WORKING_HOURS, (courier_id,))
    return CourierRecord(courier_id=row['courier_id'], courier_type=CourierType(row['courier_type'].strip()),
                         regions=[x['region'] for x in regions],
                         working_hours=[x['working_interval'] for x in working_hours])


async def load_order(db: Executor, order_id: int) -> OrderRecord:
    """
    Reads the order row and its delivery hours.
    :raises NotFound: if there is no order with this id
    """
    row = await db.fetchone(db_queries.SELECT_ORDER, (order_id,))
    if row is None:
        logging.info(f'load_order: order_id={order_id}; order not found')
        raise NotFound(f'order {order_id} not found')

    delivery_hours = await db.fetchall(db_queries.SELECT_ORDER_DELIVERY_HOURS, (order_id,))
    return OrderRecord(order_id=row['order_id'], weight=float(row['weight']), region=row['region'], cost=row['cost'],
                       delivery_hours=[x['delivery_interval'] for x in delivery_hours],
                       courier_id=row['courier_id'], completed_time=row['completed_time'])


class CourierReader:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def get(self, courier_id: int) -> CourierRecord:
        logging.debug(f'CourierReader.get: courier_id={courier_id}; entered')
        return await load_courier(self.storage, courier_id)

    async def get_all(self, limit: int, offset: int) -> List[CourierRecord]:
        """
        Page of couriers in the order of creation.
        :raises NotFound: if the page is empty
        """
        logging.debug(f'CourierReader.get_all: limit={limit}; offset={offset}; entered')
        ids = await self.storage.fetchall(db_queries.SELECT_COURIER_IDS_PAGE, (limit, offset))
        if not ids:
            raise NotFound(f'no couriers with limit={limit} offset={offset}')
        return [await load_courier(self.storage, x['courier_id']) for x in ids]

    async def get_costs(self, courier_id: int, start_date: date, end_date: date) -> List[int]:
        """
        Costs of the orders the courier has completed between the midnights of start_date and end_date, both inclusive.
        """
        logging.debug(f'CourierReader.get_costs: courier_id={courier_id}; start_date={start_date}; '
                      f'end_date={end_date}; entered')
        rows = await self.storage.fetchall(db_queries.SELECT_COURIER_COSTS,
                                           (courier_id, datetime.combine(start_date, time.min),
                                            datetime.combine(end_date, time.min)))
        return [x['cost'] for x in rows]


class OrderReader:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def get(self, order_id: int) -> OrderRecord:
        logging.debug(f'OrderReader.get: order_id={order_id}; entered')
        return await load_order(self.storage, order_id)

    async def get_all(self, limit: int, offset: int) -> List[OrderRecord]:
        """
        Page of orders in the order of creation.
        :raises NotFound: if the page is empty
        """
        logging.debug(f'OrderReader.get_all: limit={limit}; offset={offset}; entered')
        ids = await self.storage.fetchall(db_queries.SELECT_ORDER_IDS_PAGE, (limit, offset))
        if not ids:
            raise NotFound(f'no orders with limit={limit} offset={offset}')
        return [await load_order(self.storage, x['order_id']) for x in ids]
