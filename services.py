import logging
from typing import Dict, List, Optional, Sequence

import metrics
from aggregate_reader import CourierReader, OrderReader
from aggregate_writer import CourierWriter, OrderWriter
from db_connection import Storage
from entities import (CompleteOrder, CourierFactors, CourierInput, CourierMetaInfo, CourierRecord, CourierType,
                      OrderInput, OrderRecord)
from errors import NotFound


class CourierService:
    """Operations on couriers consumed by the handlers."""

    def __init__(self, storage: Storage, factors: Optional[Dict[CourierType, CourierFactors]] = None):
        self.reader = CourierReader(storage)
        self.writer = CourierWriter(storage)
        self.factors = factors

    async def add_couriers(self, couriers: Sequence[CourierInput]) -> List[CourierRecord]:
        return await self.writer.add(couriers)

    async def get_courier(self, courier_id: int) -> CourierRecord:
        return await self.reader.get(courier_id)

    async def get_couriers(self, limit: int, offset: int) -> List[CourierRecord]:
        """Page of couriers, an empty page is an empty list."""
        try:
            return await self.reader.get_all(limit, offset)
        except NotFound:
            logging.debug(f'CourierService.get_couriers: limit={limit}; offset={offset}; page is empty')
            return []

    async def get_courier_meta_info(self, courier_id: int, start_date: metrics.DateLike,
                                    end_date: metrics.DateLike) -> CourierMetaInfo:
        """
        Courier with the rating and earnings for the orders completed between start_date and end_date.
        Both are 0 if nothing was completed in the window.
        :raises DateRangeError: if the window is malformed
        :raises NotFound: if there is no such courier
        """
        start = metrics.parse_date(start_date)
        end = metrics.parse_date(end_date)

        courier = await self.reader.get(courier_id)
        costs = await self.reader.get_costs(courier_id, start, end)
        logging.debug(f'CourierService.get_courier_meta_info: courier_id={courier_id}; '
                      f'completed orders in window={len(costs)}')
        if not costs:
            return CourierMetaInfo.from_record(courier, rating=0, earnings=0)

        rating = metrics.rating(len(costs), start, end, courier.courier_type, self.factors)
        earnings = metrics.earnings(costs, courier.courier_type, self.factors)
        return CourierMetaInfo.from_record(courier, rating=rating, earnings=earnings)


class OrderService:
    """Operations on orders consumed by the handlers."""

    def __init__(self, storage: Storage):
        self.reader = OrderReader(storage)
        self.writer = OrderWriter(storage)

    async def add_orders(self, orders: Sequence[OrderInput]) -> List[OrderRecord]:
        return await self.writer.add(orders)

    async def get_order(self, order_id: int) -> OrderRecord:
        return await self.reader.get(order_id)

    async def get_orders(self, limit: int, offset: int) -> List[OrderRecord]:
        """Page of orders, an empty page is an empty list."""
        try:
            return await self.reader.get_all(limit, offset)
        except NotFound:
            logging.debug(f'OrderService.get_orders: limit={limit}; offset={offset}; page is empty')
            return []

    async def set_complete_orders(self, completions: Sequence[CompleteOrder]) -> List[OrderRecord]:
        return await self.writer.set_completed(completions)
