import logging
from typing import List, Sequence

import db_queries
from aggregate_reader import load_courier, load_order
from db_connection import Storage
from entities import CompleteOrder, CourierInput, CourierRecord, OrderInput, OrderRecord
from errors import NotFound, OwnershipMismatch, UnknownCourierType


# every call is one transaction: items are written one by one in the order they came,
# and a failure on any of them rolls back the whole batch, not only the failed item


class CourierWriter:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def add(self, couriers: Sequence[CourierInput]) -> List[CourierRecord]:
        """
        Registers the couriers with their regions and working hours.
        :param couriers: couriers to register, in the order the records should be returned
        :return: the couriers as they were stored, with ids assigned by the DB
        :raises UnknownCourierType: if a type isn't registered in courier_types, nothing is stored then
        :raises StorageError: if any query fails, nothing is stored then
        """
        logging.info(f'CourierWriter.add: couriers={len(couriers)}; entered')
        added = []
        async with self.storage.transaction() as tx:
            for courier in couriers:
                type_row = await tx.fetchone(db_queries.SELECT_COURIER_TYPE_ID, (courier.courier_type.value,))
                if type_row is None:
                    logging.info(f'CourierWriter.add: courier_type={courier.courier_type.value}; type is not registered')
                    raise UnknownCourierType(f'courier type {courier.courier_type.value} is not registered')

                courier_id = await tx.execute(db_queries.INSERT_COURIER, (type_row['courier_type_id'],))
                logging.debug(f'CourierWriter.add: courier_id={courier_id}; inserted into couriers')

                await tx.executemany(db_queries.INSERT_COURIER_REGION,
                                     [(courier_id, region) for region in courier.regions])
                logging.debug(f'CourierWriter.add: courier_id={courier_id}; inserted into couriers_regions')

                await tx.executemany(db_queries.INSERT_COURIER_WORKING_HOURS,
                                     [(courier_id, interval) for interval in courier.working_hours])
                logging.debug(f'CourierWriter.add: courier_id={courier_id}; inserted into couriers_working_hours')

                added.append(await load_courier(tx, courier_id))

        logging.info(f'CourierWriter.add: couriers={[x.courier_id for x in added]}; committed')
        return added


class OrderWriter:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def add(self, orders: Sequence[OrderInput]) -> List[OrderRecord]:
        """
        Registers the orders with their delivery hours.
        :return: the orders as they were stored, not completed and not bound to any courier yet
        :raises StorageError: if any query fails, nothing is stored then
        """
        logging.info(f'OrderWriter.add: orders={len(orders)}; entered')
        added = []
        async with self.storage.transaction() as tx:
            for order in orders:
                order_id = await tx.execute(db_queries.INSERT_ORDER, (order.weight, order.region, order.cost))
                logging.debug(f'OrderWriter.add: order_id={order_id}; inserted into orders')

                await tx.executemany(db_queries.INSERT_ORDER_DELIVERY_HOURS,
                                     [(order_id, interval) for interval in order.delivery_hours])
                logging.debug(f'OrderWriter.add: order_id={order_id}; inserted into delivery_hours_of_orders')

                added.append(await load_order(tx, order_id))

        logging.info(f'OrderWriter.add: orders={[x.order_id for x in added]}; committed')
        return added

    async def set_completed(self, completions: Sequence[CompleteOrder]) -> List[OrderRecord]:
        """
        Marks the orders as completed by the couriers they are bound to.
        :return: the completed orders in the order of completions
        :raises NotFound: if an order doesn't exist
        :raises OwnershipMismatch: if an order isn't bound to any courier or is bound to another one
        :raises StorageError: if any query fails
        Nothing is changed if any of these is raised.
        """
        logging.info(f'OrderWriter.set_completed: completions={len(completions)}; entered')
        completed = []
        async with self.storage.transaction() as tx:
            for completion in completions:
                row = await tx.fetchone(db_queries.SELECT_ORDER_COURIER_FOR_UPDATE, (completion.order_id,))
                if row is None:
                    logging.info(f'OrderWriter.set_completed: order_id={completion.order_id}; order not found')
                    raise NotFound(f'order {completion.order_id} not found')

                recorded_courier_id = row['courier_id']
                if recorded_courier_id is None or recorded_courier_id != completion.courier_id:
                    logging.info(f'OrderWriter.set_completed: order_id={completion.order_id}; '
                                 f'courier_id={completion.courier_id}; recorded courier_id={recorded_courier_id}; '
                                 f'courier id assigned for this order doesn\'t match id in request')
                    raise OwnershipMismatch(f'order {completion.order_id} is not bound to courier '
                                            f'{completion.courier_id}')

                await tx.execute(db_queries.UPDATE_ORDER_COMPLETED,
                                 (completion.courier_id, completion.complete_time, completion.order_id))
                logging.debug(f'OrderWriter.set_completed: order_id={completion.order_id}; marked as completed')

                completed.append(await load_order(tx, completion.order_id))

        logging.info(f'OrderWriter.set_completed: orders={[x.order_id for x in completed]}; committed')
        return completed
