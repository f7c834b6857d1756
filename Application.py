import logging
from typing import Optional

from aiohttp import web

import cfg
import handlers
from db_connection import MySQLStorage, Storage
from services import CourierService, OrderService


def create_app(storage: Optional[Storage] = None) -> web.Application:
    """
    Builds the application. If no storage is passed, a pool of MySQL connections
    is opened on startup and closed on cleanup.
    """
    app = web.Application()

    if storage is not None:
        bind_services(app, storage)
    else:
        app.cleanup_ctx.append(mysql_storage)

    app.add_routes([web.get('/', handlers.get_root), web.get('/ping', handlers.get_ping),

                    web.post('/couriers', handlers.post_couriers), web.post('/couriers/', handlers.post_couriers),
                    web.get('/couriers', handlers.get_couriers), web.get('/couriers/', handlers.get_couriers),
                    web.get(r'/couriers/{courier_id:\d+}', handlers.get_courier_id),
                    web.get(r'/couriers/meta-info/{courier_id:\d+}', handlers.get_courier_meta_info),

                    web.post('/orders', handlers.post_orders), web.post('/orders/', handlers.post_orders),
                    web.get('/orders', handlers.get_orders), web.get('/orders/', handlers.get_orders),
                    web.post('/orders/complete', handlers.post_orders_complete),
                    web.post('/orders/complete/', handlers.post_orders_complete),
                    web.get(r'/orders/{order_id:\d+}', handlers.get_order_id)])
    return app


def bind_services(app: web.Application, storage: Storage) -> None:
    app[handlers.COURIER_SERVICE] = CourierService(storage, cfg.COURIER_TYPE_FACTORS)
    app[handlers.ORDER_SERVICE] = OrderService(storage)


async def mysql_storage(app: web.Application):
    storage = await MySQLStorage.connect()
    bind_services(app, storage)
    yield
    await storage.close()


def run():
    logging.basicConfig(level=cfg.LOG_LEVEL)
    web.run_app(create_app(), host=cfg.BIND_IP, port=cfg.PORT, access_log=logging.getLogger('aiohttp.server'))
