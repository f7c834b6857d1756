import json
import logging
import math
import re
from datetime import datetime, timezone
from typing import Dict, List, Optional

from aiohttp import web

import cfg  # configure file
from entities import CompleteOrder, CourierInput, CourierMetaInfo, CourierRecord, CourierType, OrderInput, OrderRecord
from errors import DeliveryAppError, NotFound, StorageError
from services import CourierService, OrderService

COURIER_SERVICE = web.AppKey('courier_service', CourierService)
ORDER_SERVICE = web.AppKey('order_service', OrderService)

TIME_INTERVAL_LENGTH = len('HH:MM-HH:MM')
TIME_INTERVAL = re.compile(r'^([0-1]?[0-9]|2[0-3]):[0-5][0-9]-([0-1]?[0-9]|2[0-3]):[0-5][0-9]$')


# validation of the requests is done here, services receive only well-typed values


def bad_request() -> web.Response:
    return web.json_response({}, status=400)


def error_response(handler_name: str, request: web.Request, error: DeliveryAppError,
                   not_found_status: int = 404) -> web.Response:
    if isinstance(error, NotFound):
        logging.info(f'{handler_name}: request={request}; {error}, returning {not_found_status}')
        return web.json_response({}, status=not_found_status)
    if isinstance(error, StorageError):
        logging.error(f'{handler_name}: request={request}; storage error: {error}, returning 400')
    else:
        logging.info(f'{handler_name}: request={request}; {type(error).__name__}: {error}, returning 400')
    return bad_request()


def is_int(value) -> bool:
    # bool is a subclass of int, but true/false aren`t valid ids
    return type(value) is int


def is_positive_int(value) -> bool:
    return is_int(value) and value > 0


def is_time_interval(value) -> bool:
    return type(value) is str and len(value) == TIME_INTERVAL_LENGTH and TIME_INTERVAL.match(value) is not None


def parse_courier(data) -> Optional[CourierInput]:
    if type(data) is not dict or set(data.keys()) != {'courier_type', 'regions', 'working_hours'}:
        return None
    if type(data['courier_type']) is not str or data['courier_type'] not in CourierType.__members__:
        return None
    regions, working_hours = data['regions'], data['working_hours']
    if type(regions) is not list or not regions or not all(is_positive_int(x) for x in regions):
        return None
    if type(working_hours) is not list or not working_hours or not all(is_time_interval(x) for x in working_hours):
        return None
    return CourierInput(courier_type=CourierType(data['courier_type']), regions=regions, working_hours=working_hours)


def parse_order(data) -> Optional[OrderInput]:
    if type(data) is not dict or set(data.keys()) != {'weight', 'regions', 'delivery_hours', 'cost'}:
        return None
    weight, delivery_hours = data['weight'], data['delivery_hours']
    if type(weight) not in (int, float) or not math.isfinite(weight) or weight <= 0:
        return None
    if not is_positive_int(data['regions']) or not is_int(data['cost']) or data['cost'] < 0:
        return None
    if type(delivery_hours) is not list or not delivery_hours or not all(is_time_interval(x) for x in delivery_hours):
        return None
    return OrderInput(weight=float(weight), region=data['regions'], delivery_hours=delivery_hours, cost=data['cost'])


def parse_timestamp(value) -> Optional[datetime]:
    """ISO 8601 timestamp, e.g. 2023-05-01T10:15:00.000Z, converted to naive UTC. Naive input is taken as UTC."""
    if type(value) is not str or 'T' not in value:
        return None
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    try:
        timestamp = datetime.fromisoformat(value)
    except ValueError:
        return None
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc).replace(tzinfo=None)
    return timestamp


def parse_completion(data) -> Optional[CompleteOrder]:
    if type(data) is not dict or set(data.keys()) != {'courier_id', 'order_id', 'complete_time'}:
        return None
    if not is_positive_int(data['courier_id']) or not is_positive_int(data['order_id']):
        return None
    complete_time = parse_timestamp(data['complete_time'])
    if complete_time is None:
        return None
    return CompleteOrder(courier_id=data['courier_id'], order_id=data['order_id'], complete_time=complete_time)


def parse_id(request: web.Request, key: str) -> Optional[int]:
    try:
        value = int(request.match_info[key])
    except (KeyError, ValueError):
        return None
    return value if value > 0 else None


def parse_page(request: web.Request) -> Optional[tuple]:
    """limit and offset from the query string; limit must be positive, offset non-negative"""
    try:
        limit = int(request.query.get('limit', cfg.DEFAULT_LIMIT))
        offset = int(request.query.get('offset', cfg.DEFAULT_OFFSET))
    except ValueError:
        return None
    if limit <= 0 or offset < 0:
        return None
    return limit, offset


def courier_to_json(courier: CourierRecord) -> Dict:
    return {'courier_id': courier.courier_id, 'courier_type': courier.courier_type.value,
            'regions': list(courier.regions), 'working_hours': list(courier.working_hours)}


def meta_info_to_json(meta_info: CourierMetaInfo) -> Dict:
    return {'courier_id': meta_info.courier_id, 'courier_type': meta_info.courier_type.value,
            'regions': list(meta_info.regions), 'working_hours': list(meta_info.working_hours),
            'rating': meta_info.rating, 'earnings': meta_info.earnings}


def order_to_json(order: OrderRecord) -> Dict:
    completed_time = None
    if order.completed_time is not None:
        completed_time = order.completed_time.isoformat(timespec='milliseconds') + 'Z'
    return {'order_id': order.order_id, 'weight': order.weight, 'regions': order.region,
            'delivery_hours': list(order.delivery_hours), 'cost': order.cost,
            'courier_id': order.courier_id, 'completed_time': completed_time}


async def read_json(request: web.Request):
    try:
        return await request.json()
    except json.decoder.JSONDecodeError:
        return None


async def get_root(request: web.Request):
    return web.Response(status=200, text='Hello, I\'m alive! Please, don\'t kill me. At least put out the fire afterwards.')


async def get_ping(request: web.Request):
    return web.Response(status=200, text='pong')


async def post_couriers(request: web.Request):
    """
    Handler for "POST /couriers" request. Registers received couriers, either all of them or none.
    :param request: HTTP-request passed by aiohttp, body is {"couriers": [{courier_type, regions, working_hours}]}
    :return: 200 with the registered couriers, 400 if any courier is invalid or can`t be stored
    """
    logging.info(f'post_couriers: request={request}; entered')
    data = await read_json(request)
    if type(data) is not dict or set(data.keys()) != {'couriers'} or type(data['couriers']) is not list:
        logging.info(f'post_couriers: request={request}; invalid json, returning 400')
        return bad_request()

    couriers = [parse_courier(x) for x in data['couriers']]
    if any(x is None for x in couriers):
        logging.info(f'post_couriers: request={request}; invalid data on couriers, returning 400')
        return bad_request()

    try:
        added = await request.app[COURIER_SERVICE].add_couriers(couriers)
    except DeliveryAppError as error:
        return error_response('post_couriers', request, error)
    logging.info(f'post_couriers: request={request}; request is valid and fulfilled, creating ok response')
    return web.json_response({'couriers': [courier_to_json(x) for x in added]}, status=200)


async def get_courier_id(request: web.Request):
    """Handler for "GET /couriers/{courier_id}" request."""
    courier_id = parse_id(request, 'courier_id')
    if courier_id is None:
        return bad_request()

    try:
        courier = await request.app[COURIER_SERVICE].get_courier(courier_id)
    except DeliveryAppError as error:
        return error_response('get_courier_id', request, error)
    return web.json_response(courier_to_json(courier), status=200)


async def get_couriers(request: web.Request):
    """Handler for "GET /couriers?limit=&offset=" request. An empty page is a 200 with an empty list."""
    page = parse_page(request)
    if page is None:
        logging.info(f'get_couriers: request={request}; invalid limit or offset, returning 400')
        return bad_request()
    limit, offset = page

    try:
        couriers = await request.app[COURIER_SERVICE].get_couriers(limit, offset)
    except DeliveryAppError as error:
        return error_response('get_couriers', request, error)
    return web.json_response({'couriers': [courier_to_json(x) for x in couriers], 'limit': limit, 'offset': offset},
                             status=200)


async def get_courier_meta_info(request: web.Request):
    """
    Handler for "GET /couriers/meta-info/{courier_id}?start_date=&end_date=" request.
    Dates are YYYY-MM-DD, the window is measured midnight to midnight.
    """
    logging.info(f'get_courier_meta_info: request={request}; entered')
    courier_id = parse_id(request, 'courier_id')
    start_date = request.query.get('start_date')
    end_date = request.query.get('end_date')
    if courier_id is None or not start_date or not end_date:
        logging.info(f'get_courier_meta_info: request={request}; invalid parameters, returning 400')
        return bad_request()

    try:
        meta_info = await request.app[COURIER_SERVICE].get_courier_meta_info(courier_id, start_date, end_date)
    except DeliveryAppError as error:
        return error_response('get_courier_meta_info', request, error)
    return web.json_response(meta_info_to_json(meta_info), status=200)


async def post_orders(request: web.Request):
    """
    Handler for "POST /orders" request. Registers received orders, either all of them or none.
    :param request: HTTP-request passed by aiohttp, body is {"orders": [{weight, regions, delivery_hours, cost}]}
    :return: 200 with the registered orders, 400 if any order is invalid or can`t be stored
    """
    logging.info(f'post_orders: request={request}; entered')
    data = await read_json(request)
    if type(data) is not dict or set(data.keys()) != {'orders'} or type(data['orders']) is not list:
        logging.info(f'post_orders: request={request}; invalid json, returning 400')
        return bad_request()

    orders = [parse_order(x) for x in data['orders']]
    if any(x is None for x in orders):
        logging.info(f'post_orders: request={request}; invalid data on orders, returning 400')
        return bad_request()

    try:
        added = await request.app[ORDER_SERVICE].add_orders(orders)
    except DeliveryAppError as error:
        return error_response('post_orders', request, error)
    logging.info(f'post_orders: request={request}; request is valid and fulfilled, creating ok response')
    return web.json_response({'orders': [order_to_json(x) for x in added]}, status=200)


async def get_order_id(request: web.Request):
    """Handler for "GET /orders/{order_id}" request."""
    order_id = parse_id(request, 'order_id')
    if order_id is None:
        return bad_request()

    try:
        order = await request.app[ORDER_SERVICE].get_order(order_id)
    except DeliveryAppError as error:
        return error_response('get_order_id', request, error)
    return web.json_response(order_to_json(order), status=200)


async def get_orders(request: web.Request):
    """Handler for "GET /orders?limit=&offset=" request. An empty page is a 200 with an empty list."""
    page = parse_page(request)
    if page is None:
        logging.info(f'get_orders: request={request}; invalid limit or offset, returning 400')
        return bad_request()
    limit, offset = page

    try:
        orders = await request.app[ORDER_SERVICE].get_orders(limit, offset)
    except DeliveryAppError as error:
        return error_response('get_orders', request, error)
    return web.json_response({'orders': [order_to_json(x) for x in orders], 'limit': limit, 'offset': offset},
                             status=200)


async def post_orders_complete(request: web.Request):
    """
    Handler for "POST /orders/complete" request. Marks passed orders as completed, either all of them or none.
    :param request: HTTP-request passed by aiohttp, body is {"complete_info": [{courier_id, order_id, complete_time}]}
    :return: 200 with the list of completed orders, 400 if any completion is invalid or isn`t allowed
    """
    logging.info(f'post_orders_complete: request={request}; entered')
    data = await read_json(request)
    if type(data) is not dict or set(data.keys()) != {'complete_info'} or type(data['complete_info']) is not list:
        logging.info(f'post_orders_complete: request={request}; invalid json, returning 400')
        return bad_request()

    completions: List[Optional[CompleteOrder]] = [parse_completion(x) for x in data['complete_info']]
    if any(x is None for x in completions):
        logging.info(f'post_orders_complete: request={request}; invalid data on completions, returning 400')
        return bad_request()

    try:
        completed = await request.app[ORDER_SERVICE].set_complete_orders(completions)
    except DeliveryAppError as error:
        # an absent order is the client`s mistake here, not a missing resource
        return error_response('post_orders_complete', request, error, not_found_status=400)
    logging.info(f'post_orders_complete: request={request}; request has been fulfilled, creating response')
    return web.json_response([order_to_json(x) for x in completed], status=200)
