import os

from entities import CourierType, CourierFactors

# configure file, every value can be overridden by the environment variable of the same name

DB_HOST = os.environ.get('DB_HOST', 'localhost')
DB_PORT = int(os.environ.get('DB_PORT', 3306))
DB_USER = os.environ.get('DB_USER', 'root')
DB_PASSWORD = os.environ.get('DB_PASSWORD', '')
DATABASE = os.environ.get('DATABASE', 'candy_delivery_app')
DB_POOL_MINSIZE = int(os.environ.get('DB_POOL_MINSIZE', 1))
DB_POOL_MAXSIZE = int(os.environ.get('DB_POOL_MAXSIZE', 10))

BIND_IP = os.environ.get('BIND_IP', '0.0.0.0')
PORT = int(os.environ.get('PORT', 8080))

LOG_LEVEL = os.environ.get('LOGLEVEL', 'DEBUG').upper()

# pagination defaults for GET /couriers and GET /orders
DEFAULT_LIMIT = int(os.environ.get('DEFAULT_LIMIT', 1))
DEFAULT_OFFSET = int(os.environ.get('DEFAULT_OFFSET', 0))

COURIER_TYPE_FACTORS = {
    CourierType.FOOT: CourierFactors(cost=int(os.environ.get('FOOT_COURIER_COST_FACTOR', 2)),
                                     rate=int(os.environ.get('FOOT_COURIER_RATE_FACTOR', 3))),
    CourierType.BIKE: CourierFactors(cost=int(os.environ.get('BIKE_COURIER_COST_FACTOR', 3)),
                                     rate=int(os.environ.get('BIKE_COURIER_RATE_FACTOR', 2))),
    CourierType.AUTO: CourierFactors(cost=int(os.environ.get('AUTO_COURIER_COST_FACTOR', 4)),
                                     rate=int(os.environ.get('AUTO_COURIER_RATE_FACTOR', 1))),
}
