# couriers

SELECT_COURIER_TYPE_ID = '''SELECT courier_type_id FROM courier_types WHERE courier_type = %s'''

INSERT_COURIER = '''INSERT INTO couriers (courier_type_id) VALUES (%s)'''

INSERT_COURIER_REGION = '''INSERT INTO couriers_regions (courier_id, region) VALUES (%s, %s)'''

INSERT_COURIER_WORKING_HOURS = '''INSERT INTO couriers_working_hours (courier_id, working_interval) VALUES (%s, %s)'''

SELECT_COURIER = '''SELECT couriers.courier_id, courier_types.courier_type FROM couriers
    JOIN courier_types ON couriers.courier_type_id = courier_types.courier_type_id
    WHERE couriers.courier_id = %s'''

SELECT_COURIER_REGIONS = '''SELECT region FROM couriers_regions WHERE courier_id = %s ORDER BY relation_id'''

SELECT_COURIER_WORKING_HOURS = '''SELECT working_interval FROM couriers_working_hours WHERE courier_id = %s
    ORDER BY relation_id'''

SELECT_COURIER_IDS_PAGE = '''SELECT courier_id FROM couriers ORDER BY courier_id LIMIT %s OFFSET %s'''

SELECT_COURIER_COSTS = '''SELECT cost FROM orders WHERE courier_id = %s AND completed_time BETWEEN %s AND %s'''

# orders

INSERT_ORDER = '''INSERT INTO orders (weight, region, cost) VALUES (%s, %s, %s)'''

INSERT_ORDER_DELIVERY_HOURS = '''INSERT INTO delivery_hours_of_orders (order_id, delivery_interval) VALUES (%s, %s)'''

SELECT_ORDER = '''SELECT order_id, weight, region, cost, courier_id, completed_time FROM orders WHERE order_id = %s'''

SELECT_ORDER_DELIVERY_HOURS = '''SELECT delivery_interval FROM delivery_hours_of_orders WHERE order_id = %s
    ORDER BY relation_id'''

SELECT_ORDER_IDS_PAGE = '''SELECT order_id FROM orders ORDER BY order_id LIMIT %s OFFSET %s'''

# FOR UPDATE: nobody can complete the same order concurrently until the transaction is over
SELECT_ORDER_COURIER_FOR_UPDATE = '''SELECT courier_id FROM orders WHERE order_id = %s FOR UPDATE'''

UPDATE_ORDER_COMPLETED = '''UPDATE orders SET courier_id = %s, completed_time = %s WHERE order_id = %s'''
