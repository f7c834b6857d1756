COURIER_TYPES = '''
CREATE TABLE IF NOT EXISTS `courier_types` (
  `courier_type_id` tinyint unsigned NOT NULL AUTO_INCREMENT,
  `courier_type` char(10) NOT NULL,
  PRIMARY KEY (`courier_type_id`),
  UNIQUE KEY `courier_type` (`courier_type`)
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_0900_ai_ci'''

INSERT_COURIER_TYPE = '''INSERT IGNORE INTO `courier_types` (`courier_type`) VALUES (%s)'''

COURIERS = '''
CREATE TABLE IF NOT EXISTS `couriers` (
  `courier_id` int unsigned NOT NULL AUTO_INCREMENT,
  `courier_type_id` tinyint unsigned NOT NULL,
  PRIMARY KEY (`courier_id`),
  KEY `courier_type_id` (`courier_type_id`),
  CONSTRAINT `couriers_ibfk_1` FOREIGN KEY (`courier_type_id`) REFERENCES `courier_types` (`courier_type_id`)
  ON UPDATE CASCADE
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_0900_ai_ci'''

COURIERS_REGIONS = '''
CREATE TABLE IF NOT EXISTS `couriers_regions` (
  `relation_id` int unsigned NOT NULL AUTO_INCREMENT,
  `courier_id` int unsigned NOT NULL,
  `region` int unsigned NOT NULL,
  PRIMARY KEY (`relation_id`),
  KEY `courier_id` (`courier_id`),
  CONSTRAINT `couriers_regions_ibfk_1` FOREIGN KEY (`courier_id`) REFERENCES `couriers` (`courier_id`)
  ON DELETE CASCADE ON UPDATE CASCADE
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_0900_ai_ci'''

COURIERS_WORKING_HOURS = '''
CREATE TABLE IF NOT EXISTS `couriers_working_hours` (
  `relation_id` int unsigned NOT NULL AUTO_INCREMENT,
  `courier_id` int unsigned NOT NULL,
  `working_interval` char(11) NOT NULL,
  PRIMARY KEY (`relation_id`),
  KEY `courier_id` (`courier_id`),
  CONSTRAINT `couriers_working_hours_ibfk_1` FOREIGN KEY (`courier_id`) REFERENCES `couriers` (`courier_id`)
  ON DELETE CASCADE ON UPDATE CASCADE
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_0900_ai_ci'''

ORDERS = '''
CREATE TABLE IF NOT EXISTS `orders` (
  `order_id` int unsigned NOT NULL AUTO_INCREMENT,
  `weight` double NOT NULL,
  `region` int unsigned NOT NULL,
  `cost` int unsigned NOT NULL,
  `courier_id` int unsigned DEFAULT NULL,
  `completed_time` datetime(3) NULL DEFAULT NULL,
  PRIMARY KEY (`order_id`),
  KEY `courier_id` (`courier_id`),
  KEY `completed_time` (`completed_time`),
  CONSTRAINT `orders_ibfk_1` FOREIGN KEY (`courier_id`) REFERENCES `couriers` (`courier_id`)
  ON DELETE SET NULL ON UPDATE CASCADE
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_0900_ai_ci'''

DELIVERY_HOURS_OF_ORDERS = '''
CREATE TABLE IF NOT EXISTS `delivery_hours_of_orders` (
  `relation_id` int unsigned NOT NULL AUTO_INCREMENT,
  `order_id` int unsigned NOT NULL,
  `delivery_interval` char(11) NOT NULL,
  PRIMARY KEY (`relation_id`),
  KEY `order_id` (`order_id`),
  CONSTRAINT `delivery_hours_of_orders_ibfk_1` FOREIGN KEY (`order_id`) REFERENCES `orders` (`order_id`)
  ON DELETE CASCADE ON UPDATE CASCADE
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_0900_ai_ci'''

# parents go before children because of the foreign keys
TABLES = (COURIER_TYPES, COURIERS, COURIERS_REGIONS, COURIERS_WORKING_HOURS, ORDERS, DELIVERY_HOURS_OF_ORDERS)
