import asyncio
import logging

import aiomysql

import Application
import cfg
import db_init_DDS_queries


async def init():
    """Creates the database and its tables if they don`t exist and registers the courier types from the config."""
    conn = await aiomysql.connect(host=cfg.DB_HOST, password=cfg.DB_PASSWORD, port=cfg.DB_PORT,
                                  user=cfg.DB_USER, cursorclass=aiomysql.DictCursor, autocommit=False)
    try:
        cur = await conn.cursor()
        await conn.begin()

        await cur.execute(f'CREATE DATABASE IF NOT EXISTS `{cfg.DATABASE}`')
        await cur.execute(f'USE `{cfg.DATABASE}`')
        for table in db_init_DDS_queries.TABLES:
            await cur.execute(table)
        await cur.executemany(db_init_DDS_queries.INSERT_COURIER_TYPE,
                              [(x.value,) for x in cfg.COURIER_TYPE_FACTORS])

        await conn.commit()
        logging.info(f'init: database={cfg.DATABASE}; schema is ready')
    except aiomysql.Error as error:
        logging.error(f'init: database={cfg.DATABASE}; could not create the schema: {error}')
        await conn.rollback()
        raise
    finally:
        conn.close()


def main():
    logging.basicConfig(level=cfg.LOG_LEVEL)
    asyncio.run(init())
    Application.run()


if __name__ == '__main__':
    main()
