import logging
from contextlib import contextmanager

import config
from db import create_db_and_tables, get_db_session
from services.cart import CartStore
from utils.config_validator import validate_or_exit
from utils.currency import format_pkr
from utils.logging_config import setup_logging


def silence_sql_loggers():
    # Storage writes happen on every cart mutation; keep them out of the log
    for logger_name in ['sqlalchemy', 'sqlalchemy.engine', 'sqlalchemy.pool', 'sqlalchemy.orm']:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def bootstrap():
    """
    Prepare the process for cart and checkout work.

    Order matters: logging first so that configuration errors and table
    creation are recorded.
    """
    setup_logging()
    silence_sql_loggers()
    validate_or_exit(config)
    create_db_and_tables()
    logging.info(f"Cart storage ready ({config.RUNTIME_ENVIRONMENT.value}, api={config.SHOP_API_URL})")


@contextmanager
def cart_session(storage_key: str | None = None):
    """Open client storage and restore the cart persisted under storage_key."""
    with get_db_session() as session:
        yield CartStore(session, storage_key)


if __name__ == "__main__":
    bootstrap()
    with cart_session() as cart:
        logging.info(f"Restored cart: {cart.item_count()} item(s), total {format_pkr(cart.total())}")
