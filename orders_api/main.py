# orders_api/main.py
import uvicorn
from sqlalchemy.exc import SQLAlchemyError

from orders_api.api import create_app
from orders_api.data.database import init_db
from orders_api.utils.logging import get_logger

logger = get_logger(__name__)

logger.info("Initializing database...")

try:
    tables = init_db()
    logger.info(f"Database tables ready: {tables}")
except SQLAlchemyError as e:
    logger.error(f"Failed to create tables: {e}")
    raise


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
