from pymongo import AsyncMongoClient
from pymongo.errors import ConnectionFailure
from loguru import logger
import os
import certifi

from dotenv import load_dotenv

load_dotenv()

class MongoDB:
    client: AsyncMongoClient = None

    @classmethod
    def connect(cls, uri: str):
        options = {}
        if uri.startswith("mongodb+srv://") or os.getenv("MONGODB_TLS", "false").lower() in ("true", "1", "yes"):
            options["tlsCAFile"] = certifi.where()
        cls.client = AsyncMongoClient(uri, tz_aware=True, **options)
        logger.info("MongoDB client created")

    @classmethod
    def get_database(cls, db_name: str = None):
        if cls.client is None:
            raise RuntimeError("MongoDB client is not connected; call MongoDB.connect first")
        return cls.client[db_name or os.getenv('DB_NAME', 'salud')]
    
    @classmethod
    async def connection_status(cls):
        try:
            await cls.client.admin.command('ping')
            return {"status": "connected", "db": os.getenv('DB_NAME', 'salud')}
        except ConnectionFailure as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return {"status": "disconnected", "db": os.getenv('DB_NAME', 'salud')}

    @classmethod
    async def close(cls):
        if cls.client is not None:
            await cls.client.close()
            cls.client = None
            logger.info("MongoDB client closed")
