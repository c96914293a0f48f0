# database.py
from motor.motor_asyncio import AsyncIOMotorClient
import logging
from config import MONGODB_URI, MONGODB_DB

logger = logging.getLogger(__name__)

client = AsyncIOMotorClient(MONGODB_URI)
db = client[MONGODB_DB]

async def get_db():
    return db

async def init_db(database=None):
    database = database if database is not None else db
    await database.courses.create_index("id", unique=True)
    await database.students.create_index("id", unique=True)
    await database.students.create_index("courseId")
    logger.info(f"Indexes ensured on database {database.name}")
