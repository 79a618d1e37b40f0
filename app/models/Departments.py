import os
from typing import Optional
from bson import ObjectId

from app.helpers.Database import MongoDB
from app.schemas.Departments import Department

from dotenv import load_dotenv

load_dotenv()


class DepartmentModel:
    def __init__(self, database=None, collection_name="Departamentos"):
        if database is None:
            database = MongoDB.get_database(os.getenv('DB_NAME'))
        self.collection = database[collection_name]

    async def get_department(self, department_id: ObjectId) -> Optional[Department]:
        document = await self.collection.find_one({"_id": department_id})
        if document:
            return Department(**document)
        return None

    async def create_department(self, data: dict) -> ObjectId:
        department = Department(**data)
        result = await self.collection.insert_one(department.model_dump(by_alias=True))
        return result.inserted_id
