import os
from typing import List, Optional
from bson import ObjectId
from datetime import datetime, timezone
from loguru import logger

from app.helpers.Database import MongoDB
from app.schemas.News import NewsItem

from dotenv import load_dotenv

load_dotenv()


class NewsModel:
    def __init__(
        self,
        database=None,
        collection_name="Noticias",
        departments_collection="Departamentos",
        attachments_collection="Archivos",
    ):
        if database is None:
            database = MongoDB.get_database(os.getenv('DB_NAME'))
        self.collection = database[collection_name]
        self.departments_collection = departments_collection
        self.attachments_collection = attachments_collection

    def _populate_stages(self) -> List[dict]:
        """
        Aggregation stages that join the department and attachment documents.
        """
        return [
            {"$lookup": {
                "from": self.departments_collection,
                "localField": "department",
                "foreignField": "_id",
                "as": "department",
            }},
            {"$unwind": {"path": "$department", "preserveNullAndEmptyArrays": True}},
            {"$lookup": {
                "from": self.attachments_collection,
                "localField": "attachments",
                "foreignField": "_id",
                "as": "attachmentDocs",
            }},
        ]

    @staticmethod
    def _to_news_item(document: dict) -> NewsItem:
        # $lookup does not keep the order of the local array
        joined = {doc["_id"]: doc for doc in document.pop("attachmentDocs", [])}
        document["attachments"] = [joined[ref] for ref in document.get("attachments", []) if ref in joined]
        return NewsItem(**document)

    async def list_news(self, filters: dict = {}, skip: int = 0, limit: int = 5) -> List[NewsItem]:
        """
        Retrieve a page of news, newest first, with department and attachments joined.
        """
        pipeline = [
            {"$match": filters},
            {"$sort": {"_id": -1}},
            {"$skip": skip},
            {"$limit": limit},
            *self._populate_stages(),
        ]
        cursor = await self.collection.aggregate(pipeline)
        documents = await cursor.to_list(length=None)
        return [self._to_news_item(doc) for doc in documents]

    async def get_news(self, filters: dict) -> Optional[NewsItem]:
        """
        Retrieve a single news item matching the given filters, joined.
        """
        pipeline = [{"$match": filters}, {"$limit": 1}, *self._populate_stages()]
        cursor = await self.collection.aggregate(pipeline)
        documents = await cursor.to_list(length=1)
        if documents:
            return self._to_news_item(documents[0])
        return None

    async def get_news_count(self, filters: dict = {}) -> int:
        return await self.collection.count_documents(filters)

    async def create_news(self, data: dict) -> ObjectId:
        """
        Insert a news document. `department` and `attachments` must hold ObjectIds.
        """
        result = await self.collection.insert_one(data)
        logger.debug(f"Inserted news {result.inserted_id}")
        return result.inserted_id

    async def update_news(self, news_id: ObjectId, updates: dict) -> bool:
        updates["updatedOn"] = datetime.now(timezone.utc)
        result = await self.collection.update_one({"_id": news_id}, {"$set": updates})
        return result.matched_count > 0

    async def delete_news(self, news_id: ObjectId) -> bool:
        result = await self.collection.delete_one({"_id": news_id})
        return result.deleted_count > 0
