from typing import List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from datetime import datetime, timezone
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from app.helpers.Exceptions import InvalidIdentifierError, NotFoundError
from app.helpers.Utilities import Utils
from app.models.Attachments import AttachmentModel
from app.models.Departments import DepartmentModel
from app.models.News import NewsModel
from app.schemas.Attachments import AttachmentDescriptor, UploadedFile
from app.schemas.News import NewsFilters, NewsItem

NEWS_PAGE_SIZE = 5

_descriptor_list = TypeAdapter(List[AttachmentDescriptor])


def to_object_id(value, entity: str) -> ObjectId:
    """Convert a client supplied id, re-raising driver errors as InvalidIdentifierError."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise InvalidIdentifierError(entity, str(e)) from e


class NewsService:
    """
    Data access for news items (Noticias).

    Collaborators are passed in so the service never reaches for the global
    database handle itself.
    """

    def __init__(
        self,
        news_model: NewsModel,
        department_model: DepartmentModel,
        attachment_model: AttachmentModel,
        concurrency: int = 5,
    ):
        self.news_model = news_model
        self.department_model = department_model
        self.attachment_model = attachment_model
        self.concurrency = concurrency

    async def list_news(self, filters: Optional[NewsFilters] = None) -> List[NewsItem]:
        """
        Return one page of news, newest first, optionally for a single department.
        """
        filters = filters or NewsFilters()
        query = {}
        if filters.departmentId:
            query["department"] = to_object_id(filters.departmentId, "Department")
        skip = (filters.page - 1) * NEWS_PAGE_SIZE
        news = await self.news_model.list_news(query, skip, NEWS_PAGE_SIZE)
        logger.debug(f"Listed {len(news)} news for page={filters.page} department={filters.departmentId}")
        return news

    async def get_news_by_id(self, news_id) -> Optional[NewsItem]:
        return await self.news_model.get_news({"_id": to_object_id(news_id, "Noticia")})

    async def count_news(self) -> int:
        return await self.news_model.get_news_count({})

    async def create_news(self, department_id, content: str, attachments_json: Optional[str] = None) -> NewsItem:
        """
        Create a news item from attachments that are already stored.

        `attachments_json` is a serialized list of attachment descriptors. Every
        descriptor is published before the news item is written; if any publish
        fails, nothing is written and the aggregated error is raised.
        """
        department = await self._get_department(department_id)
        try:
            descriptors = _descriptor_list.validate_json(attachments_json) if attachments_json else []
        except ValidationError as e:
            raise ValueError(f"Invalid attachments: {e.errors()}") from e

        attachments = await Utils.gather_bounded(
            (self.attachment_model.publish_attachment(descriptor) for descriptor in descriptors),
            self.concurrency,
            "publish",
        )
        return await self._save_news(department.id, content, [a.id for a in attachments])

    async def create_news_with_uploads(self, department_id, content: str, files: List[UploadedFile]) -> NewsItem:
        """
        Create a news item and store its raw uploaded files as new attachments.
        """
        department = await self._get_department(department_id)
        attachments = await self.attachment_model.create_attachments(files) if files else []
        return await self._save_news(department.id, content, [a.id for a in attachments])

    async def update_news(self, news_id, content: Optional[str] = None) -> NewsItem:
        """
        Replace the content of a news item when `content` is non-empty.

        The record is saved either way, so `updatedOn` always moves forward.
        """
        news = await self.get_news_by_id(news_id)
        if not news:
            raise NotFoundError("Noticia")

        updates = {}
        if content:
            updates["content"] = content
        if not await self.news_model.update_news(news.id, updates):
            raise NotFoundError("Noticia")
        logger.info(f"Updated news {news.id} (content changed: {bool(content)})")
        updated = await self.get_news_by_id(news.id)
        if not updated:
            raise NotFoundError("Noticia")
        return updated

    async def delete_news(self, news_id) -> bool:
        """
        Delete a news item together with every attachment it owns.

        Attachment deletions are awaited first; if any of them fails the news
        record is kept and the aggregated error is raised.
        """
        news = await self.get_news_by_id(news_id)
        if not news:
            raise NotFoundError("Noticia")

        await Utils.gather_bounded(
            (self.attachment_model.delete_attachment(attachment.id) for attachment in news.attachments),
            self.concurrency,
            "delete",
        )
        deleted = await self.news_model.delete_news(news.id)
        logger.info(f"Deleted news {news.id} and {len(news.attachments)} attachment(s)")
        return deleted

    async def _get_department(self, department_id):
        department = await self.department_model.get_department(to_object_id(department_id, "Department"))
        if not department:
            raise NotFoundError("Department")
        return department

    async def _save_news(self, department_id: ObjectId, content: str, attachment_ids: List[ObjectId]) -> NewsItem:
        inserted_id = await self.news_model.create_news({
            "department": department_id,
            "content": content,
            "publishedAt": datetime.now(timezone.utc),
            "attachments": attachment_ids,
        })
        logger.info(f"Created news {inserted_id} for department {department_id} with {len(attachment_ids)} attachment(s)")
        return await self.news_model.get_news({"_id": inserted_id})
