"""Shared test fixtures: in-memory stand-ins for the Mongo backed models."""

from datetime import datetime, timezone
from typing import List, Optional

import pytest
from bson import ObjectId

from app.helpers.Exceptions import NotFoundError
from app.schemas.Attachments import Attachment, AttachmentDescriptor, UploadedFile
from app.schemas.Departments import Department
from app.schemas.News import NewsItem
from app.services.News import NewsService


class FakeDepartmentModel:
    def __init__(self):
        self.departments = {}

    def add(self, name: str) -> Department:
        department = Department(name=name)
        self.departments[department.id] = department
        return department

    async def get_department(self, department_id: ObjectId) -> Optional[Department]:
        return self.departments.get(department_id)


class FakeAttachmentModel:
    def __init__(self):
        self.attachments = {}
        self.deleted: List[ObjectId] = []
        self.failing = set()

    def add(self, name: str, published: bool = False) -> Attachment:
        attachment = Attachment(name=name, published=published)
        self.attachments[attachment.id] = attachment
        return attachment

    async def publish_attachment(self, descriptor: AttachmentDescriptor) -> Attachment:
        if descriptor.id in self.failing:
            raise RuntimeError(f"storage unavailable for {descriptor.id}")
        attachment = self.attachments.get(descriptor.id)
        if not attachment:
            raise NotFoundError("Attachment")
        attachment.published = True
        return attachment

    async def create_attachments(self, files: List[UploadedFile]) -> List[Attachment]:
        return [self.add(file.filename, published=True) for file in files]

    async def delete_attachment(self, attachment_id: ObjectId) -> bool:
        if attachment_id in self.failing:
            raise RuntimeError(f"storage unavailable for {attachment_id}")
        self.deleted.append(attachment_id)
        return self.attachments.pop(attachment_id, None) is not None


class FakeNewsModel:
    def __init__(self, departments: FakeDepartmentModel, attachments: FakeAttachmentModel):
        self.departments = departments
        self.attachments = attachments
        self.documents: List[dict] = []

    def _populate(self, document: dict) -> NewsItem:
        return NewsItem(
            _id=document["_id"],
            department=self.departments.departments.get(document["department"]),
            content=document["content"],
            publishedAt=document["publishedAt"],
            attachments=[
                self.attachments.attachments[ref]
                for ref in document["attachments"]
                if ref in self.attachments.attachments
            ],
            updatedOn=document.get("updatedOn"),
        )

    def _matching(self, filters: dict) -> List[dict]:
        return [doc for doc in self.documents if all(doc.get(k) == v for k, v in filters.items())]

    async def list_news(self, filters: dict = {}, skip: int = 0, limit: int = 5) -> List[NewsItem]:
        documents = sorted(self._matching(filters), key=lambda doc: doc["_id"], reverse=True)
        return [self._populate(doc) for doc in documents[skip:skip + limit]]

    async def get_news(self, filters: dict) -> Optional[NewsItem]:
        documents = self._matching(filters)
        return self._populate(documents[0]) if documents else None

    async def get_news_count(self, filters: dict = {}) -> int:
        return len(self._matching(filters))

    async def create_news(self, data: dict) -> ObjectId:
        document = dict(data, _id=ObjectId())
        self.documents.append(document)
        return document["_id"]

    async def update_news(self, news_id: ObjectId, updates: dict) -> bool:
        for document in self.documents:
            if document["_id"] == news_id:
                document.update(updates, updatedOn=datetime.now(timezone.utc))
                return True
        return False

    async def delete_news(self, news_id: ObjectId) -> bool:
        before = len(self.documents)
        self.documents = [doc for doc in self.documents if doc["_id"] != news_id]
        return len(self.documents) < before


@pytest.fixture
def department_model() -> FakeDepartmentModel:
    return FakeDepartmentModel()


@pytest.fixture
def attachment_model() -> FakeAttachmentModel:
    return FakeAttachmentModel()


@pytest.fixture
def news_model(department_model, attachment_model) -> FakeNewsModel:
    return FakeNewsModel(department_model, attachment_model)


@pytest.fixture
def news_service(news_model, department_model, attachment_model) -> NewsService:
    return NewsService(news_model, department_model, attachment_model, concurrency=2)
