from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from bson import ObjectId

from app.schemas.PyObjectId import PyObjectId
from app.schemas.Departments import Department
from app.schemas.Attachments import Attachment


class NewsItem(BaseModel):
    """A news post as read back from the store, with department and attachments populated."""
    id: Optional[PyObjectId] = Field(default_factory=ObjectId, alias="_id")
    department: Optional[Department] = None
    content: str
    publishedAt: datetime
    attachments: List[Attachment] = []
    updatedOn: Optional[datetime] = None

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
        json_encoders = {ObjectId: str}


class NewsFilters(BaseModel):
    page: int = Field(default=1, ge=1)
    departmentId: Optional[str] = None


class NewsUpdate(BaseModel):
    content: Optional[str] = None
