from datetime import datetime, timezone
from typing import Optional
from bson import ObjectId
from pydantic import AliasChoices, BaseModel, Field

from app.schemas.PyObjectId import PyObjectId


class Attachment(BaseModel):
    id: Optional[PyObjectId] = Field(default_factory=ObjectId, alias="_id")
    name: str
    mimeType: Optional[str] = None
    size: int = 0
    path: Optional[str] = None
    published: bool = False
    createdOn: Optional[datetime] = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
        json_encoders = {ObjectId: str}


class AttachmentDescriptor(BaseModel):
    """Reference to an attachment that is already stored, as sent by clients."""
    id: PyObjectId = Field(validation_alias=AliasChoices("_id", "id"))
    name: Optional[str] = None

    class Config:
        extra = "ignore"
        arbitrary_types_allowed = True


class UploadedFile(BaseModel):
    filename: str
    contentType: Optional[str] = None
    data: bytes
