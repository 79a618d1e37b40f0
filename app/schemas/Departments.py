from typing import Optional
from bson import ObjectId
from pydantic import BaseModel, Field

from app.schemas.PyObjectId import PyObjectId


class Department(BaseModel):
    id: Optional[PyObjectId] = Field(default_factory=ObjectId, alias="_id")
    name: str
    code: Optional[str] = None

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
        json_encoders = {ObjectId: str}
