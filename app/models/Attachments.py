import asyncio
import os
from pathlib import Path
from typing import List, Optional
from bson import ObjectId
from loguru import logger
from pymongo import ReturnDocument

from app.helpers.Database import MongoDB
from app.helpers.Exceptions import AttachmentBatchError, NotFoundError
from app.helpers.Utilities import Utils
from app.schemas.Attachments import Attachment, AttachmentDescriptor, UploadedFile

from dotenv import load_dotenv

load_dotenv()


class AttachmentModel:
    """
    Stored files referenced by news items. File bytes live under `uploads_dir`,
    metadata lives in the Archivos collection.
    """

    def __init__(self, database=None, collection_name="Archivos", uploads_dir: Optional[str] = None, concurrency: Optional[int] = None):
        if database is None:
            database = MongoDB.get_database(os.getenv('DB_NAME'))
        self.collection = database[collection_name]
        self.uploads_dir = Path(uploads_dir or os.getenv("UPLOADS_DIR", "uploads"))
        self.concurrency = concurrency or int(os.getenv("ATTACHMENT_CONCURRENCY", "5"))

    async def publish_attachment(self, descriptor: AttachmentDescriptor) -> Attachment:
        """
        Mark an already stored attachment as published and return it.
        """
        document = await self.collection.find_one_and_update(
            {"_id": descriptor.id},
            {"$set": {"published": True}},
            return_document=ReturnDocument.AFTER,
        )
        if not document:
            raise NotFoundError("Attachment")
        return Attachment(**document)

    async def create_attachment(self, file: UploadedFile) -> Attachment:
        stored_name = (Utils.generate_hex_string() + Path(file.filename).name).replace(" ", "_")
        path = self.uploads_dir / stored_name
        self.uploads_dir.mkdir(parents=True, exist_ok=True)
        await asyncio.to_thread(path.write_bytes, file.data)

        attachment = Attachment(
            name=file.filename,
            mimeType=file.contentType,
            size=len(file.data),
            path=str(path),
            published=True,
        )
        try:
            await self.collection.insert_one(attachment.model_dump(by_alias=True))
        except Exception:
            path.unlink(missing_ok=True)
            raise
        return attachment

    async def create_attachments(self, files: List[UploadedFile]) -> List[Attachment]:
        """
        Store every uploaded file. If any of them fails, the ones already
        stored are removed again and the batch error is raised.
        """
        try:
            return await Utils.gather_bounded(
                (self.create_attachment(file) for file in files),
                self.concurrency,
                "create",
            )
        except AttachmentBatchError as e:
            logger.warning(f"Rolling back {len(e.completed)} attachment(s) after failed upload batch")
            try:
                await Utils.gather_bounded(
                    (self.delete_attachment(attachment.id) for attachment in e.completed),
                    self.concurrency,
                    "roll back",
                )
            except AttachmentBatchError as rollback_error:
                logger.error(f"Rollback left stored attachments behind: {rollback_error}")
            raise

    async def delete_attachment(self, attachment_id: ObjectId) -> bool:
        document = await self.collection.find_one_and_delete({"_id": attachment_id})
        if not document:
            return False
        if document.get("path"):
            await asyncio.to_thread(Path(document["path"]).unlink, missing_ok=True)
        return True
