import asyncio
import secrets
from typing import Any, Awaitable, Iterable, List, Optional

from pydantic import BaseModel

from app.helpers.Exceptions import AttachmentBatchError


class ServerResponse(BaseModel):
    data: Optional[Any] = None
    success: bool
    error: str = ""


class Utils:

    @staticmethod
    def create_response(data: Any, success: bool, error: str = "") -> ServerResponse:
        return ServerResponse(data=data, success=success, error=error or "")

    @staticmethod
    def generate_hex_string(length: int = 16) -> str:
        return secrets.token_hex(length // 2)

    @staticmethod
    async def gather_bounded(awaitables: Iterable[Awaitable], limit: int, action: str) -> List[Any]:
        """
        Run awaitables concurrently, at most `limit` at a time, and wait for all of them.

        Results keep the input order. If any awaitable fails, every failure is
        collected and raised as a single AttachmentBatchError once the whole
        batch has settled; the results that did succeed travel on the error
        as `completed`.
        """
        semaphore = asyncio.Semaphore(max(1, limit))

        async def run(awaitable):
            async with semaphore:
                return await awaitable

        results = await asyncio.gather(*(run(a) for a in awaitables), return_exceptions=True)
        errors = [r for r in results if isinstance(r, BaseException)]
        if errors:
            completed = [r for r in results if not isinstance(r, BaseException)]
            raise AttachmentBatchError(action, errors, completed)
        return results
