from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from app.services.News import NewsService
from app.dependencies import get_news_service
from app.helpers.Utilities import Utils, ServerResponse
from app.schemas.Attachments import UploadedFile
from app.schemas.News import NewsFilters, NewsUpdate


router = APIRouter(prefix="/api/v1/news", tags=["News"])


@router.get("/list", response_model=ServerResponse)
async def list_news(
    page: int = 1,
    departmentId: Optional[str] = None,
    service: NewsService = Depends(get_news_service),
):
    news = await service.list_news(NewsFilters(page=page, departmentId=departmentId))
    return Utils.create_response([item.model_dump(mode="json") for item in news], True)


@router.get("/count", response_model=ServerResponse)
async def count_news(service: NewsService = Depends(get_news_service)):
    total = await service.count_news()
    return Utils.create_response({"total": total}, True)


@router.get("/{news_id}", response_model=ServerResponse)
async def get_news(news_id: str, service: NewsService = Depends(get_news_service)):
    news = await service.get_news_by_id(news_id)
    if not news:
        raise HTTPException(status_code=404, detail={"data": None, "error": "Noticia not found", "success": False})
    return Utils.create_response(news.model_dump(mode="json"), True)


@router.post("/create", response_model=ServerResponse)
async def create_news(
    departmentId: str = Form(...),
    content: str = Form(...),
    attachments: Optional[str] = Form(None),
    service: NewsService = Depends(get_news_service),
):
    news = await service.create_news(departmentId, content, attachments)
    return Utils.create_response(news.model_dump(mode="json"), True)


@router.post("/create-with-uploads", response_model=ServerResponse)
async def create_news_with_uploads(
    departmentId: str = Form(...),
    content: str = Form(...),
    files: List[UploadFile] = File(default=[]),
    service: NewsService = Depends(get_news_service),
):
    uploads = [
        UploadedFile(filename=file.filename, contentType=file.content_type, data=await file.read())
        for file in files
    ]
    news = await service.create_news_with_uploads(departmentId, content, uploads)
    return Utils.create_response(news.model_dump(mode="json"), True)


@router.put("/update/{news_id}", response_model=ServerResponse)
async def update_news(news_id: str, body: NewsUpdate, service: NewsService = Depends(get_news_service)):
    news = await service.update_news(news_id, body.content)
    return Utils.create_response(news.model_dump(mode="json"), True)


@router.delete("/delete/{news_id}", response_model=ServerResponse)
async def delete_news(news_id: str, service: NewsService = Depends(get_news_service)):
    deleted = await service.delete_news(news_id)
    return Utils.create_response({"news_id": news_id, "deleted": deleted}, True)
