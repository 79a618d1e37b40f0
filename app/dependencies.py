"""
Singleton dependencies for resource management.
Prevents creating the models and services again on every API request.
"""
import os
from typing import Optional, TYPE_CHECKING

# Avoid circular imports
if TYPE_CHECKING:
    from app.services.News import NewsService

# Global singletons - Models
_news_model = None
_department_model = None
_attachment_model = None

# Global singletons - Services
_news_service: Optional['NewsService'] = None


def get_news_model():
    """Get singleton NewsModel instance"""
    global _news_model
    if _news_model is None:
        from app.models.News import NewsModel
        _news_model = NewsModel()
    return _news_model


def get_department_model():
    """Get singleton DepartmentModel instance"""
    global _department_model
    if _department_model is None:
        from app.models.Departments import DepartmentModel
        _department_model = DepartmentModel()
    return _department_model


def get_attachment_model():
    """Get singleton AttachmentModel instance"""
    global _attachment_model
    if _attachment_model is None:
        from app.models.Attachments import AttachmentModel
        _attachment_model = AttachmentModel()
    return _attachment_model


def get_news_service() -> 'NewsService':
    """
    Get the singleton NewsService, wired to the shared models.
    """
    global _news_service
    if _news_service is None:
        from app.services.News import NewsService
        _news_service = NewsService(
            get_news_model(),
            get_department_model(),
            get_attachment_model(),
            concurrency=int(os.getenv("ATTACHMENT_CONCURRENCY", "5")),
        )
    return _news_service


def cleanup_resources():
    """
    Cleanup all singleton resources. Call this on application shutdown.
    """
    global _news_model, _department_model, _attachment_model, _news_service

    # Reset models
    _news_model = None
    _department_model = None
    _attachment_model = None

    # Reset services
    _news_service = None
