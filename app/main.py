import os

from dotenv import load_dotenv
from fastapi import FastAPI
from loguru import logger

from app.controllers.News import router as news_router
from app.dependencies import cleanup_resources
from app.helpers.Database import MongoDB
from app.middleware.ErrorHandling import add_error_handlers

load_dotenv()

app = FastAPI(
    title="Noticias API",
    description="News items for the health program backend",
    version="1.0.0",
    docs_url="/api-docs",
    redoc_url="/api-redoc",
)

add_error_handlers(app)
app.include_router(news_router)


@app.on_event("startup")
async def startup_event():
    connection_string = os.getenv("MONGODB_CONNECTION_STRING", "mongodb://localhost:27017")
    MongoDB.connect(connection_string)
    logger.info("MongoDB connected")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down Noticias API...")
    cleanup_resources()
    await MongoDB.close()


@app.get("/")
def root():
    return {
        "service": "Noticias API",
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint to verify the server and database are reachable"""
    db_status = await MongoDB.connection_status()
    return {
        "status": "healthy",
        "database": db_status,
        "service": "Noticias API",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=3003, reload=True)
