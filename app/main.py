from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from app.core.config import settings
from app.core.errors import InvalidInputError, SavorSyncError, format_validation_errors
from app.middleware.request_logging import RequestLoggingMiddleware
from app.middleware.auth_logging import AuthLoggingMiddleware
from app.modules.auth.api.router import router as auth_router
from app.modules.user_management.api.router import router as user_router
from app.modules.follows.api.router import router as follows_router
from app.modules.posts.api.router import router as posts_router
from app.modules.posts.comments.api.router import router as comments_router
from app.modules.posts.likes.api.router import router as likes_router
from app.modules.community.api.router import router as community_router
from app.modules.recipes.api.router import router as recipes_router
from app.modules.cultural.api.router import router as cultural_router
from app.modules.media.router import router as media_router
from app.db.init_db import create_all_tables

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("app")

# Initialize the FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    debug=settings.DEBUG,
    description="Recipes, food stories and the community around them",
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    swagger_ui_parameters={"defaultModelsExpandDepth": -1},
)

@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting server in {settings.ENVIRONMENT} mode")
    logger.info(f"BASE_URL: {settings.BASE_URL}")

    create_all_tables()

@app.exception_handler(SavorSyncError)
async def savorsync_error_handler(request: Request, exc: SavorSyncError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    error = InvalidInputError(format_validation_errors(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    error = InvalidInputError(format_validation_errors(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    content = {"error": "Internal server error"}
    if settings.DEBUG:
        content["details"] = str(exc)
    return JSONResponse(status_code=500, content=content)

# Add middleware
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(AuthLoggingMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routers
app.include_router(auth_router, prefix=f"{settings.API_PREFIX}/auth", tags=["authentication"])
app.include_router(user_router, prefix=f"{settings.API_PREFIX}/users", tags=["users"])
app.include_router(follows_router, prefix=f"{settings.API_PREFIX}/users", tags=["follows"])
app.include_router(posts_router, prefix=f"{settings.API_PREFIX}/posts", tags=["posts"])
app.include_router(comments_router, prefix=f"{settings.API_PREFIX}/posts/{{post_id}}/comments", tags=["comments"])
app.include_router(likes_router, prefix=f"{settings.API_PREFIX}/posts/{{post_id}}/like", tags=["likes"])
app.include_router(community_router, prefix=f"{settings.API_PREFIX}/community", tags=["community"])
app.include_router(recipes_router, prefix=f"{settings.API_PREFIX}/recipes", tags=["recipes"])
app.include_router(cultural_router, prefix=f"{settings.API_PREFIX}/cultural", tags=["cultural"])
app.include_router(media_router, prefix=settings.API_PREFIX)

@app.get(f"{settings.API_PREFIX}/health")
def api_health_check():
    return {"status": "ok", "environment": settings.ENVIRONMENT}

@app.get("/")
async def root():
    return {
        "message": "Welcome to SavorSync",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "documentation": "/docs" if settings.DEBUG else None,
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
