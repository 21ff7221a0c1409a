import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import API_PREFIX, CORS_ORIGINS, LOG_LEVEL
from database import get_database, ensure_indexes
from routers import review_router, stats_router, leaderboard_router
from analytics.errors import AnalyticsError, ValidationError

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_indexes(get_database())
    yield


app = FastAPI(
    title="Task Review Analytics API",
    description="周回顾、连续天数、效率分和排行榜统计服务",
    version="1.0.0",
    lifespan=lifespan,
)

# 配置CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册路由
app.include_router(review_router, prefix=API_PREFIX)
app.include_router(stats_router, prefix=API_PREFIX)
app.include_router(leaderboard_router, prefix=API_PREFIX)


def error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    body = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return JSONResponse(status_code=status_code, content=body)


@app.exception_handler(AnalyticsError)
async def analytics_error_handler(request: Request, exc: AnalyticsError):
    if isinstance(exc, ValidationError):
        logger.info("参数校验失败 %s: %s", request.url.path, exc.errors)
        return error_response(exc.status_code, "Validation failed", exc.errors)
    return error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": str(err["loc"][-1]), "message": err["msg"]}
        for err in exc.errors()
    ]
    logger.info("参数校验失败 %s: %s", request.url.path, errors)
    return error_response(400, "Validation failed", errors)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError):
    logger.error("数据库异常 %s: %s", request.url.path, exc)
    return error_response(503, "Task data is temporarily unavailable, please retry")


@app.get("/")
async def root():
    return {"message": "Task review analytics API is running", "version": "1.0.0"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
