from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from . import config
from .db.seed import seed_database
from .db.session import create_db_and_tables, engine
from .routers import admin, auth, flight_owner, flights as flight_routes
from .routers import bookings as booking_routes
from .routers import passengers as passenger_routes
from .routers import reviews as review_routes

config.setup_logging()
logger = config.get_logger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    del application
    create_db_and_tables()
    if config.SEED_DATABASE:
        with Session(engine) as session:
            seed_database(session)
    yield


app = FastAPI(title="SimplyFly API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials="*" not in config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(flight_routes.router)
app.include_router(booking_routes.router)
app.include_router(passenger_routes.router)
app.include_router(review_routes.router)
app.include_router(admin.router)
app.include_router(flight_owner.router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    del request
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"message": exc.detail}
    return JSONResponse(content, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    del request
    return JSONResponse(
        {"message": "Invalid request", "errors": jsonable_encoder(exc.errors())},
        status_code=400,
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"message": "Internal server error"}, status_code=500)


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)
