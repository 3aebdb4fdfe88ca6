from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    body = {"error": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error on {request.method} {request.url.path}: {body}")
    return JSONResponse(status_code=exc.status_code, content=body)


async def handle_server_error(request: Request, exc: ServerError):
    body = {"error": exc.base_error.code, "message": "Internal server error"}
    logger.error(
        f"Server error on {request.method} {request.url.path}: "
        f"{exc.base_error.code} {exc.base_error.message}"
    )
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


def create_app(ApplicationConfig) -> FastAPI:
    logging.getLogger("archoops").setLevel(ApplicationConfig.LOG_LEVEL)

    app = FastAPI(title="ArcHoops API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from archoops.api.routes import auth, classes, health_check, points, profile

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(profile.router, tags=["Profile"])
    app.include_router(classes.router, tags=["Classes"])
    app.include_router(points.router, tags=["Points"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
