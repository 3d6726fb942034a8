from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse, Response
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from api.bootstrap import Studio, build_default_studio
from api.routes.auth_routes import auth_routes
from api.routes.session_routes import session_routes
from api.routes.settings_routes import settings_routes
from api.routes.studio_routes import studio_routes
from api.utils.logger import clear_request_id, configure_logging, set_request_id

logger = configure_logging()


def create_app(studio: Optional[Studio] = None) -> FastAPI:
    """
    Build the HTTP app. Tests pass a pre-wired Studio; otherwise the production
    Studio (Ollama + SQL store) is built on startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "studio", None) is None:
            app.state.studio = build_default_studio()
        logger.info("studio ready active_session=%s", app.state.studio.sessions.current_session_id)
        yield
        app.state.studio.orchestrator.cancel()

    app = FastAPI(title="Curriculum Architect", lifespan=lifespan)
    app.state.studio = studio
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logger(request: Request, call_next):
        rid = set_request_id(request.headers.get("x-request-id"))
        try:
            logger.info("request start method=%s path=%s client=%s", request.method, request.url.path, request.client)
            response: Response = await call_next(request)
            logger.info("request end status=%s method=%s path=%s", response.status_code, request.method, request.url.path)
            response.headers["x-request-id"] = rid
            return response
        except Exception:
            logger.exception("request error method=%s path=%s", request.method, request.url.path)
            raise
        finally:
            clear_request_id()

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        # Server-side errors with stack traces; client errors as warnings.
        if exc.status_code >= 500:
            logger.exception("http error status=%s method=%s path=%s detail=\n%s", exc.status_code, request.method, request.url.path, exc.detail)
        else:
            logger.warning("http error status=%s method=%s path=%s detail=\n%s", exc.status_code, request.method, request.url.path, exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("validation error method=%s path=%s errors=\n%s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=422, content={"detail": jsonable_errors(exc)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        # Never leak internal exception details to clients.
        logger.exception("unhandled error method=%s path=%s", request.method, request.url.path)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal Server Error"},
        )

    @app.get("/")
    def read_root():
        return {"message": "Curriculum Architect is Healthy"}

    app.include_router(auth_routes, prefix="/auth")
    app.include_router(studio_routes, prefix="/studio")
    app.include_router(session_routes, prefix="/studio")
    app.include_router(settings_routes, prefix="/studio")
    return app


def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may hold exception instances that JSONResponse cannot encode.
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
