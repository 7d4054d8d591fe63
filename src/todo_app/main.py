from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import SessionClosed
from .logging_config import configure_logging
from .registry import SessionRegistry
from .routers import sessions as sessions_router
from .routers import todos as todos_router
from .settings import Settings, get_settings
from .store import InMemoryTodoStore

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "Listing, category sections and deletion of Todo items.",
    },
    {
        "name": "sessions",
        "description": "Edit sessions for creating and editing a single Todo.",
    },
]


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Composition root: build the app together with its own store and session registry.

    Each call returns an independent application with an empty store.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Todo App",
        description="Todo list service with category sections and edit sessions.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.settings = settings
    app.state.store = InMemoryTodoStore()
    app.state.sessions = SessionRegistry(app.state.store, placeholder=settings.body_placeholder)

    # Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global exception handlers for consistent JSON on validation errors
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request validation errors.

        Response format:
            {
                "error": "ValidationError",
                "detail": [... pydantic/fastapi error details ...],
                "message": "Request validation failed"
            }
        """
        return JSONResponse(
            status_code=422,
            content={
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": _jsonable_errors(exc),
            },
        )

    @app.exception_handler(SessionClosed)
    async def session_closed_handler(request: Request, exc: SessionClosed) -> JSONResponse:
        """
        A session finished by a concurrent confirm/cancel is reported like an unknown one.
        """
        return JSONResponse(status_code=404, content={"detail": "Edit session not found"})

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check(request: Request):
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health and the number of stored todos.
        """
        return {"message": "Healthy", "todos": len(request.app.state.store)}

    # Include routers
    app.include_router(todos_router.router)
    app.include_router(sessions_router.router)
    return app


def _jsonable_errors(exc: RequestValidationError) -> list:
    # Model validators put the raised ValueError in ctx, which JSON cannot encode.
    errors = []
    for err in exc.errors():
        err = dict(err)
        if "ctx" in err:
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        errors.append(err)
    return errors


app = create_app()
