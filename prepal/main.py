from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from prepal.core.config import get_settings
from prepal.core.errors import register_error_handlers
from prepal.core.logging import setup_logging
from prepal.routers import system, generate, feedback, files, quiz, parse


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="PrepPal API: cheat sheets, quiz et mnémoniques générés à partir d'un PDF",
    )

    # Middleware CORS
    origins = [o.strip() for o in (settings.CORS_ORIGINS or "").split(",") if o.strip()]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],  # fallback si mal configuré
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Routers
    app.include_router(system.router)
    app.include_router(generate.router)
    app.include_router(feedback.router)
    app.include_router(files.router)
    app.include_router(quiz.router)
    app.include_router(parse.router)

    # Redirect root → docs
    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/docs")

    return app


app = create_app()
