from fastapi import FastAPI

from mago_diagnostics.api.parse_routes import router as parse_router
from mago_diagnostics.core.config import settings
from mago_diagnostics.core.logging import setup_logging

setup_logging()

tags_metadata = [
    {
        "name": "diagnostics",
        "description": "Turn captured mago output into editor diagnostics grouped by file.",
    },
    {
        "name": "health",
        "description": "Liveness probe.",
    },
]

app = FastAPI(
    title="Mago Diagnostics",
    version=settings.APP_VERSION,
    description="Normalizes mago lint/analyze output (JSON or text) into positioned diagnostics.",
    openapi_tags=tags_metadata,
)

app.include_router(parse_router)


@app.get("/health", tags=["health"], summary="Health check")
def health() -> dict[str, str]:
    return {"status": "healthy", "version": settings.APP_VERSION}
