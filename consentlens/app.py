"""
Scoring service entry point — FastAPI app setup and routes.
Scores privacy policy text, either posted directly or fetched from a
URL, and exposes the remote policy fetch on its own.
"""

from __future__ import annotations

import contextlib
from collections.abc import AsyncGenerator
from datetime import UTC, datetime

import dotenv
import fastapi
import pydantic
import uvicorn
from fastapi.middleware import cors
from starlette import responses

from consentlens.analysis import policy_patterns, scoring
from consentlens.config import get_settings
from consentlens.services import policy_fetch
from consentlens.utils import logger, url

dotenv.load_dotenv()

log = logger.create_logger("Server")


class ScoreRequest(pydantic.BaseModel):
    """Body of ``POST /api/score-privacy-policy``: policy text or a URL to fetch."""

    text: str | None = None
    url: str | None = None


@contextlib.asynccontextmanager
async def lifespan(_app: fastapi.FastAPI) -> AsyncGenerator[None]:
    """Log server start on startup."""
    log.section("consentlens scoring service started")
    log.info("Rubric", {"version": policy_patterns.RUBRIC_VERSION})
    yield


app = fastapi.FastAPI(title="consentlens", lifespan=lifespan)

# ============================================================================
# Middleware
# ============================================================================

app.add_middleware(
    cors.CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================================
# API Routes
# ============================================================================


@app.post("/api/score-privacy-policy")
async def score_privacy_policy_endpoint(request: ScoreRequest) -> responses.JSONResponse:
    """Score posted policy text, or fetch and score the policy at ``url``."""
    content: str | None = None
    if request.text is not None:
        log.info("Scoring posted privacy policy", {"chars": len(request.text)})
        policy_text = request.text
    elif request.url:
        log.info("Processing privacy policy scoring request", {"domain": url.extract_domain(request.url)})
        fetched = await policy_fetch.fetch_policy_text(request.url)
        if not fetched.success:
            return responses.JSONResponse(
                status_code=502,
                content={"success": False, "error": "Failed to fetch privacy policy", "details": fetched.error},
            )
        policy_text = content = fetched.content
    else:
        return responses.JSONResponse(
            status_code=400,
            content={"success": False, "error": "Either text or url is required"},
        )

    result = scoring.score_privacy_policy(policy_text).to_api()
    body: dict[str, object] = {
        "success": True,
        "score": result["totalScore"],
        "grade": result["letterGrade"],
        "breakdown": result["breakdown"],
        "details": result["details"],
        "recommendations": result["recommendations"],
        "rubricVersion": policy_patterns.RUBRIC_VERSION,
    }
    if content is not None:
        body["content"] = content
    return responses.JSONResponse(content=body)


@app.get("/api/privacy-policy")
async def privacy_policy_endpoint(
    policy_url: str = fastapi.Query(..., alias="url", description="The policy page to fetch"),
) -> responses.JSONResponse:
    """Fetch a policy page and return its extracted main-content text."""
    fetched = await policy_fetch.fetch_policy_text(policy_url)
    status_code = 200 if fetched.success else 502
    return responses.JSONResponse(
        status_code=status_code,
        content=fetched.model_dump(by_alias=True, exclude_none=True),
    )


@app.get("/api/health")
async def health_endpoint() -> dict[str, object]:
    """Liveness check."""
    return {
        "success": True,
        "message": "consentlens scoring service is running",
        "timestamp": datetime.now(UTC).isoformat(),
        "rubricVersion": policy_patterns.RUBRIC_VERSION,
    }


def main() -> None:
    """Run the service with uvicorn."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
