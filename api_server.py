"""
API server for Sadhana Coach.
Exposes the dosha classifier, asana catalog, pose scorer and practice
points over HTTP for the wellness frontend.
"""
from enum import Enum
from typing import Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from pydantic import BaseModel, Field

from sadhana_coach import __version__
from sadhana_coach.asanas import ASANAS, get_asana, recommend_asanas
from sadhana_coach.config import settings
from sadhana_coach.dosha_questions import DOSHA_QUESTIONS, Dosha, questions_as_dicts
from sadhana_coach.exceptions import ConfigurationError, UnknownPoseError, ValidationError
from sadhana_coach.landmarks import LANDMARK_COUNT
from sadhana_coach.logging_config import get_logger
from sadhana_coach.tools import analyze_yoga_pose, classify_dosha, record_practice_session
from sadhana_coach.tools.analyze_yoga_pose import get_pose_analyzer

# Initialize logger
logger = get_logger(__name__)


# ============================================
# REQUEST VALIDATION MODELS
# ============================================

class Goal(str, Enum):
    """Practice goals used to filter recommendations"""
    ENERGY = "energy"
    CALM = "calm"
    STRENGTH = "strength"
    FLEXIBILITY = "flexibility"


class Difficulty(str, Enum):
    ALL = "all"
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class DoshaAnswersRequest(BaseModel):
    answers: Dict[str, Literal["a", "b", "c"]]


class LandmarkIn(BaseModel):
    x: float
    y: float
    z: float = 0.0
    visibility: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class PoseAnalysisRequest(BaseModel):
    pose_id: str = Field(..., min_length=1)
    landmarks: List[Optional[LandmarkIn]] = Field(default_factory=list, max_length=LANDMARK_COUNT)


class PracticeSessionRequest(BaseModel):
    current_points: int = Field(default=0, ge=0)
    duration_seconds: float = Field(..., ge=0)
    accuracy: float = Field(..., ge=0, le=100)


# ============================================
# STARTUP CONFIGURATION
# ============================================

# Validate configuration on startup
try:
    settings.validate()
    logger.info("Configuration validated successfully")
except ConfigurationError as e:
    logger.critical(f"Configuration validation failed: {e}")
    raise

app = FastAPI(
    title="Sadhana Coach API",
    description="Dosha assessment and yoga pose feedback API",
    version=__version__,
)

# Rate limiter for the per-frame analysis endpoint
limiter = Limiter(key_func=get_remote_address)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Authorization"],
)


def _raise_for_tool_error(result: dict, step: str) -> None:
    if result.get("status") == "success":
        return
    status_code = 422 if result.get("error_type") == "validation" else 500
    raise HTTPException(
        status_code=status_code,
        detail={"error": result.get("message", "Unknown error"), "step": step},
    )


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "sadhana-coach-api",
        "version": __version__,
        "status": "running",
        "endpoints": {
            "health": "/health",
            "questions": "/api/dosha/questions",
            "classify": "/api/dosha/classify",
            "asanas": "/api/asanas",
            "recommendations": "/api/asanas/recommendations",
            "analyze": "/api/pose/analyze",
            "points": "/api/sessions/points",
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint with engine verification"""
    checks = {}
    overall_healthy = True

    evaluators = sorted(get_pose_analyzer().evaluators)
    checks["pose_evaluators"] = evaluators
    if not evaluators:
        overall_healthy = False
        logger.error("Health check - no pose evaluators registered")

    checks["dosha_questions"] = len(DOSHA_QUESTIONS)
    if not DOSHA_QUESTIONS:
        overall_healthy = False
        logger.error("Health check - dosha question bank is empty")

    status_code = 200 if overall_healthy else 503
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "healthy" if overall_healthy else "unhealthy",
            "service": "sadhana-coach-api",
            "checks": checks
        }
    )


@app.get("/api/dosha/questions")
async def get_dosha_questions():
    """The fixed questionnaire, without the option-to-dosha mapping."""
    return {"questions": questions_as_dicts()}


@app.post("/api/dosha/classify")
async def classify_dosha_endpoint(payload: DoshaAnswersRequest):
    """
    Classify a constitution from questionnaire answers.

    Args:
        payload: answers keyed by question id

    Returns:
        Dominant and secondary dosha with scores and reference info
    """
    logger.info(f"Dosha classification request - answers: {len(payload.answers)}")
    result = classify_dosha(payload.answers)
    _raise_for_tool_error(result, "classification")
    return result


@app.get("/api/asanas")
async def list_asanas():
    return {"asanas": [asana.as_dict() for asana in ASANAS]}


@app.get("/api/asanas/recommendations")
async def get_recommendations(
    dosha: Dosha,
    goal: Goal = Goal.ENERGY,
    difficulty: Difficulty = Difficulty.ALL,
):
    """Up to five asanas that balance the given dosha."""
    try:
        asanas = recommend_asanas(dosha, goal=goal.value, difficulty=difficulty.value)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail={"error": str(e), "step": "validation"})
    return {
        "dosha": dosha.value,
        "goal": goal.value,
        "difficulty": difficulty.value,
        "asanas": [asana.as_dict() for asana in asanas],
    }


@app.get("/api/asanas/{pose_id}")
async def get_asana_endpoint(pose_id: str):
    try:
        return get_asana(pose_id).as_dict()
    except UnknownPoseError as e:
        logger.warning(f"Asana lookup failed: {e}")
        raise HTTPException(status_code=404, detail={"error": str(e), "step": "lookup"})


@app.post("/api/pose/analyze")
@limiter.limit(settings.analyze_rate_limit)
async def analyze_pose_endpoint(request: Request, payload: PoseAnalysisRequest):
    """
    Score one frame of landmarks against a target asana.

    Args:
        request: Required by slowapi for rate limiting
        payload: pose id and up to 33 landmarks in BlazePose order

    Returns:
        Accuracy, feedback strings and the sub-score breakdown
    """
    try:
        get_asana(payload.pose_id)
    except UnknownPoseError as e:
        raise HTTPException(status_code=404, detail={"error": str(e), "step": "lookup"})

    landmarks = [None if lm is None else lm.model_dump() for lm in payload.landmarks]
    result = analyze_yoga_pose(landmarks, payload.pose_id)
    _raise_for_tool_error(result, "analysis")
    return result


@app.post("/api/sessions/points")
async def session_points_endpoint(payload: PracticeSessionRequest):
    """Sadhana points and rank after a completed practice session."""
    result = record_practice_session(
        current_points=payload.current_points,
        duration_seconds=payload.duration_seconds,
        accuracy=payload.accuracy,
    )
    _raise_for_tool_error(result, "points")
    return result


if __name__ == "__main__":
    logger.info(f"Starting Sadhana Coach API server on {settings.host}:{settings.port}")
    logger.info(f"Debug mode: {settings.debug}")

    uvicorn.run(
        "api_server:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level
    )
