from fastapi import APIRouter

from resume_tailor import __version__
from resume_tailor.core.scoring import get_scoring_config

router = APIRouter()


@router.get("/health", summary="Health Check", description="Report service status and engine version.")
async def health_check():
    # Raises RuntimeError when the scoring config is missing or invalid.
    get_scoring_config()
    return {"status": "healthy", "version": __version__}
