import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studypilot.config import CORS_ORIGINS, STORAGE_BACKEND
from studypilot.database import init_db
from studypilot.routes.dashboard_routes import router as dashboard_router
from studypilot.routes.file_routes import router as file_router
from studypilot.routes.goal_routes import router as goal_router
from studypilot.routes.plan_routes import router as plan_router
from studypilot.routes.profile_routes import router as profile_router
from studypilot.routes.setup_routes import router as setup_router

logger = logging.getLogger(__name__)

# Local tables only matter for the SQL backend
if STORAGE_BACKEND == "sql":
    try:
        init_db()
    except Exception as e:
        logger.error(f"Database init skipped or failed: {e}")

app = FastAPI(title="StudyPilot API")


@app.get("/api/v1/health-check")
async def health():
    return {"status": "ok", "message": "Backend is alive!", "storage": STORAGE_BACKEND}


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(profile_router)
app.include_router(file_router)
app.include_router(goal_router)
app.include_router(plan_router)
app.include_router(dashboard_router)
app.include_router(setup_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("studypilot.main:app", host="0.0.0.0", port=8000, reload=True)
