import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gradebook.api import students, teachers, subjects, classes, reports, dashboard
from gradebook.config import settings
from gradebook.database import engine, Base
from gradebook.middleware.logging import setup_logging, add_logging_middleware
from gradebook.services.report_store import ReportStore

# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_TITLE,
    description="Student, class, subject and teacher records with term report entry and grading",
    version=settings.APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
add_logging_middleware(app)

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Reports live in memory for the lifetime of the application
app.state.report_store = ReportStore()

# Custom exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred. Please try again later."},
    )

# Create database tables
@app.on_event("startup")
async def startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created or verified")

@app.on_event("shutdown")
async def shutdown():
    await engine.dispose()

# Include routers
app.include_router(students.router, prefix="/api", tags=["Students"])
app.include_router(teachers.router, prefix="/api", tags=["Teachers"])
app.include_router(subjects.router, prefix="/api", tags=["Subjects"])
app.include_router(classes.router, prefix="/api", tags=["Classes"])
app.include_router(reports.router, prefix="/api", tags=["Reports"])
app.include_router(dashboard.router, prefix="/api", tags=["Dashboard"])

@app.get("/", tags=["Root"])
async def root():
    return {"message": "Welcome to the School Gradebook API. Visit /docs for documentation."}

@app.get("/health", tags=["Root"])
async def health_check():
    return {"status": "ok"}

# Run the server
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("gradebook.main:app", host="0.0.0.0", port=8000, reload=True)
