"""
FastAPI main application.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from core.config import API_V1_PREFIX, CORS_ORIGINS, LOG_LEVEL
from core.config_validator import config_validator, ConfigurationError
from api.routes import curriculum, documents, resources

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="StudyPath API",
    description="Document-to-curriculum and learning resource matching API",
    version="1.0.0",
)

@app.on_event("startup")
async def validate_configuration():
    """Validate configuration on application startup."""

    print("🔍 Validating configuration...")

    validation_result = config_validator.validate_all()

    for warning in validation_result["warnings"]:
        print(f"⚠️  WARNING: {warning}")

    if not validation_result["valid"]:
        print("\n❌ CONFIGURATION ERRORS DETECTED:\n")
        for error in validation_result["errors"]:
            print(f"   ❌ {error}")
        print("\n🛑 Application startup aborted due to configuration errors.\n")
        raise ConfigurationError("; ".join(validation_result["errors"]))

    print("✅ Configuration validated successfully\n")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(documents.router, prefix=f"{API_V1_PREFIX}/documents", tags=["documents"])
app.include_router(curriculum.router, prefix=f"{API_V1_PREFIX}/curriculum", tags=["curriculum"])
app.include_router(resources.router, prefix=API_V1_PREFIX, tags=["resources"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "StudyPath API", "version": "1.0.0"}


@app.get("/health")
@app.get(f"{API_V1_PREFIX}/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
