"""FastAPI application for workflows, generation and uploads."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from weave_server.db import init_all
from weave_server.generate_routes import router as generate_router
from weave_server.upload_routes import router as upload_router
from weave_server.upload_store import UPLOAD_DIR
from weave_server.workflow_db import WORKFLOW_DB_PATH
from weave_server.workflow_routes import router as workflow_router

from dotenv import load_dotenv
load_dotenv()  # provider keys and storage paths

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# editor origins allowed to call the API, comma separated
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the workflow table before serving requests."""
    init_all()
    yield


app = FastAPI(
    title="nodeweave API",
    description="API server for node-based AI text and image workflows",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# every resource lives under /api
app.include_router(workflow_router, prefix="/api")
app.include_router(generate_router, prefix="/api")
app.include_router(upload_router, prefix="/api")


@app.get("/")
def root():
    """Liveness check with the configured storage and resource paths."""
    return {
        "status": "ok",
        "version": "0.1.0",
        "workflow_db": str(WORKFLOW_DB_PATH),
        "upload_dir": str(UPLOAD_DIR),
        "endpoints": {
            "workflows": "/api/workflows",
            "generate": "/api/generate",
            "uploads": "/api/uploads",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
