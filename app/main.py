"""
Main application entry point.
"""

import logging
import os

from fastapi import FastAPI
from app.api.v1.lending_endpoints import router as lending_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

app = FastAPI(
    title="Library Lending API",
    description="Checkout, return, late fees and inventory reports for a library.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Include API routers
app.include_router(lending_router, prefix="/api/v1", tags=["lending"])

@app.get("/")
def read_root():
    """Root endpoint."""
    return {
        "message": "Welcome to the Library Lending API",
        "docs": "/docs",
        "reports": ["/api/v1/reports/available", "/api/v1/reports/overdue"],
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
