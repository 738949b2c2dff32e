from __future__ import annotations
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Optional
import logging
import os

# Internal imports
from careerscraper.pagescan.logging_config import setup_logging, log_event
from careerscraper.pagescan.sources.base import fetch_jobs

setup_logging()
logger = logging.getLogger("web")

app = FastAPI(title="Career Page Scraper")

origins = [
    "http://127.0.0.1:3000",
    "http://localhost:3000",
    "http://127.0.0.1:8000",
    "http://localhost:8000",
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class FetchJobsRequest(BaseModel):
    url: Optional[str] = None


@app.get("/api/test")
def api_test():
    return {"message": "Server is running!"}


# Sync handler: runs in the threadpool, one browser per request.
@app.post("/api/fetch-jobs")
def api_fetch_jobs(body: FetchJobsRequest) -> JSONResponse:
    url = (body.url or "").strip()
    if not url:
        return JSONResponse(status_code=400, content={"success": False, "error": "URL is required"})
    log_event('api_fetch_jobs', url=url)
    response = fetch_jobs(url)
    status = 200 if response.success else response.status_code
    return JSONResponse(status_code=status, content=response.to_payload())


@app.get("/health")
def health():
    return {"status": "ok"}

if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", "8000"))
    uvicorn.run(app, host="127.0.0.1", port=port)
