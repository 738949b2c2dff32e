from __future__ import annotations
from typing import List, Optional, Union, Dict, Any
from pydantic import BaseModel, ConfigDict, model_validator

LOCATION_NOT_SPECIFIED = "Location not specified"


class JobRecord(BaseModel):
    """One accepted listing from a rendered page."""
    model_config = ConfigDict(frozen=True)

    id: int  # 1-based, per extraction run
    title: str
    location: str = LOCATION_NOT_SPECIFIED
    url: str


class ExtractionResult(BaseModel):
    success: bool
    jobs: Optional[List[JobRecord]] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def check_outcome(self):
        if self.success:
            if self.jobs is None or self.error is not None:
                raise ValueError("successful result needs jobs and no error")
        elif self.jobs is not None or not self.error:
            raise ValueError("failed result needs an error and no jobs")
        return self

    @classmethod
    def ok(cls, jobs: List[JobRecord]) -> "ExtractionResult":
        return cls(success=True, jobs=list(jobs))

    @classmethod
    def failure(cls, error: str) -> "ExtractionResult":
        return cls(success=False, error=error or "Unknown error")

    def to_payload(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "jobCount": len(self.jobs or []),
            "jobs": [j.model_dump() for j in self.jobs or []],
        }


class BoardPosting(BaseModel):
    """Listing returned by a vendor job-board API (ids are vendor-defined)."""
    id: Union[int, str]
    title: str
    location: str
    url: Optional[str] = None


class FetchResult(BaseModel):
    success: bool
    data: Optional[str] = None
    error: Optional[str] = None


class BoardResponse(BaseModel):
    """Outcome of routing one URL to a board API or the browser engine."""
    success: bool
    status_code: int = 200
    platform: Optional[str] = None
    jobs: Optional[List[Union[JobRecord, BoardPosting]]] = None
    error: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        jobs = self.jobs or []
        return {
            "success": True,
            "jobCount": len(jobs),
            "platform": self.platform,
            "jobs": [j.model_dump() for j in jobs],
        }
