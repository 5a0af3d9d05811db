from __future__ import annotations
from pydantic import BaseModel, Field

class GithubAssignRequest(BaseModel):
    owner: str = Field(..., json_schema_extra={"examples": ["pallets"]})
    repo: str = Field(..., json_schema_extra={"examples": ["flask"]})
    pr_number: int = Field(..., ge=1, json_schema_extra={"examples": [12345]})
