from __future__ import annotations
import json
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, HTTPException

from autoassign.errors import ConfigurationError
from autoassign.logging_config import configure_logging
from autoassign.schemas import GithubAssignRequest
from autoassign.services import AssignmentService

logger = logging.getLogger(__name__)

assignment_service = AssignmentService()

@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    yield

app = FastAPI(title="Auto Assign — Reviewer and Assignee Picker", lifespan=lifespan)

@app.get("/health")
def health():
    return {"ok": True}

@app.post("/assign/github")
async def assign_github(req: GithubAssignRequest):
    try:
        outcome = await assignment_service.assign_existing(req.owner, req.repo, req.pr_number)
    except ConfigurationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    result = outcome.to_dict()
    result["pr"] = {"owner": req.owner, "repo": req.repo, "number": req.pr_number}
    return result

@app.post("/github/webhook")
async def github_webhook(request: Request):
    raw = await request.body()
    event = request.headers.get("X-GitHub-Event")
    try:
        payload = json.loads(raw.decode("utf-8"))
    except ValueError:
        raise HTTPException(status_code=400, detail="Payload is not valid JSON")
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Payload must be a JSON object")

    if event != "pull_request":
        return {"ok": True, "ignored": True}

    try:
        result = await assignment_service.process_pull_request_event(payload)
    except ConfigurationError as exc:
        logger.warning("Configuration error for delivery %s: %s", request.headers.get("X-GitHub-Delivery"), exc)
        raise HTTPException(status_code=422, detail=str(exc))
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=f"Payload is missing {exc}")
    except RuntimeError:
        logger.exception("Failed to handle delivery %s", request.headers.get("X-GitHub-Delivery"))
        raise HTTPException(status_code=500, detail="Failed to handle pull request event")

    if result.ignored:
        return {"ok": True, "ignored": True, "reason": result.reason}
    return {"ok": True, "outcome": result.outcome.to_dict()}
