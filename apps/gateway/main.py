# apps/gateway/main.py
from fastapi import FastAPI, HTTPException, Request, Form, File, UploadFile, Query
from fastapi.responses import JSONResponse
from typing import List, Optional
import logging
from dotenv import load_dotenv

load_dotenv()  # picks up .env from the current working directory

from common.settings import settings
from common.formatting import format_currency, format_date, mailto
from common.models import ComplaintFormParams, Project, ProjectDetailParams
from common.navigation import Navigator, Route
from common.notify import CollectingNotifier
from connectors.roadworks.session import ComplaintSession
from connectors.roadworks.directory import ProjectDirectory

log = logging.getLogger("roads-hub")
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))

# ---------- App ----------
app = FastAPI(title="roads-hub", version="0.1.0")
app.state.roads_transport = None  # swapped for a MockTransport in tests
app.state.directory = None

async def _directory(request: Request) -> ProjectDirectory:
    d: Optional[ProjectDirectory] = request.app.state.directory
    if d is None or not d.loaded:
        notes = CollectingNotifier()
        d = ProjectDirectory(notifier=notes, transport=request.app.state.roads_transport)
        await d.load()
        request.app.state.directory = d
    return d

def _summary(p: Project) -> dict:
    return {
        "id": p.id,
        "name": p.name,
        "location": p.location,
        "contractor": p.contractor,
        "contractAmount": format_currency(p.contract_amount),
        "tenderDate": format_date(p.tender_date),
        "detail": f"/projects/{p.id}",
    }

@app.on_event("startup")
async def _print_cfg():
    log.info(
        "CFG api=%s sample_projects=%s submit_timeout=%ss",
        settings.roads_api_base_url,
        settings.use_sample_projects,
        settings.submit_timeout_seconds,
    )

@app.get("/health")
def health():
    return {
        "ok": True,
        "service": "roads-hub",
        "roads_api": settings.roads_api_base_url,
    }

# ---------- Project list ----------
@app.get("/projects")
async def list_projects(request: Request, q: Optional[str] = Query(default=None)):
    d = await _directory(request)
    items = d.filter(q)
    out = {"title": "Road Projects", "count": len(items), "items": [_summary(p) for p in items]}
    if not items:
        out["empty_message"] = d.empty_message(q)
    if isinstance(d.notifier, CollectingNotifier) and d.notifier.messages:
        out["notifications"] = d.notifier.drain()
    return out

# ---------- Project detail ----------
@app.get("/projects/{project_id}")
async def project_detail(project_id: str, request: Request):
    d = await _directory(request)
    p = d.get(project_id)
    if p is None:
        raise HTTPException(status_code=404, detail=f"Unknown project {project_id}")
    return {
        "title": "Project Details",
        "id": p.id,
        "name": p.name,
        "location": p.location,
        "status": p.status,
        "contractAmount": format_currency(p.contract_amount),
        "tenderDate": format_date(p.tender_date),
        "contractor": p.contractor,
        "contractorEmail": p.contractor_email,
        "contractorMailto": mailto(p.contractor_email),
        "description": p.description,
        "complaint_form": f"/projects/{p.id}/complaints",
    }

# ---------- Complaint form ----------
@app.post("/projects/{project_id}/complaints")
async def submit_complaint_form(
    project_id: str,
    request: Request,
    description: str = Form(""),
    contactEmail: str = Form(""),
    consentGiven: bool = Form(False),
    attachments: Optional[List[UploadFile]] = File(None),
):
    d = await _directory(request)
    p = d.get(project_id)
    if p is None:
        raise HTTPException(status_code=404, detail=f"Unknown project {project_id}")

    nav = Navigator()
    nav.navigate(Route.PROJECT_DETAILS, ProjectDetailParams(project=p))
    nav.navigate(Route.COMPLAINT_FORM, ComplaintFormParams(project_id=p.id))

    notes = CollectingNotifier()
    session = ComplaintSession(p.id, notifier=notes, navigator=nav,
                               transport=request.app.state.roads_transport)
    session.form.description = description
    session.form.contact_email = contactEmail
    session.form.consent_given = consentGiven

    for up in attachments or []:
        # refuse bad kinds and oversized files before pulling them into memory
        if not session.attachments.precheck_upload(up.filename, up.content_type, up.size):
            continue
        content = await up.read()
        session.attachments.add_upload(up.filename, up.content_type, content)

    outcome = await session.submit()
    body = outcome.model_dump()
    body["attachments"] = [a.file_name for a in session.attachments.items]
    body["notifications"] = notes.as_dicts()
    body["view"] = nav.title

    if outcome.ok:
        return JSONResponse(status_code=201, content=body)
    if outcome.errors:
        return JSONResponse(status_code=422, content=body)
    return JSONResponse(status_code=502, content=body)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("apps.gateway.main:app", host="0.0.0.0", port=settings.hub_port)
