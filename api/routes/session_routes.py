"""
Session collection endpoints: list, create, activate, rename, delete.
"""

from fastapi import APIRouter, Depends, HTTPException

from api.bootstrap import Studio
from api.schemas.session_schemas import Session, SessionSummary
from api.schemas.studio_schemas import RenameSessionRequest, SessionListResponse
from api.services.session_service import SessionNotFound
from api.utils.dependencies import get_studio
from api.utils.logger import configure_logging

session_routes = APIRouter()
logger = configure_logging()


def _session_list(studio: Studio) -> SessionListResponse:
    return SessionListResponse(
        current_session_id=studio.sessions.current_session_id,
        sessions=[SessionSummary.from_session(s) for s in studio.sessions.list_sessions()],
    )


@session_routes.get("/sessions", response_model=SessionListResponse)
async def list_sessions(studio: Studio = Depends(get_studio)) -> SessionListResponse:
    return _session_list(studio)


@session_routes.post("/sessions", response_model=Session, status_code=201)
async def create_session(studio: Studio = Depends(get_studio)) -> Session:
    return studio.sessions.create()


@session_routes.post("/sessions/{session_id}/activate", response_model=Session)
async def activate_session(session_id: str, studio: Studio = Depends(get_studio)) -> Session:
    if not studio.sessions.switch_to(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return studio.sessions.active


@session_routes.patch("/sessions/{session_id}", response_model=Session)
async def rename_session(
    session_id: str,
    body: RenameSessionRequest,
    studio: Studio = Depends(get_studio),
) -> Session:
    try:
        return studio.sessions.rename(session_id, body.title)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@session_routes.delete("/sessions/{session_id}", response_model=SessionListResponse)
async def delete_session(session_id: str, studio: Studio = Depends(get_studio)) -> SessionListResponse:
    if not studio.sessions.delete(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return _session_list(studio)
