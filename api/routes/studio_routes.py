"""
Studio endpoints: active state, mode, message submission (plain or as
Server-Sent Events), cancellation, feedback, notifications and reset.
"""

import asyncio
import json

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import StreamingResponse

from api.bootstrap import Studio
from api.schemas.generation_schemas import GenerationOutcome
from api.schemas.notification_schemas import Notification
from api.schemas.session_schemas import Message
from api.schemas.studio_schemas import (
    ActionResponse,
    CancelResponse,
    FeedbackRequest,
    SetModeRequest,
    StudioStateResponse,
    SubmitMessageRequest,
)
from api.services.conversation_state import MessageNotFound
from api.utils.dependencies import get_studio
from api.utils.logger import configure_logging

studio_routes = APIRouter()
logger = configure_logging()

# Generations started by streaming requests; held so a client disconnect does not drop them.
_running: set[asyncio.Task] = set()


def _state(studio: Studio) -> StudioStateResponse:
    return StudioStateResponse(
        current_session_id=studio.sessions.current_session_id,
        session=studio.sessions.active,
        is_generating=studio.conversation.is_generating,
    )


@studio_routes.get("/state", response_model=StudioStateResponse)
async def get_state(studio: Studio = Depends(get_studio)) -> StudioStateResponse:
    return _state(studio)


@studio_routes.put("/mode", response_model=StudioStateResponse)
async def set_mode(body: SetModeRequest, studio: Studio = Depends(get_studio)) -> StudioStateResponse:
    studio.sessions.set_mode(body.mode)
    return _state(studio)


@studio_routes.post("/messages", response_model=GenerationOutcome)
async def submit_message(body: SubmitMessageRequest, studio: Studio = Depends(get_studio)):
    outcome = await studio.orchestrator.submit(body.text)
    if outcome is None:
        # blank utterances are ignored
        return Response(status_code=204)
    return outcome


def _sse(event: str, data) -> str:
    return f"event: {event}\ndata: {json.dumps(data)}\n\n"


@studio_routes.post("/messages/stream")
async def stream_message(body: SubmitMessageRequest, studio: Studio = Depends(get_studio)):
    """
    Submit an utterance and receive Server-Sent Events: one `fragment` event per
    coach fragment as it is applied, then `outcome` and `end`.
    """
    if not body.text.strip():
        return Response(status_code=204)

    queue: asyncio.Queue = asyncio.Queue()

    def on_fragment(message: Message, fragment: str) -> None:
        queue.put_nowait({"messageId": message.id, "text": fragment})

    task = asyncio.create_task(studio.orchestrator.submit(body.text, on_fragment=on_fragment))
    _running.add(task)
    task.add_done_callback(_running.discard)
    task.add_done_callback(lambda _: queue.put_nowait(None))

    async def event_stream():
        try:
            while True:
                fragment = await queue.get()
                if fragment is None:
                    break
                yield _sse("fragment", fragment)
            outcome = task.result()
            yield _sse("outcome", outcome.to_json_dict())
        except Exception as e:
            logger.exception("message stream failed: %s", e)
            yield _sse("error", {"error": str(e)})
        finally:
            if not task.done():
                logger.info("stream client left; generation continues in the background")
        yield "event: end\ndata: END\n\n"

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@studio_routes.post("/generation/cancel", response_model=CancelResponse)
async def cancel_generation(studio: Studio = Depends(get_studio)) -> CancelResponse:
    return CancelResponse(cancelled=studio.orchestrator.cancel())


@studio_routes.post("/messages/{message_id}/feedback", response_model=Message)
async def submit_feedback(
    message_id: str,
    body: FeedbackRequest,
    studio: Studio = Depends(get_studio),
) -> Message:
    try:
        return studio.conversation.submit_feedback(message_id, body.rating)
    except MessageNotFound:
        raise HTTPException(status_code=404, detail="Message not found")


@studio_routes.get("/notifications", response_model=list[Notification])
async def list_notifications(studio: Studio = Depends(get_studio)) -> list[Notification]:
    return studio.notifications.active()


@studio_routes.delete("/notifications/{notification_id}", response_model=ActionResponse)
async def dismiss_notification(notification_id: str, studio: Studio = Depends(get_studio)) -> ActionResponse:
    if not studio.notifications.dismiss(notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return ActionResponse(ok=True)


@studio_routes.post("/reset", response_model=StudioStateResponse)
async def reset_studio(studio: Studio = Depends(get_studio)) -> StudioStateResponse:
    studio.reset()
    return _state(studio)
