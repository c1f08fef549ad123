"""Playback streaming API route (remote renderer over a websocket)."""

import asyncio
import logging
import uuid
from typing import get_args

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from pacer.config import get_settings
from pacer.models.session import ChunkEvent
from pacer.schemas.document import LandmarkDTO
from pacer.schemas.session import (
    ChunkMessage,
    PlaybackCommand,
    PlaybackCommandName,
    StreamEvent,
    TokenDTO,
)
from pacer.schemas.settings import PacingSettings
from pacer.services.playback import AsyncioTickScheduler, PacingEngine, breadcrumb_changed
from pacer.services.tokenizer import display_text, strip_markers

router = APIRouter()
logger = logging.getLogger(__name__)

KNOWN_COMMANDS = frozenset(get_args(PlaybackCommandName))


def _chunk_payload(event: ChunkEvent, changed: bool) -> dict:
    message = ChunkMessage(
        index=event.index,
        tokens=[
            TokenDTO(index=token.index, text=token.text, display=strip_markers(token.text))
            for token in event.tokens
        ],
        text=display_text(token.text for token in event.tokens),
        breadcrumb=[LandmarkDTO.model_validate(landmark) for landmark in event.breadcrumb.path],
        breadcrumb_changed=changed,
        is_final=event.is_final,
        delay_ms=event.delay_ms,
    )
    return message.model_dump(mode="json")


def _status_payload(engine: PacingEngine) -> dict:
    return {
        "status": engine.status.value,
        "current_index": engine.current_index,
        "display_index": engine.display_index,
        "total_tokens": engine.total_tokens,
        "progress": engine.get_progress_fraction(),
        "elapsed_seconds": round(engine.get_elapsed_seconds(), 3),
        "remaining_seconds": round(engine.get_remaining_seconds(), 3),
        "wpm": engine.get_current_wpm(),
        "stats": engine.format_stats(),
        "breadcrumb": [landmark.label for landmark in engine.get_breadcrumb().path],
    }


def _loaded_payload(engine: PacingEngine) -> dict:
    return {
        "token_count": engine.total_tokens,
        "start_index": engine.current_index,
        "landmarks": [
            LandmarkDTO.model_validate(landmark).model_dump(mode="json")
            for landmark in engine.get_landmarks()
        ],
        "estimated_seconds": round(engine.get_remaining_seconds(), 3),
    }


def _error_details(exc: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]


async def _pump_events(websocket: WebSocket, queue: asyncio.Queue) -> None:
    """Send queued events in order until the ``None`` sentinel arrives."""
    while True:
        event = await queue.get()
        if event is None:
            return
        try:
            await websocket.send_json(event.model_dump(mode="json"))
        except Exception:
            logger.debug("Failed to send %s event to WebSocket client", event.event_type)
            return


@router.websocket("/stream")
async def playback_stream(websocket: WebSocket):
    """
    WebSocket endpoint driving one pacing engine per connection.

    Client commands (JSON ``{"command": ...}``):
    - load: ``text``, optional ``start_index`` and ``source_type``
    - play, pause, toggle, stop
    - seek: ``delta``; jump: ``index``
    - settings: partial ``settings`` mapping merged into the snapshot
    - status, ping

    Server events: connected, loaded, chunk, complete, status, settings,
    error, pong.
    """
    await websocket.accept()

    app_settings = get_settings()
    session_id = uuid.uuid4().hex[:8]
    queue: asyncio.Queue = asyncio.Queue()

    def publish(event_type: str, data: dict) -> None:
        queue.put_nowait(StreamEvent(event_type=event_type, session_id=session_id, data=data))

    # Last breadcrumb sent on this connection
    last_breadcrumb = None

    def on_chunk(event: ChunkEvent) -> None:
        nonlocal last_breadcrumb
        changed = breadcrumb_changed(last_breadcrumb, event.breadcrumb)
        last_breadcrumb = event.breadcrumb
        publish("chunk", _chunk_payload(event, changed))

    engine = PacingEngine(
        PacingSettings(wpm=app_settings.default_wpm, chunk_size=app_settings.default_chunk_size),
        scheduler=AsyncioTickScheduler(asyncio.get_running_loop()),
        on_chunk=on_chunk,
        on_complete=lambda: publish("complete", _status_payload(engine)),
    )
    sender = asyncio.create_task(_pump_events(websocket, queue))

    publish(
        "connected",
        {
            "message": "Connected to playback stream",
            "settings": engine.settings.model_dump(mode="json"),
        },
    )
    logger.info("Playback stream %s connected", session_id)

    try:
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                break

            name = message.get("command") if isinstance(message, dict) else None
            if name not in KNOWN_COMMANDS:
                publish("error", {"message": f"Unknown command: {name}"})
                continue

            try:
                command = PlaybackCommand.model_validate(message)
            except ValidationError as e:
                publish("error", {"message": f"Invalid {name} command", "details": _error_details(e)})
                continue

            _dispatch(engine, command, publish, app_settings.max_input_chars)

    except Exception as e:
        logger.exception("WebSocket error for playback stream %s", session_id)
        publish("error", {"message": str(e)})
    finally:
        engine.stop()
        queue.put_nowait(None)
        await sender
        logger.info("Playback stream %s closed", session_id)


def _dispatch(engine: PacingEngine, command: PlaybackCommand, publish, max_input_chars: int) -> None:
    name = command.command

    if name == "load":
        if not command.text:
            publish("error", {"message": "load requires text"})
            return
        if len(command.text) > max_input_chars:
            publish("error", {"message": f"Input text exceeds maximum size of {max_input_chars:,} characters"})
            return

        previous = engine.document
        engine.load(command.text, command.start_index, source_type=command.source_type)
        if engine.document is previous:
            publish("error", {"message": "Text contains no readable tokens"})
            return
        publish("loaded", _loaded_payload(engine))

    elif name == "play":
        engine.play()
    elif name == "pause":
        engine.pause()
    elif name == "toggle":
        engine.toggle()
    elif name == "stop":
        engine.stop()

    elif name == "seek":
        if command.delta is None:
            publish("error", {"message": "seek requires delta"})
            return
        engine.seek(command.delta)

    elif name == "jump":
        if command.index is None:
            publish("error", {"message": "jump requires index"})
            return
        engine.jump_to(command.index)

    elif name == "settings":
        try:
            snapshot = PacingSettings.model_validate({**engine.settings.model_dump(), **command.settings})
        except ValidationError as e:
            publish("error", {"message": "Invalid settings", "details": _error_details(e)})
            return
        engine.update_settings(snapshot)
        publish("settings", snapshot.model_dump(mode="json"))
        return

    elif name == "ping":
        publish("pong", {})
        return

    publish("status", _status_payload(engine))
