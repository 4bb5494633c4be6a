# routers/websocket/translate.py
"""
WebSocket route for the translate-as-you-type form.

One connection = one page session = one InputController.
The HistoryStore and TranslationClient are shared via app state.
"""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from odiai.utils.controller import InputController

from ._base import (
    ClientMessageError,
    parse_client_message,
    send_history,
    send_error,
)

router = APIRouter()


@router.websocket("/translate")
async def translate_session(ws: WebSocket):
    """
    WebSocket endpoint for an interactive translation session.

    Client sends keystrokes / hint changes / explicit translate requests,
    server pushes state snapshots and the history list when it changes.
    """
    await ws.accept()
    print("🔌 WebSocket /ws/translate connected")

    history = ws.app.state.history
    closed = False
    sent_revision = None

    async def on_state(snapshot: dict):
        nonlocal sent_revision
        if closed:
            return
        await ws.send_json(snapshot)
        if history.revision != sent_revision:
            sent_revision = history.revision
            await send_history(ws, history)

    controller = InputController(
        client=ws.app.state.translator,
        history=history,
        on_state=on_state,
        debounce_seconds=getattr(ws.app.state, "debounce_seconds", None),
    )

    try:
        await on_state(controller.snapshot())

        while True:
            raw = await ws.receive_text()
            try:
                msg = parse_client_message(raw)
            except ClientMessageError as e:
                print(f"⚠️ Bad client message: {e}")
                await send_error(ws, str(e))
                continue

            if msg["type"] == "text":
                await controller.set_text(msg["text"])

            elif msg["type"] == "language":
                await controller.set_source_language(msg["language"])

            elif msg["type"] == "translate":
                if controller.request_translation() is None:
                    print("⏭️  Translate ignored (empty input or already translating)")

            elif msg["type"] == "clear_history":
                history.clear()
                await on_state(controller.snapshot())

    except WebSocketDisconnect:
        print("Client disconnected: WebSocketDisconnect")
    except RuntimeError as e:
        if "disconnect message has been received" in str(e):
            print("Client disconnected: Runtime")
        else:
            print(f"WebSocket error: RuntimeError: {e}")
    finally:
        closed = True
        await controller.shutdown()
        print("🔌 WebSocket /ws/translate closed")
