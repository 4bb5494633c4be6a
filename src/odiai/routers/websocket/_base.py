# routers/websocket/_base.py
"""
Shared utilities for WebSocket translation routes.

Provides client message parsing and the outgoing message formats.
"""

import json
from typing import Any
from fastapi import WebSocket

from odiai.languages import parse_source_language
from odiai.utils.history import HistoryStore, DISPLAY_LIMIT

CLIENT_MESSAGE_TYPES = {"text", "language", "translate", "clear_history"}


class ClientMessageError(ValueError):
    """A client message could not be understood."""


def parse_client_message(raw: str) -> dict[str, Any]:
    """
    Parse and validate a client message.

    Returns:
        dict with one of:
        - {"type": "text", "text": str}
        - {"type": "language", "language": Language}
        - {"type": "translate"}
        - {"type": "clear_history"}
    """
    try:
        data = json.loads(raw)
    except ValueError:
        raise ClientMessageError("Message is not valid JSON") from None

    if not isinstance(data, dict):
        raise ClientMessageError("Message must be a JSON object")

    msg_type = data.get("type")
    if not isinstance(msg_type, str) or msg_type not in CLIENT_MESSAGE_TYPES:
        raise ClientMessageError(f"Unknown message type: {msg_type!r}")

    if msg_type == "text":
        text = data.get("text", "")
        if not isinstance(text, str):
            raise ClientMessageError("'text' must be a string")
        return {"type": "text", "text": text}

    if msg_type == "language":
        try:
            language = parse_source_language(str(data.get("language", "")))
        except ValueError as e:
            raise ClientMessageError(str(e)) from None
        return {"type": "language", "language": language}

    return {"type": msg_type}


def history_payload(history: HistoryStore, limit: int = DISPLAY_LIMIT) -> dict:
    return {
        "type": "history",
        "total": len(history),
        "entries": [
            {**record.to_dict(), "label": record.label, "time": record.time_label}
            for record in history.recent(limit)
        ],
    }


async def send_history(ws: WebSocket, history: HistoryStore) -> None:
    """Send the compact history list to the client."""
    await ws.send_json(history_payload(history))


async def send_error(ws: WebSocket, message: str) -> None:
    await ws.send_json({"type": "error", "message": message})
