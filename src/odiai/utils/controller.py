"""
Debounced input loop between the user's keystrokes and the translator.

States (derived, never stored):
- idle:        text empty after trimming
- pending:     debounce timer running, nothing in flight
- translating: at least one request in flight
- displaying:  result shown, no timer, no request

Every text or hint change cancels the running timer and schedules a new one,
so only the last keystroke's timer survives. A response is applied only if
the text and hint it was requested for are still current; stale responses
are dropped without touching the display or the history.
"""

import asyncio
from enum import Enum
from typing import Awaitable, Callable

from odiai import config
from odiai.languages import Language
from odiai.utils.history import HistoryStore, TranslationRecord
from odiai.utils.translation import TranslationClient

FAILURE_MESSAGE = "Error connecting to AI. Please check your connection."


class ControllerState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    TRANSLATING = "translating"
    DISPLAYING = "displaying"


class InputController:
    """One page session: owns the text, the hint, the timer and the displayed result."""

    def __init__(
        self,
        client: TranslationClient,
        history: HistoryStore,
        on_state: Callable[[dict], Awaitable[None]] | None = None,
        debounce_seconds: float | None = None,
    ):
        self.client = client
        self.history = history
        self.on_state = on_state
        self.debounce_seconds = config.DEBOUNCE_SECONDS if debounce_seconds is None else debounce_seconds

        self.text = ""
        self.source_language = Language.AUTO
        self.translated_text = ""

        self._timer_task: asyncio.Task | None = None
        self._request_tasks: set[asyncio.Task] = set()
        # Requests whose translation has not resolved yet
        self._in_flight: set[asyncio.Task] = set()

    @property
    def state(self) -> ControllerState:
        if self._in_flight:
            return ControllerState.TRANSLATING
        if not self.text.strip():
            return ControllerState.IDLE
        if self._timer_task is not None:
            return ControllerState.PENDING
        return ControllerState.DISPLAYING

    @property
    def is_translating(self) -> bool:
        return bool(self._in_flight)

    @property
    def can_translate(self) -> bool:
        return bool(self.text.strip()) and not self.is_translating

    @property
    def copyable_text(self) -> str:
        if self.is_translating:
            return ""
        return self.translated_text

    async def set_text(self, text: str):
        if text == self.text:
            return
        self.text = text
        await self._on_input_changed()

    async def set_source_language(self, language: Language):
        if language == self.source_language:
            return
        self.source_language = language
        await self._on_input_changed()

    async def _on_input_changed(self):
        self._cancel_timer()
        if not self.text.strip():
            self.translated_text = ""
        else:
            self._timer_task = asyncio.create_task(self._debounce())
        await self._notify()

    def request_translation(self) -> asyncio.Task | None:
        """Translate now, skipping the debounce. No-op while empty or already translating."""
        if not self.can_translate:
            return None
        self._cancel_timer()
        return self._start_request()

    def _cancel_timer(self):
        if self._timer_task is not None:
            self._timer_task.cancel()
            self._timer_task = None

    async def _debounce(self):
        await asyncio.sleep(self.debounce_seconds)
        # Drop the handle first: the request below must not cancel this task
        self._timer_task = None
        self._start_request()

    def _start_request(self) -> asyncio.Task:
        text = self.text.strip()
        language = self.source_language
        task = asyncio.create_task(self._perform(text, language))
        self._in_flight.add(task)
        self._request_tasks.add(task)
        task.add_done_callback(self._on_request_done)
        return task

    def _on_request_done(self, task: asyncio.Task):
        # Also runs for tasks cancelled before their first step
        self._in_flight.discard(task)
        self._request_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            print(f"❌ Translation request task failed: {type(error).__name__}: {error}")

    def _is_current(self, text: str, language: Language) -> bool:
        return text == self.text.strip() and language == self.source_language

    async def _perform(self, text: str, language: Language):
        task = asyncio.current_task()
        await self._notify()

        translated: str | None = None
        try:
            translated = await self.client.translate(text, language)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            print(f"❌ UI translation error: {type(e).__name__}: {e}")
        finally:
            self._in_flight.discard(task)

        short = text[:30] + "..." if len(text) > 30 else text
        if not self._is_current(text, language):
            print(f"🗑️  Stale translation discarded: \"{short}\"")
        elif translated is None:
            self.translated_text = FAILURE_MESSAGE
        else:
            self.translated_text = translated
            record = TranslationRecord.create(text, translated, language)
            if not self.history.append(record):
                print(f"⏭️  History unchanged (same text as latest): \"{short}\"")

        await self._notify()

    def snapshot(self) -> dict:
        return {
            "type": "state",
            "state": self.state.value,
            "text": self.text,
            "source_language": self.source_language.value,
            "translated_text": self.translated_text,
            "is_translating": self.is_translating,
            "can_translate": self.can_translate,
            "can_copy": bool(self.copyable_text),
            "char_count": len(self.text),
        }

    async def _notify(self):
        if self.on_state:
            await self.on_state(self.snapshot())

    async def shutdown(self):
        self._cancel_timer()
        for task in list(self._request_tasks):
            task.cancel()
        if self._request_tasks:
            await asyncio.gather(*self._request_tasks, return_exceptions=True)
        self._in_flight.clear()
        self._request_tasks.clear()
        print("✅ Input session closed")
