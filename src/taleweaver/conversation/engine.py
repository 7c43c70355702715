"""Interactive story conversation engine."""

import asyncio
import time
from collections.abc import Callable, Coroutine
from typing import Any

from ..errors import (
    ConversationNotStartedError,
    EngineBusyError,
    EngineDisposedError,
    ProviderError,
)
from ..images import ImageSearchProvider
from ..llm import ChatMessage, LLMProvider
from ..prompts import ILLUSTRATION_KEYWORDS, STORY_CONTINUE, STORY_START, render_prompt
from .models import (
    ConversationEvent,
    ConversationSnapshot,
    ConversationState,
    EnginePhase,
    EventKind,
    Message,
    Sender,
)
from .timing import elapsed_since

# User side of the exchange when illustrating the opening beat
INTRO_LABEL = "Intro"

Subscriber = Callable[[ConversationEvent], None]
DebugCallback = Callable[[str, str, str], None]


class ConversationEngine:
    """Drives an illustrated, turn-based story with a narrative provider.

    Hidden design decisions:
    - Prompt construction for opening, continuing and illustrating the story
    - Scheduling of narrative and illustration requests on the event loop
    - Ordering rule for illustrations (only the latest turn may publish)
    - Failure policy (narrative errors end the turn, illustration errors are ignored)

    start() and submit() return immediately with the task doing the work;
    consumers observe progress through subscribe() or snapshot().
    """

    def __init__(
        self,
        theme: str,
        llm: LLMProvider,
        images: ImageSearchProvider | None = None,
        model: str | None = None,
        temperature: float = 0.7,
        clock: Callable[[], float] = time.time
    ):
        """Initialize the engine.

        Args:
            theme: Starting theme for the story, fixed for the engine's lifetime
            llm: Narrative provider writing story beats and illustration keywords
            images: Image provider for illustrations (None disables illustrations)
            model: Model to request from the narrative provider (None uses its default)
            temperature: Sampling temperature for narrative requests
            clock: Wall-clock source in seconds, used for elapsed time
        """
        self._llm = llm
        self._images = images
        self._model = model
        self._temperature = temperature
        self._clock = clock

        self._state = ConversationState(theme=theme)
        self._turn = 0
        self._disposed = False
        self._tasks: set[asyncio.Task] = set()
        self._subscribers: list[Subscriber] = []
        self._debug_callback: DebugCallback | None = None

    @property
    def theme(self) -> str:
        return self._state.theme

    @property
    def transcript(self) -> tuple[Message, ...]:
        return tuple(self._state.transcript)

    @property
    def pending(self) -> bool:
        """True exactly while a narrative request is in flight."""
        return self._state.pending

    @property
    def illustration_url(self) -> str | None:
        return self._state.illustration_url

    @property
    def phase(self) -> EnginePhase:
        return self._state.phase

    @property
    def turn(self) -> int:
        """Number of narrative responses accepted so far."""
        return self._turn

    @property
    def disposed(self) -> bool:
        return self._disposed

    def snapshot(self) -> ConversationSnapshot:
        """Get an immutable copy of the current conversation state."""
        return self._state.snapshot()

    def elapsed(self, now: float | None = None) -> str:
        """Time since the story was first started, as MM:SS."""
        return elapsed_since(self._state.started_at, self._clock() if now is None else now)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback for every state change and failed turn.

        Args:
            callback: Callable receiving a ConversationEvent

        Returns:
            Callable that removes the subscription
        """
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the debug callback for detailed execution logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
                      component: Source component name
                      message: Log message
        """
        self._debug_callback = callback

    def start(self) -> asyncio.Task | None:
        """Request the opening story beat.

        Does nothing once the story has begun or while a request is pending.

        Returns:
            Task resolving to the opening Message (None if the turn failed),
            or None if the call was ignored

        Raises:
            EngineDisposedError: If the engine was disposed
        """
        self._ensure_alive()
        if self._state.transcript or self._state.pending:
            self._debug("debug", "engine", "start ignored: story already underway")
            return None

        if self._state.started_at is None:
            self._state.started_at = self._clock()

        prompt = render_prompt(STORY_START, theme=self._state.theme)
        self._begin_narrative()
        return self._spawn(self._run_turn(prompt, INTRO_LABEL))

    def submit(self, user_text: str) -> asyncio.Task | None:
        """Record the user's turn and request the next story beat.

        The text is stored verbatim; blank input is ignored.

        Args:
            user_text: What the user answered

        Returns:
            Task resolving to the assistant Message (None if the turn failed),
            or None if the input was blank

        Raises:
            EngineDisposedError: If the engine was disposed
            EngineBusyError: If the previous story beat is still being generated
            ConversationNotStartedError: If there is no opening beat yet
        """
        self._ensure_alive()
        if not user_text.strip():
            return None
        if self._state.pending:
            raise EngineBusyError()
        if not self._state.transcript:
            raise ConversationNotStartedError()

        self._state.append(Message(sender=Sender.USER, content=user_text))
        prompt = render_prompt(STORY_CONTINUE, transcript=self._state.to_prompt())
        self._begin_narrative()
        return self._spawn(self._run_turn(prompt, user_text))

    def retry(self) -> asyncio.Task | None:
        """Request again the story beat whose narrative request failed.

        A failed opening is started again. A failed reply is re-requested
        for the user message already in the transcript, which is not
        appended a second time.

        Returns:
            Task resolving to the assistant Message (None if the turn failed),
            or None if the latest beat did not fail

        Raises:
            EngineDisposedError: If the engine was disposed
            EngineBusyError: If a story beat is still being generated
        """
        self._ensure_alive()
        if self._state.pending:
            raise EngineBusyError()
        if not self._state.transcript:
            return self.start()

        last = self._state.transcript[-1]
        if last.sender != Sender.USER:
            self._debug("debug", "engine", "retry ignored: latest beat did not fail")
            return None

        self._debug("info", "engine", "retrying failed turn")
        prompt = render_prompt(STORY_CONTINUE, transcript=self._state.to_prompt())
        self._begin_narrative()
        return self._spawn(self._run_turn(prompt, last.content))

    async def wait_idle(self) -> None:
        """Wait until no narrative or illustration work is outstanding.

        Returns as soon as the engine is disposed.

        Raises:
            Exception: The first unexpected error raised by that work
        """
        while not self._disposed:
            outstanding = [task for task in self._tasks if not task.done()]
            if not outstanding:
                return
            results = await asyncio.gather(*outstanding, return_exceptions=True)
            for result in results:
                # Cancelled work yields CancelledError, a BaseException
                if isinstance(result, Exception):
                    raise result

    def dispose(self) -> None:
        """End the conversation.

        Outstanding requests are cancelled and any result that still
        arrives is dropped. Subscribers are not notified again.
        """
        if self._disposed:
            return
        self._disposed = True
        for task in self._tasks:
            task.cancel()
        self._debug("info", "engine", "conversation disposed")

    async def close(self) -> None:
        """Dispose the engine and wait for cancelled work to unwind."""
        self.dispose()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def _begin_narrative(self) -> None:
        self._state.pending = True
        self._state.phase = EnginePhase.AWAITING_NARRATIVE
        self._emit(EventKind.STATE_CHANGED)

    async def _run_turn(self, prompt: str, user_text: str) -> Message | None:
        """Fetch one story beat and, once accepted, start its illustration."""
        self._debug("info", "narrative", f"requesting story beat (prompt: {len(prompt)} chars)")
        try:
            text = await self._complete(prompt)
        except ProviderError as e:
            if self._disposed:
                return None
            self._state.pending = False
            self._state.phase = EnginePhase.IDLE
            self._debug("error", "narrative", str(e))
            self._emit(EventKind.TURN_FAILED, error=str(e))
            return None

        if self._disposed:
            return None

        message = Message(sender=Sender.ASSISTANT, content=text)
        self._state.append(message)
        self._state.pending = False
        self._turn += 1
        self._debug("info", "narrative", f"turn {self._turn} accepted ({len(text)} chars)")

        if self._images is None:
            self._state.phase = EnginePhase.IDLE
        else:
            self._state.phase = EnginePhase.AWAITING_ILLUSTRATION_KEYWORDS
            self._spawn(self._illustrate(self._turn, user_text, text))
        self._emit(EventKind.STATE_CHANGED)
        return message

    async def _illustrate(self, turn: int, user_text: str, assistant_text: str) -> str | None:
        """Extract keywords for a turn and publish the first matching image.

        Every failure is swallowed; the previous illustration stays in place.
        """
        prompt = render_prompt(
            ILLUSTRATION_KEYWORDS, user_text=user_text, assistant_text=assistant_text
        )
        try:
            keywords = await self._complete(prompt)
        except ProviderError as e:
            self._debug("warning", "illustration", f"keyword extraction failed: {e}")
            self._settle(turn)
            return None

        query = keywords.strip().strip("\"'").strip()
        if not query:
            self._debug("warning", "illustration", "keyword extraction returned nothing")
            self._settle(turn)
            return None
        if not self._is_latest(turn):
            self._debug("debug", "illustration", f"dropping keywords for stale turn {turn}")
            return None

        self._debug("info", "illustration", f"searching images for '{query}'")
        self._settle(turn, EnginePhase.AWAITING_ILLUSTRATION)
        try:
            response = await self._images.search(query, limit=1)
        except ProviderError as e:
            self._debug("warning", "illustration", f"image search failed: {e}")
            self._settle(turn)
            return None

        if not self._is_latest(turn):
            self._debug("debug", "illustration", f"dropping image for stale turn {turn}")
            return None

        url = response.first_regular_url
        if not url:
            self._debug("warning", "illustration", f"no image found for '{query}'")
            self._settle(turn)
            return None

        self._state.illustration_url = url
        if self._state.pending:
            # The pending narrative request owns the phase; publish the link only
            self._emit(EventKind.STATE_CHANGED)
        else:
            self._settle(turn)
        return url

    async def _complete(self, prompt: str) -> str:
        """Send a single-prompt request and return the trimmed text.

        Raises:
            ProviderError: If the request fails or yields only whitespace
        """
        response = await self._llm.chat_completion(
            [ChatMessage(role="user", content=prompt)],
            model=self._model,
            temperature=self._temperature,
        )
        text = response.content.strip()
        if not text:
            raise ProviderError("completion was empty", provider=self._llm.name)
        return text

    def _is_latest(self, turn: int) -> bool:
        return not self._disposed and turn == self._turn

    def _settle(self, turn: int, phase: EnginePhase = EnginePhase.IDLE) -> None:
        """Move the illustration pipeline of the latest turn to a new phase.

        A pending narrative request owns the phase, so nothing changes then.
        """
        if not self._is_latest(turn) or self._state.pending:
            return
        self._state.phase = phase
        self._emit(EventKind.STATE_CHANGED)

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _emit(self, kind: EventKind, error: str | None = None) -> None:
        if self._disposed:
            return
        event = ConversationEvent(kind=kind, snapshot=self._state.snapshot(), error=error)
        for callback in list(self._subscribers):
            callback(event)

    def _ensure_alive(self) -> None:
        if self._disposed:
            raise EngineDisposedError()

    def _debug(self, level: str, component: str, message: str) -> None:
        """Send a debug log message if callback is set.

        Args:
            level: Log level (debug, info, warning, error)
            component: Component name for the log
            message: Log message
        """
        if self._debug_callback:
            self._debug_callback(level, component, message)
