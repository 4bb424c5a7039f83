# sitecontent/application/content/reconciler.py
from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Set

from sitecontent.domain.classifier import DefaultContentClassifier
from sitecontent.domain.content import ContentSnapshot
from sitecontent.domain.defaults import default_content
from sitecontent.domain.invariants.exceptions import InvalidContentFormat
from sitecontent.domain.lifecycle.save import SaveState, SaveStatus
from sitecontent.normalizers.content import normalize_content, parse_content
from sitecontent.utils.order import normalize_order
from .store import ContentStore

logger = logging.getLogger(__name__)

DEFAULT_SAVE_DELAY = 1.0


@dataclass(frozen=True)
class ContentSavedEvent:
    """Emitted once after every store write attempt."""

    success: bool
    error: Optional[str] = None


Listener = Callable[[ContentSavedEvent], Any]


class ContentReconciler:
    """
    Mediates every load and save between the editor and the content store.

    Responsibilities:
    - Refuse to persist placeholder or empty content
    - Debounce saves into a single pending write
    - Normalize block order on every load
    - Decide when the baseline is shown for display only

    One instance per store connection. The debounce timer, the listeners
    and the last known snapshot all live on the instance.
    """

    def __init__(
        self,
        store: ContentStore,
        *,
        classifier: Optional[DefaultContentClassifier] = None,
        baseline: Optional[ContentSnapshot] = None,
        save_delay: float = DEFAULT_SAVE_DELAY,
        trust_stored_default: bool = False,
        reset_persists: bool = False,
        listeners: Optional[List[Listener]] = None,
    ) -> None:
        self.store = store
        self.classifier = classifier or DefaultContentClassifier()
        self.baseline = baseline if baseline is not None else default_content()
        self.save_delay = save_delay
        self.trust_stored_default = trust_stored_default
        self.reset_persists = reset_persists

        self._listeners: List[Listener] = list(listeners or [])
        self._timer: Optional[asyncio.TimerHandle] = None
        self._pending: Optional[ContentSnapshot] = None
        self._writes: Set[asyncio.Task] = set()
        self._write_lock = asyncio.Lock()
        self._writing = 0
        # Bumped on every accepted save or reset; debounced writes from an
        # older generation are dropped
        self._generation = 0
        self._pending_generation = 0
        self._current: Optional[ContentSnapshot] = None

    @classmethod
    def from_config(cls, store: ContentStore, config, **kwargs) -> "ContentReconciler":
        kwargs.setdefault("classifier", DefaultContentClassifier.from_config(config))
        kwargs.setdefault("save_delay", float(config.get("CONTENT_SAVE_DELAY", DEFAULT_SAVE_DELAY)))
        kwargs.setdefault("trust_stored_default", bool(config.get("TRUST_STORED_DEFAULT", False)))
        kwargs.setdefault("reset_persists", bool(config.get("RESET_PERSISTS", False)))
        return cls(store, **kwargs)

    # -------------------------------------------------
    # State
    # -------------------------------------------------
    @property
    def state(self) -> SaveState:
        if self._timer is not None:
            return SaveState.PENDING
        if self._writing:
            return SaveState.WRITING
        return SaveState.IDLE

    @property
    def current(self) -> ContentSnapshot:
        """Last snapshot loaded or accepted for saving (baseline before that)."""
        if self._current is None:
            return self.load_display()
        return self._current

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # -------------------------------------------------
    # Loading
    # -------------------------------------------------
    def normalize_order(self, snapshot: ContentSnapshot) -> ContentSnapshot:
        return normalize_order(snapshot)

    def load_display(self) -> ContentSnapshot:
        """Baseline for the first paint, before the store answers."""
        return normalize_order(self.baseline)

    async def load(self) -> ContentSnapshot:
        """
        Fetch the stored content.

        Falls back to the baseline (display only, nothing is written)
        when the store is empty, unreachable, or hands back content that
        looks like the baseline.
        """
        try:
            stored = await self._load_trusted()
        except Exception:
            logger.exception("Content store load failed, showing baseline")
            stored = None

        if stored is None:
            content = self.load_display()
        else:
            content = normalize_order(stored)

        self._current = content
        return content

    async def force_sync(self) -> bool:
        """Whether the store currently holds usable content."""
        try:
            return await self._load_trusted() is not None
        except Exception:
            logger.exception("Content store sync check failed")
            return False

    async def _load_trusted(self) -> Optional[ContentSnapshot]:
        stored = await self.store.load()
        if stored is None:
            logger.info("Store holds no content, using baseline")
            return None

        if not self.trust_stored_default and self.classifier.is_default(stored):
            # A default record in the store means user content was lost;
            # don't treat it as the real thing
            logger.warning("Store returned default content, refusing it")
            return None

        return stored

    # -------------------------------------------------
    # Saving
    # -------------------------------------------------
    async def save(self, snapshot: ContentSnapshot, immediate: bool = False) -> SaveStatus:
        """
        Persist an edited snapshot.

        Empty or default content is dropped without touching the store.
        ``immediate`` writes now (superseding any pending write);
        otherwise the write is debounced and only the latest snapshot
        submitted before the timer fires is stored.
        """
        if snapshot.is_empty:
            logger.warning("Refusing to save empty content")
            return SaveStatus.SKIPPED_EMPTY

        if self.classifier.is_default(snapshot):
            logger.warning("Refusing to save default content")
            return SaveStatus.SKIPPED_DEFAULT

        self._current = snapshot
        self._generation += 1

        if immediate:
            self.cancel_pending()
            return await self._write(snapshot)

        self._arm(snapshot)
        return SaveStatus.SCHEDULED

    def cancel_pending(self) -> bool:
        if self._timer is None:
            return False

        self._timer.cancel()
        self._timer = None
        self._pending = None
        return True

    async def flush(self) -> Optional[SaveStatus]:
        """Write the pending snapshot now and wait for in-flight writes."""
        snapshot = self._pending
        generation = self._pending_generation
        self.cancel_pending()

        status = None
        if snapshot is not None:
            status = await self._write(snapshot, generation=generation)

        if self._writes:
            await asyncio.gather(*self._writes, return_exceptions=True)

        return status

    def _arm(self, snapshot: ContentSnapshot) -> None:
        loop = asyncio.get_running_loop()

        if self._timer is not None:
            self._timer.cancel()

        self._pending = snapshot
        self._pending_generation = self._generation
        self._timer = loop.call_later(self.save_delay, self._on_timer)
        logger.debug("Save scheduled in %.2fs", self.save_delay)

    def _on_timer(self) -> None:
        snapshot = self._pending
        self._timer = None
        self._pending = None

        if snapshot is None:
            return

        task = asyncio.get_running_loop().create_task(
            self._write(snapshot, generation=self._pending_generation)
        )
        self._writes.add(task)
        task.add_done_callback(self._writes.discard)

    async def _write(
        self,
        snapshot: ContentSnapshot,
        *,
        reason: str = "save",
        generation: Optional[int] = None,
    ) -> SaveStatus:
        async with self._write_lock:
            if generation is not None and generation < self._generation:
                logger.info("Debounced content %s superseded by a newer one", reason)
                return SaveStatus.SUPERSEDED

            self._writing += 1
            error: Optional[str] = None
            try:
                success = await self.store.save(snapshot)
                if not success:
                    error = "Content store rejected the write"
            except Exception as exc:
                logger.exception("Content %s failed", reason)
                success = False
                error = str(exc) or exc.__class__.__name__
            finally:
                self._writing -= 1

        if success:
            logger.info("Content %s stored", reason)
        else:
            logger.error("Content %s not stored: %s", reason, error)

        self._emit(ContentSavedEvent(success=success, error=error))
        return SaveStatus.SAVED if success else SaveStatus.FAILED

    def _emit(self, event: ContentSavedEvent) -> None:
        loop = asyncio.get_running_loop()
        for listener in list(self._listeners):
            loop.call_soon(listener, event)

    # -------------------------------------------------
    # Reset / interchange
    # -------------------------------------------------
    async def reset(self) -> ContentSnapshot:
        """
        Back to the baseline.

        Display only unless ``reset_persists`` is set, in which case the
        baseline deliberately overwrites the stored record.
        """
        content = self.load_display()
        self.cancel_pending()
        self._current = content
        self._generation += 1

        if self.reset_persists:
            logger.warning("Reset overwrites stored content with the baseline")
            await self._write(content, reason="reset")

        return content

    def export_content(self, snapshot: Optional[ContentSnapshot] = None) -> str:
        content = snapshot if snapshot is not None else self.current
        return json.dumps(normalize_content(content), indent=2, ensure_ascii=False)

    def import_content(self, text: str) -> ContentSnapshot:
        try:
            data = json.loads(text)
        except (TypeError, ValueError, RecursionError) as exc:
            logger.error("Error importing content: %s", exc)
            raise InvalidContentFormat("Invalid JSON format") from exc

        return parse_content(data)
