import logging
import threading
from concurrent import futures
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .errors import (
    EntropyUnavailable,
    NameSpaceExhausted,
    NomenclatorError,
    SourceTimeout,
    SourceUnavailable,
    StoreIOError,
)
from .key_generator import KeyGenerator
from .models import Pair
from .name_generator import UniqueNameAllocator
from .name_source import RemoteNameSource
from .pair_store import PairStore
from .pairs import PairCollection
from .state_machine import RunStateMachine, RunPhase, TransitionError

logger = logging.getLogger(__name__)


class RunOutcome(str, Enum):
    COMPLETED = "completed"
    STOPPED = "stopped"
    ABORTED = "aborted"


@dataclass
class RunState:
    requested: int
    completed: int = 0
    in_flight: int = 0


@dataclass
class RunResult:
    outcome: RunOutcome
    requested: int
    completed: int
    error: Optional[NomenclatorError] = None

    @property
    def exit_code(self) -> int:
        return 1 if self.outcome == RunOutcome.ABORTED else 0


def print_progress(completed: int, requested: int):
    print(f"Processed: {completed} / {requested}", end='\r', flush=True)


class Orchestrator:
    """
    Drives one run: acquire a name, generate a key, persist the pair, repeat
    until `count` pairs are stored or a stop is requested.

    Exactly one name provider is used:
    - `allocator` (UniqueNameAllocator): names unique within the run
    - `name_source` (RemoteNameSource): names as the remote service hands
      them out, duplicates included

    Failure policy:
    - NameSpaceExhausted aborts the run
    - key, store and name-source failures are logged and the pairing is
      retried on the next pass with a fresh name
    """

    def __init__(
        self,
        count: int,
        store: PairStore,
        key_generator: KeyGenerator = None,
        allocator: UniqueNameAllocator = None,
        name_source: RemoteNameSource = None,
        pairs: PairCollection = None,
        name_timeout: float = None,
        progress: Callable[[int, int], None] = print_progress,
        stop_event: threading.Event = None
    ):
        if count < 0:
            raise ValueError("count must not be negative")
        if (allocator is None) == (name_source is None):
            raise ValueError("exactly one of allocator or name_source is required")

        self.store = store
        self.key_generator = key_generator or KeyGenerator()
        self.allocator = allocator
        self.name_source = name_source
        self.pairs = pairs
        self.name_timeout = name_timeout if name_timeout is not None else getattr(name_source, 'timeout', None)
        self.progress = progress
        self.state = RunState(requested=count)
        self.machine = RunStateMachine()
        self._stop = stop_event or threading.Event()
        self._executor = None
        self._outcome = None
        self._error = None

    @property
    def phase(self) -> RunPhase:
        return self.machine.state

    def stop(self):
        """Ask the run to stop before its next pairing."""
        self._stop.set()

    def run(self) -> RunResult:
        if not self.machine.is_running:
            raise TransitionError(
                self.phase.value,
                RunPhase.RUNNING.value,
                "An orchestrator drives a single run"
            )

        logger.info("Generating names and keys...")
        self._warn_if_oversubscribed()

        if self.name_source is not None:
            self._executor = self._new_executor()

        try:
            while self.state.completed < self.state.requested:
                if self._stop.is_set():
                    logger.info("Shutting down")
                    self._outcome = RunOutcome.STOPPED
                    self.machine.transition('stop')
                    break

                try:
                    self._run_once()
                except NameSpaceExhausted as e:
                    logger.error(f"Generation stopped: {e}")
                    print(f"\nError: {e}")
                    self._outcome = RunOutcome.ABORTED
                    self._error = e
                    self.machine.transition('abort')
                    break
                except (SourceUnavailable, EntropyUnavailable, StoreIOError) as e:
                    logger.error(f"Error processing pair: {e}")
                    continue

                self.machine.transition('advance')
                if self.progress:
                    self.progress(self.state.completed, self.state.requested)
            else:
                self._outcome = RunOutcome.COMPLETED
                self.machine.transition('complete')
        finally:
            if self._executor is not None:
                self._executor.shutdown(wait=False, cancel_futures=True)
                self._executor = None

        return self._shutdown()

    def pair_and_save(self, name: str) -> Pair:
        """Generate a key for `name`, persist it, and record it for export."""
        key = self.key_generator.generate()
        self.store.persist(name, key)
        pair = Pair(name=name, key=key)
        if self.pairs is not None:
            self.pairs.add(pair)
        return pair

    def close(self):
        self.store.close()
        if self.name_source is not None:
            self.name_source.close()

    def _run_once(self):
        self.state.in_flight = 1
        try:
            name = self._acquire_name()
            logger.info(f"Generated name: {name}")
            self.pair_and_save(name)
        finally:
            self.state.in_flight = 0
        self.state.completed += 1

    def _acquire_name(self) -> str:
        if self.allocator is not None:
            return self.allocator.allocate_unique()

        future = self._executor.submit(self.name_source.request_name)
        try:
            return future.result(timeout=self.name_timeout)
        except futures.TimeoutError as e:
            # The stuck request keeps the old worker; later requests get a fresh one.
            # Worker threads are not daemons: interpreter exit still waits for the
            # abandoned request, bounded by the HTTP timeout on RemoteNameSource.
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = self._new_executor()
            raise SourceTimeout(self.name_source.url, self.name_timeout) from e

    def _new_executor(self) -> futures.ThreadPoolExecutor:
        return futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix='name-source')

    def _warn_if_oversubscribed(self):
        if self.allocator is None:
            return
        total = self.allocator.namespace_size
        if self.state.requested > total:
            message = f"Requested {self.state.requested} keys but only {total} unique name combinations are possible."
            logger.warning(message)
            print(f"Warning: {message}")

    def _shutdown(self) -> RunResult:
        self.machine.transition('shutdown')
        print()
        logger.info(
            f"Run {self._outcome.value}: {self.state.completed} / {self.state.requested} pairs persisted"
        )
        return RunResult(
            outcome=self._outcome,
            requested=self.state.requested,
            completed=self.state.completed,
            error=self._error
        )
