"""Per-application outcome ledger for batch commands."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import TextIO

from lingo_orchestrator.errors import BuildError
from lingo_orchestrator.package import App


@dataclass(frozen=True)
class Outcome:
    """Result of one operation on one application.

    ``error`` is ``None`` on success and carries the failure message otherwise.
    """

    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls) -> Outcome:
        return cls()

    @classmethod
    def failure(cls, message: str) -> Outcome:
        return cls(error=message)

    @classmethod
    def coerce(cls, value: OutcomeLike) -> Outcome:
        """Convert a transform return value into an ``Outcome``.

        Parameters
        ----------
        value : Outcome | bool | BaseException | None
            ``None`` and ``True`` mean success, ``False`` a generic failure and
            an exception instance a failure carrying its message.

        Returns
        -------
        Outcome
            Normalized outcome.

        Raises
        ------
        TypeError
            If ``value`` has no outcome interpretation.
        """
        if isinstance(value, Outcome):
            return value
        if value is None or value is True:
            return cls.success()
        if value is False:
            return cls.failure("operation failed")
        if isinstance(value, BaseException):
            return cls.failure(str(value) or type(value).__name__)
        raise TypeError(f"Cannot convert {type(value).__name__} to an Outcome.")

    def __str__(self) -> str:
        return "Success" if self.ok else f"Error: {self.error}"


type OutcomeLike = Outcome | bool | BaseException | None
type AppTransform = Callable[[App], OutcomeLike]


def _apply(transform: AppTransform, app: App) -> Outcome:
    try:
        return Outcome.coerce(transform(app))
    except BuildError as exc:
        return Outcome.failure(str(exc) or type(exc).__name__)


class BatchBuildResults:
    """Collects outcomes by app.

    Stages are chained with :meth:`map` or :meth:`par_map`. An app whose
    outcome is already a failure is never passed to a later stage, so the
    first failure recorded for an app is the one reported.
    """

    def __init__(self, results: Iterable[tuple[App, Outcome]] = ()) -> None:
        self._results: list[tuple[App, Outcome]] = list(results)

    @classmethod
    def for_apps(cls, apps: Iterable[App]) -> BatchBuildResults:
        """Create a ledger with a success placeholder for every app."""
        return cls((app, Outcome.success()) for app in apps)

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[tuple[App, Outcome]]:
        return iter(list(self._results))

    @property
    def entries(self) -> tuple[tuple[App, Outcome], ...]:
        return tuple(self._results)

    @property
    def all_ok(self) -> bool:
        return all(outcome.ok for _, outcome in self._results)

    def outcome_for(self, name: str) -> Outcome:
        """Return the outcome recorded for the app called ``name``."""
        for app, outcome in self._results:
            if app.name == name:
                return outcome
        raise KeyError(name)

    def succeeded(self) -> list[App]:
        return [app for app, outcome in self._results if outcome.ok]

    def failed(self) -> list[App]:
        return [app for app, outcome in self._results if not outcome.ok]

    def record_result(self, app: App, result: OutcomeLike) -> None:
        self._results.append((app, Outcome.coerce(result)))

    def append(self, other: BatchBuildResults) -> None:
        """Absorb ``other`` into this ledger and re-sort by app name.

        Apps are not deduplicated, so this is only valid when ``other`` is
        disjoint from this ledger.
        """
        self._results.extend(other._results)
        self._results.sort(key=lambda entry: entry[0].name)

    def map(self, transform: AppTransform) -> BatchBuildResults:
        """Map results sequentially.

        Apps that already have a failing result recorded are not fed to
        ``transform``. A ``BuildError`` raised by ``transform`` is recorded as
        that app's failure.
        """
        for index, (app, outcome) in enumerate(self._results):
            if outcome.ok:
                self._results[index] = (app, _apply(transform, app))
        return self

    def par_map(
        self,
        transform: AppTransform,
        max_workers: int | None = None,
    ) -> BatchBuildResults:
        """Map results in parallel on a thread pool.

        Same contract as :meth:`map`. ``transform`` receives only its own app
        and must not share mutable state across apps. Each outcome is written
        back by the calling thread into the slot of the app that produced it.
        """
        pending = [index for index, (_, outcome) in enumerate(self._results) if outcome.ok]
        if not pending:
            return self
        apps = [self._results[index][0] for index in pending]
        with ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="lingo-app"
        ) as executor:
            outcomes = list(executor.map(partial(_apply, transform), apps))
        for index, app, outcome in zip(pending, apps, outcomes, strict=True):
            self._results[index] = (app, outcome)
        return self

    def format_results(self) -> str:
        """Render one ``- <name>: <outcome>`` line per entry."""
        return "\n".join(f"- {app.name}: {outcome}" for app, outcome in self._results)

    def print_results(self, stream: TextIO | None = None) -> None:
        out = stream or sys.stdout
        for app, outcome in self._results:
            out.write(f"- {app.name}: {outcome}\n")
