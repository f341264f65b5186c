"""Two-phase update protocol: live preview first, static commit later.

An edit is previewed right away by swapping the edited literals for
placeholder expressions that read variables, and evaluating the variable
assignments together with that code. After a quiet period the edits are
written into the editor as plain literals in one atomic buffer operation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from errors import ChainEditError
from live.interfaces import EditorBuffer, Evaluator, Scheduler, TimerHandle
from live.ranges import EvalRange, end_position
from locate.locator import locate
from locate.params import ParameterRegistry
from models.references import ReferenceNames
from models.values import EditableValue
from parse.nodes import Program
from parse.treesitter_js import parse_program
from rewrite.rewriter import Substitution, format_replacement, rewrite
from rules.config import ChainEditConfig

logger = logging.getLogger(__name__)


class UpdateState(str, Enum):
    IDLE = "idle"
    LIVE_BOUND = "live_bound"
    COMMITTING = "committing"


class UpdateOrchestrator:
    """Sequences live previews and debounced commits for one snippet."""

    def __init__(
        self,
        evaluator: Evaluator,
        buffer: EditorBuffer,
        scheduler: Scheduler,
        *,
        config: ChainEditConfig | None = None,
        names: ReferenceNames | None = None,
        registry: ParameterRegistry | None = None,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        self._evaluator = evaluator
        self._buffer = buffer
        self._scheduler = scheduler
        self._config = config or ChainEditConfig()
        self._names = names or self._config.reference_names()
        self._registry = (
            registry if registry is not None else self._config.registry()
        )
        self._on_error = on_error

        self.state = UpdateState.IDLE
        self._text: str | None = None
        self._range: EvalRange | None = None
        self._program: Program | None = None
        self._values: list[EditableValue] = []
        self._edits: dict[int, Substitution] = {}
        self._live: set[int] = set()
        self._commit_handle: TimerHandle | None = None
        self._updating = False

    @property
    def is_updating(self) -> bool:
        """True while the orchestrator itself is writing to the buffer."""
        return self._updating

    @property
    def text(self) -> str | None:
        return self._text

    @property
    def eval_range(self) -> EvalRange | None:
        return self._range

    @property
    def values(self) -> list[EditableValue]:
        return list(self._values)

    @property
    def has_pending_commit(self) -> bool:
        return self._commit_handle is not None

    def parameters(self) -> list[EditableValue]:
        """Discovered values with pending edits applied."""
        return [
            value.model_copy(update={"value": self._edits[value.ordinal]})
            if value.ordinal in self._edits
            else value
            for value in self._values
        ]

    def begin_session(self, text: str, eval_range: EvalRange) -> list[EditableValue]:
        """Track a freshly evaluated snippet and discover its values."""
        self._cancel_commit()
        self._text = text
        self._range = eval_range
        self._reset_edits()
        self._rediscover()
        return self.values

    def on_buffer_change(self, from_line: int, to_line: int) -> None:
        """Editor change hook; user edits inside the snippet restart discovery."""
        if self._updating:
            return
        if self._range is None or not self._range.contains_lines(from_line, to_line):
            return

        self._cancel_commit()
        self._reset_edits()
        self._text = self._buffer.get_range(self._range.start, self._range.end)
        self._rediscover()

    def update_value_by_key(self, key: str, value: Substitution) -> bool:
        for item in self._values:
            if item.key == key:
                return self.update_value(item.ordinal, value)
        logger.info("Parameter not found for key: %s", key)
        return False

    def update_value(self, ordinal: int, value: Substitution) -> bool:
        """Preview a new value now and schedule its commit."""
        target = self._value_at(ordinal)
        if target is None or self._text is None:
            logger.info("No editable value with ordinal %d", ordinal)
            return False

        self._edits[ordinal] = value
        was_live = ordinal in self._live
        if target.is_number and not isinstance(value, str):
            self._live.add(ordinal)
        else:
            self._live.discard(ordinal)

        if not self._live:
            self._evaluate_static(self.static_code())
        elif self._evaluate_live(
            assignments_only=was_live and self.state is UpdateState.LIVE_BOUND
        ):
            self.state = UpdateState.LIVE_BOUND
        else:
            self._fall_back_to_static()

        self._schedule_commit()
        return True

    def reset_value(self, ordinal: int) -> bool:
        """Drop the pending edit for `ordinal` and show the remaining ones."""
        if ordinal not in self._edits or self._text is None:
            return False

        del self._edits[ordinal]
        self._live.clear()
        self.state = UpdateState.IDLE
        self._evaluate_static(self.static_code())
        if self._edits:
            self._schedule_commit()
        else:
            self._cancel_commit()
        return True

    def flush(self) -> None:
        """Commit pending edits now instead of waiting for the quiet period."""
        if self._commit_handle is None:
            return
        self._cancel_commit()
        self._commit()

    def static_code(self) -> str:
        """Snippet text with every pending edit written as a literal."""
        return rewrite(
            self._program,
            self._text,
            dict(self._edits),
            self._names,
            directive_keywords=self._config.directive_keywords,
        )

    def live_code(self) -> str:
        """Variable assignments followed by the placeholder-bound snippet.

        Live-bound values read their variable; other pending edits, such as
        reference swaps, are written inline.
        """
        substitutions = dict(self._edits)
        for ordinal in self._live:
            substitutions[ordinal] = self._config.placeholder(self._variable(ordinal))
        code = rewrite(
            self._program,
            self._text,
            substitutions,
            self._names,
            directive_keywords=self._config.directive_keywords,
        )
        if code == self._text:
            msg = "placeholder rewrite left the snippet unchanged"
            raise ChainEditError(msg)
        return f"{self._assignments()};\n{code}"

    def _variable(self, ordinal: int) -> str:
        target = self._value_at(ordinal)
        if target is None:
            msg = f"no editable value with ordinal {ordinal}"
            raise ChainEditError(msg)
        return target.key

    def _assignments(self) -> str:
        return ";\n".join(
            f"{self._variable(ordinal)} = {format_replacement(self._edits[ordinal])}"
            for ordinal in sorted(self._live)
        )

    def _value_at(self, ordinal: int) -> EditableValue | None:
        for item in self._values:
            if item.ordinal == ordinal:
                return item
        return None

    def _rediscover(self) -> None:
        self._program = None
        self._values = []
        if not self._text:
            return
        try:
            self._program = parse_program(self._text)
        except (ChainEditError, ValueError) as exc:
            logger.info("Snippet did not parse, no editable values: %s", exc)
            return
        self._values = locate(
            self._program,
            self._text,
            self._names,
            self._registry,
            directive_keywords=self._config.directive_keywords,
        )
        logger.debug("Found %d values", len(self._values))

    def _reset_edits(self) -> None:
        self._edits.clear()
        self._live.clear()
        self.state = UpdateState.IDLE

    def _evaluate(self, code: str) -> Exception | None:
        try:
            self._evaluator.evaluate(code)
        except Exception as exc:
            return exc
        return None

    def _evaluate_live(self, *, assignments_only: bool) -> bool:
        """Evaluate the live-bound code, or just the assignments when the
        placeholders are already in place."""
        try:
            code = self._assignments() if assignments_only else self.live_code()
        except ChainEditError as exc:
            logger.warning("Could not build live code: %s", exc)
            return False

        error = self._evaluate(code)
        if error is not None:
            logger.warning("Live eval failed: %s", error, exc_info=error)
            return False
        return True

    def _fall_back_to_static(self) -> None:
        self._live.clear()
        self.state = UpdateState.IDLE
        self._evaluate_static(self.static_code())

    def _evaluate_static(self, static_code: str) -> bool:
        error = self._evaluate(static_code)
        if error is None:
            return True
        logger.error("Static eval failed: %s", error, exc_info=error)
        if self._on_error is not None:
            self._on_error(f"Static eval failed: {error}")
        return False

    def _schedule_commit(self) -> None:
        self._cancel_commit()
        self._commit_handle = self._scheduler.call_later(
            self._config.debounce_seconds, self._commit
        )

    def _cancel_commit(self) -> None:
        if self._commit_handle is not None:
            self._commit_handle.cancel()
            self._commit_handle = None

    def _commit(self) -> None:
        self._commit_handle = None
        if not self._edits or self._text is None or self._range is None:
            self._reset_edits()
            return

        self.state = UpdateState.COMMITTING
        was_live = bool(self._live)
        static_code = self.static_code()

        if not static_code or static_code == self._text:
            logger.info("Commit skipped, rewrite produced no new text")
            self._reset_edits()
            if was_live:
                self._scheduler.call_soon(self._evaluate_static, self._text)
            return

        self._updating = True
        try:
            self._buffer.begin()
            try:
                self._buffer.replace_range(
                    static_code, self._range.start, self._range.end
                )
            finally:
                self._buffer.end()
        except Exception as exc:
            logger.exception("Error updating editor")
            self._reset_edits()
            if self._on_error is not None:
                self._on_error(f"Error updating editor: {exc}")
            return
        finally:
            self._updating = False

        self._range = EvalRange(
            self._range.start, end_position(self._range.start, static_code)
        )
        self._text = static_code
        self._reset_edits()
        self._rediscover()
        self._scheduler.call_soon(self._evaluate_static, static_code)


__all__ = ["UpdateOrchestrator", "UpdateState"]
