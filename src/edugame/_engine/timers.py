# Area: Engine
"""
edugame._engine.timers — Epoch-guarded countdown registry
=========================================================

Every countdown in a session (global game timer, question timer,
matching timer, challenge timer, life-loss grace) is a named
``Countdown`` driven by ``TimerRegistry.tick()``, called once per
elapsed second.

The registry keeps two generation counters. A countdown captures both
when armed; once the epoch of its scope moves on, the countdown is
stale and ticking it is a no-op:

    phase scope    survives section changes, dies when playing ends
    section scope  dies on the next section change as well

``guard()`` applies the same rule to arbitrary callbacks, so a handler
replaced by a section change can no longer reach the session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger("edugame.timers")

PHASE_SCOPE = "phase"
SECTION_SCOPE = "section"


@dataclass
class Countdown:
    """One armed countdown."""
    name: str
    remaining: int
    scope: str
    phase_epoch: int
    section_epoch: int
    on_expire: Callable[[], Any]
    on_tick: Optional[Callable[[int], Any]] = None


class TimerRegistry:
    """
    Named countdowns for one session.

    Re-arming a name replaces the previous countdown.
    """

    def __init__(self) -> None:
        self.phase_epoch = 0
        self.section_epoch = 0
        self._timers: Dict[str, Countdown] = {}

    # ── arming ──────────────────────────────────────────────

    def arm(
        self,
        name: str,
        seconds: int,
        on_expire: Callable[[], Any],
        scope: str = SECTION_SCOPE,
        on_tick: Optional[Callable[[int], Any]] = None,
    ) -> Countdown:
        if seconds <= 0:
            raise ValueError(f"Countdown '{name}' needs a positive duration, got {seconds}")
        if scope not in (PHASE_SCOPE, SECTION_SCOPE):
            raise ValueError(f"Unknown timer scope: {scope}")
        countdown = Countdown(
            name=name,
            remaining=int(seconds),
            scope=scope,
            phase_epoch=self.phase_epoch,
            section_epoch=self.section_epoch,
            on_expire=on_expire,
            on_tick=on_tick,
        )
        self._timers[name] = countdown
        logger.debug(f"Timer armed: {name} ({seconds}s, {scope})")
        return countdown

    def cancel(self, name: str) -> None:
        """Cancel a countdown. No-op if not found."""
        if self._timers.pop(name, None) is not None:
            logger.debug(f"Timer cancelled: {name}")

    def remaining(self, name: str) -> Optional[int]:
        countdown = self._timers.get(name)
        if countdown is None or not self.is_current(countdown):
            return None
        return countdown.remaining

    def is_armed(self, name: str) -> bool:
        return self.remaining(name) is not None

    # ── epochs ──────────────────────────────────────────────

    def is_current(self, countdown: Countdown) -> bool:
        if countdown.phase_epoch != self.phase_epoch:
            return False
        if countdown.scope == SECTION_SCOPE:
            return countdown.section_epoch == self.section_epoch
        return True

    def invalidate_section(self) -> None:
        """Start a new section epoch; section countdowns become stale."""
        self.section_epoch += 1
        self._timers = {
            name: c for name, c in self._timers.items() if c.scope != SECTION_SCOPE
        }

    def invalidate_all(self) -> None:
        """Start new phase and section epochs; every countdown becomes stale."""
        self.phase_epoch += 1
        self.section_epoch += 1
        self._timers.clear()

    def guard(self, callback: Callable[..., Any], scope: str = SECTION_SCOPE) -> Callable[..., Any]:
        """
        Wrap ``callback`` so it only runs while the current epochs hold.

        Late calls are logged and return None.
        """
        phase_epoch = self.phase_epoch
        section_epoch = self.section_epoch

        def guarded(*args: Any, **kwargs: Any) -> Any:
            stale = phase_epoch != self.phase_epoch or (
                scope == SECTION_SCOPE and section_epoch != self.section_epoch
            )
            if stale:
                logger.warning(
                    f"Ignoring stale callback {getattr(callback, '__name__', callback)}"
                )
                return None
            return callback(*args, **kwargs)

        return guarded

    # ── driving ─────────────────────────────────────────────

    def tick(self) -> List[str]:
        """
        Advance every current countdown by one second.

        Returns the names of countdowns that expired on this tick.
        """
        expired: List[str] = []
        for countdown in list(self._timers.values()):
            # An earlier expiry in this pass may have moved the epochs
            if not self.is_current(countdown) or self._timers.get(countdown.name) is not countdown:
                continue
            countdown.remaining -= 1
            if countdown.on_tick is not None:
                countdown.on_tick(countdown.remaining)
            if countdown.remaining <= 0:
                self._timers.pop(countdown.name, None)
                expired.append(countdown.name)
                logger.debug(f"Timer expired: {countdown.name}")
                countdown.on_expire()
        return expired

    def clear(self) -> None:
        self._timers.clear()
