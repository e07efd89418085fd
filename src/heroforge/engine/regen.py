"""Vitals and stamina regeneration over wall-clock time.

Regeneration is credited in whole minutes, only once at least one minute
has passed since ``stamina.last_recovery``, and at most
``catch_up_cap_minutes`` per call. After crediting, ``last_recovery`` is
reset to ``now``; the leftover partial minute is discarded.
"""

from __future__ import annotations

import math
from datetime import datetime

from heroforge.core.config import Settings, get_settings
from heroforge.core.constants import SECONDS_PER_MINUTE
from heroforge.core.logging import get_logger
from heroforge.engine.scaling import compute_effective_stamina_cost
from heroforge.models.hero import HeroSnapshot, ensure_utc


logger = get_logger(__name__)


class RegenerationTicker:
    """Advance HP, MP and stamina toward their caps.

    Example:
        >>> ticker = RegenerationTicker()
        >>> ticker.tick(hero, datetime.now(UTC))
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def rest_multiplier(self, hero: HeroSnapshot, now: datetime) -> float:
        """Regen multiplier of the hero's rest buff, or 1.0 without one."""
        buff = hero.rest_buff
        if buff is None or not buff.is_active(now):
            return 1.0
        if buff.multiplier is not None:
            return max(1.0, buff.multiplier)
        return self.settings.regen.rest_multiplier

    def scale_amount(self, hero: HeroSnapshot, rate: int, minutes: int, now: datetime) -> int:
        """Regen for ``minutes`` at ``rate`` per minute after context scaling.

        A rest buff multiplies the amount; being in a dungeon divides it,
        floored at 1 when any regen is due at all.
        """
        if rate <= 0:
            return 0
        amount = math.floor(max(rate, minutes * rate) * self.rest_multiplier(hero, now))
        if hero.in_dungeon:
            amount = max(1, amount // self.settings.regen.dungeon_divisor)
        return amount

    def tick(self, hero: HeroSnapshot, now: datetime) -> None:
        """Catch up regeneration to ``now``, mutating the hero in place.

        Repeated calls with the same ``now`` are no-ops. A hero that was
        never ticked only gets its timestamp initialized.

        Args:
            hero: Hero snapshot to update.
            now: Current wall-clock time. Naive values are taken as UTC.
        """
        now = ensure_utc(now)
        stamina = hero.stamina
        regen = self.settings.regen

        if hero.rest_buff is not None and not hero.rest_buff.is_active(now):
            hero.rest_buff = None

        if stamina.last_recovery is None:
            stamina.last_recovery = now
            hero.clamp_vitals()
            return

        elapsed = (now - ensure_utc(stamina.last_recovery)).total_seconds()
        if elapsed < SECONDS_PER_MINUTE:
            hero.clamp_vitals()
            return

        minutes = min(math.floor(elapsed / SECONDS_PER_MINUTE), regen.catch_up_cap_minutes)

        stamina_gain = self.scale_amount(hero, stamina.recovery_rate, minutes, now)
        hp_gain = self.scale_amount(hero, regen.hp_per_minute, minutes, now)
        mp_gain = self.scale_amount(hero, regen.mp_per_minute, minutes, now)

        stamina.current += stamina_gain
        hero.derived.current_hp += hp_gain
        hero.derived.current_mp += mp_gain
        stamina.last_recovery = now
        hero.clamp_vitals()

        logger.debug(
            "Regeneration credited",
            hero_id=hero.id,
            minutes=minutes,
            stamina=stamina_gain,
            hp=hp_gain,
            mp=mp_gain,
        )

    def can_afford(self, hero: HeroSnapshot, cost: int, now: datetime) -> bool:
        """Tick, then check whether the hero can pay an action's stamina cost."""
        self.tick(hero, now)
        effective = compute_effective_stamina_cost(hero, cost, now, self.settings.reward)
        return hero.stamina.current >= effective

    def consume_stamina(self, hero: HeroSnapshot, cost: int, now: datetime) -> bool:
        """Tick, then deduct an action's stamina cost if affordable.

        Returns:
            True if the stamina was deducted; False leaves the pool unchanged.
        """
        if not self.can_afford(hero, cost, now):
            return False
        hero.stamina.current -= compute_effective_stamina_cost(hero, cost, now, self.settings.reward)
        hero.clamp_vitals()
        return True


__all__ = [
    "RegenerationTicker",
]
