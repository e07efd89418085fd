"""Configuration management for the HeroForge engine.

Every numeric base rate the engine uses (hit chance, crit chance, regen per
minute, streak step, ...) lives here as a pydantic-settings field so it can be
tuned through environment variables or passed explicitly in tests.

Example:
    >>> from heroforge.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.combat.max_turns
    50

Environment Variables:
    HEROFORGE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    HEROFORGE_COMBAT_MAX_TURNS: Hard turn cap for one combat resolution
    HEROFORGE_REGEN_CATCH_UP_CAP_MINUTES: Maximum minutes credited per tick
    HEROFORGE_DECISION_LUCK_BLESSING_CHANCE: Ambient blessing probability
    HEROFORGE_REWARD_STREAK_STEP: Reward multiplier added per streak step
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from heroforge.core.exceptions import ConfigurationError


class CombatSettings(BaseSettings):
    """Tuning constants for the combat resolver.

    Attributes:
        max_turns: Hard cap on turns; reaching it counts as a loss.
        base_hit_chance: Hit chance in percent before modifiers.
        hit_per_agility: Percent of hit chance per point of agility difference.
        min_hit_chance: Lower clamp for the final hit chance.
        max_hit_chance: Upper clamp for the final hit chance.
        base_crit_chance: Crit chance in percent before modifiers.
        crit_per_agility: Percent of crit chance per attacker agility point.
        crit_multiplier: Damage multiplier applied on a critical hit.
        lawful_hit_bonus: Hit chance bonus for lawful alignments.
        chaotic_crit_bonus: Crit chance bonus for chaotic alignments.
        evil_life_drain_percent: Percent of damage dealt healed by evil heroes.
        good_vs_dark_bonus_percent: Extra damage good heroes deal to dark foes.
        level_scaling: Enemy stat growth per level above 1.
        enemy_hp_per_floor: Enemy HP growth per dungeon floor.
        enemy_atk_per_floor: Enemy attack growth per dungeon floor.
        enemy_def_per_floor: Enemy defense growth per dungeon floor.
        boss_multiplier: Stat multiplier on boss floors.
        miniboss_multiplier: Stat multiplier on mini-boss floors.
        xp_per_floor: Flat XP bonus per floor depth for each defeated enemy.
        gold_per_floor: Flat gold bonus per floor depth for each defeated enemy.
        rarity_per_floor: Percent added to loot drop rates per floor.
        rarity_floor_step: Floors per step of the minimum loot rarity.
        pet_skill_cost: Energy consumed by a pet's exclusive skill.
    """

    model_config = SettingsConfigDict(
        env_prefix="HEROFORGE_COMBAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_turns: int = Field(default=50, ge=1, le=1000, description="Turn cap")
    base_hit_chance: float = Field(default=70, ge=0, le=100, description="Base hit %")
    hit_per_agility: float = Field(default=2, ge=0, description="Hit % per agility diff")
    min_hit_chance: float = Field(default=5, ge=0, le=100, description="Hit % floor")
    max_hit_chance: float = Field(default=95, ge=0, le=100, description="Hit % ceiling")
    base_crit_chance: float = Field(default=5, ge=0, le=100, description="Base crit %")
    crit_per_agility: float = Field(default=0.5, ge=0, description="Crit % per agility")
    crit_multiplier: float = Field(default=1.5, ge=1, description="Crit damage multiplier")
    lawful_hit_bonus: float = Field(default=5, ge=0, description="Lawful hit bonus %")
    chaotic_crit_bonus: float = Field(default=5, ge=0, description="Chaotic crit bonus %")
    evil_life_drain_percent: float = Field(default=10, ge=0, le=100, description="Evil drain %")
    good_vs_dark_bonus_percent: float = Field(
        default=15,
        ge=0,
        description="Good-aligned damage bonus against dark defenders",
    )
    level_scaling: float = Field(default=0.3, ge=0, description="Enemy growth per level")
    enemy_hp_per_floor: float = Field(default=0.12, ge=0)
    enemy_atk_per_floor: float = Field(default=0.10, ge=0)
    enemy_def_per_floor: float = Field(default=0.08, ge=0)
    boss_multiplier: float = Field(default=1.8, ge=1)
    miniboss_multiplier: float = Field(default=1.35, ge=1)
    xp_per_floor: int = Field(default=6, ge=0)
    gold_per_floor: int = Field(default=2, ge=0)
    rarity_per_floor: float = Field(default=0.6, ge=0, description="Drop rate % per floor")
    rarity_floor_step: int = Field(default=10, ge=1, description="Floors per minimum rarity tier")
    pet_skill_cost: int = Field(default=25, ge=1, le=100, description="Pet skill energy cost")

    @model_validator(mode="after")
    def validate_hit_bounds(self) -> "CombatSettings":
        """Ensure the hit chance clamp is not inverted.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If min_hit_chance > max_hit_chance.
        """
        if self.min_hit_chance > self.max_hit_chance:
            raise ConfigurationError(
                f"min_hit_chance ({self.min_hit_chance}) must not exceed "
                f"max_hit_chance ({self.max_hit_chance})",
                config_key="min_hit_chance",
            )
        return self


class RegenSettings(BaseSettings):
    """Tuning constants for the vitals/stamina regeneration ticker.

    Attributes:
        hp_per_minute: HP regenerated per elapsed minute.
        mp_per_minute: MP regenerated per elapsed minute.
        catch_up_cap_minutes: Maximum whole minutes credited by one tick.
        rest_multiplier: Regen multiplier while a rest buff is active.
        dungeon_divisor: Regen divisor while the hero is inside a dungeon.
    """

    model_config = SettingsConfigDict(
        env_prefix="HEROFORGE_REGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    hp_per_minute: int = Field(default=2, ge=0)
    mp_per_minute: int = Field(default=1, ge=0)
    catch_up_cap_minutes: int = Field(default=5, description="Catch-up cap in minutes")
    rest_multiplier: float = Field(default=2.0, ge=1)
    dungeon_divisor: int = Field(default=2, ge=1)

    @model_validator(mode="after")
    def validate_catch_up_cap(self) -> "RegenSettings":
        """Ensure at least one minute can be credited per tick.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If catch_up_cap_minutes < 1.
        """
        if self.catch_up_cap_minutes < 1:
            raise ConfigurationError(
                "catch_up_cap_minutes must be at least 1",
                config_key="catch_up_cap_minutes",
            )
        return self


class DecisionSettings(BaseSettings):
    """Tuning constants for the decision-effect processor.

    Attributes:
        default_attribute_multiplier: Attribute multiplier when none is given.
        default_risk_threshold: Threshold used when a choice omits one.
        max_reputation_targets: Distinct factions one choice may touch.
        luck_blessing_chance: Probability of the ambient blessing event.
    """

    model_config = SettingsConfigDict(
        env_prefix="HEROFORGE_DECISION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_attribute_multiplier: float = Field(default=2, ge=0)
    default_risk_threshold: int = Field(default=50, ge=0)
    max_reputation_targets: int = Field(default=2, ge=0)
    luck_blessing_chance: float = Field(default=0.15, ge=0, le=1)


class RewardSettings(BaseSettings):
    """Tuning constants for reward scaling and mount stamina discounts.

    Attributes:
        streak_step: Reward multiplier added per streak step.
        mount_reduction_cap: Upper clamp for the mount stamina discount.
        speed_reduction_per_point: Discount per point of mount speed bonus.
        refine_reduction_per_level: Discount per mount refine level.
        mastery_reduction_per_tier: Discount per mastery tier (10 mastery).
        death_penalty_gold: Share of gold lost on a dungeon death.
        death_penalty_xp: Share of XP lost on a dungeon death.
    """

    model_config = SettingsConfigDict(
        env_prefix="HEROFORGE_REWARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    streak_step: float = Field(default=0.07, ge=0)
    mount_reduction_cap: float = Field(default=0.4, ge=0, le=1)
    speed_reduction_per_point: float = Field(default=0.01, ge=0)
    refine_reduction_per_level: float = Field(default=0.005, ge=0)
    mastery_reduction_per_tier: float = Field(default=0.01, ge=0)
    death_penalty_gold: float = Field(default=0.5, ge=0, le=1)
    death_penalty_xp: float = Field(default=0.3, ge=0, le=1)


class Settings(BaseSettings):
    """Main engine settings aggregating all configuration sections.

    Attributes:
        app_name: Application name.
        debug: Enable debug mode.
        log_level: Logging level.
        json_logs: Render logs as JSON instead of console output.
        combat: Combat resolver settings.
        regen: Regeneration ticker settings.
        decision: Decision processor settings.
        reward: Reward scaling settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="HEROFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="HeroForge Engine", description="Application name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(default=False, description="Render logs as JSON")

    combat: CombatSettings = Field(default_factory=CombatSettings)
    regen: RegenSettings = Field(default_factory=RegenSettings)
    decision: DecisionSettings = Field(default_factory=DecisionSettings)
    reward: RewardSettings = Field(default_factory=RewardSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached engine settings.

    Engine components accept settings explicitly; this accessor is only the
    fallback when a caller does not inject its own instance.

    Returns:
        The engine Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load engine settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "CombatSettings",
    "RegenSettings",
    "DecisionSettings",
    "RewardSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
