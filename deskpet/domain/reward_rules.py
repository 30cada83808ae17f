"""Reward/level rules that are independent from HTTP and DB.

An account may claim any tier up to its current level. Claiming an unclaimed
tier unlocks ``tier-<k>`` and moves the level to ``k + 1``; claiming a tier the
account already holds changes nothing.

Rule of thumb:
- OK: validation, transitions over (level, rewards).
- Not OK: touching DB sessions, tokens, requests, datetime.now(), etc.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from deskpet.exceptions import PolicyError, ValidationError

INITIAL_LEVEL = 1
REWARD_PREFIX = "tier-"


@dataclass(frozen=True)
class ClaimResult:
    level: int
    rewards: List[str]
    changed: bool


def reward_id_for_level(level: int) -> str:
    return f"{REWARD_PREFIX}{level}"


def tier_of(reward_id: str) -> int:
    """Tier number of a reward identifier, or 0 for identifiers outside the tier scheme."""
    if not reward_id.startswith(REWARD_PREFIX):
        return 0
    suffix = reward_id[len(REWARD_PREFIX):]
    return int(suffix) if suffix.isdigit() else 0


def normalize_rewards(rewards: Iterable[str]) -> List[str]:
    """Deduplicate and order rewards by tier."""
    return sorted(set(rewards), key=lambda reward_id: (tier_of(reward_id), reward_id))


def validate_level(level: int, tier_count: int) -> None:
    if level < 1 or level > tier_count:
        raise ValidationError(f"Level must be between 1 and {tier_count}")


def claim_level(
    current_level: int, rewards: Iterable[str], level: int, tier_count: int
) -> ClaimResult:
    """Apply a claim for ``level`` to the given progress.

    Any level above the current one is locked, whether or not it is a tier.

    Raises:
        PolicyError: ``level`` has not been reached yet
        ValidationError: ``level`` is reached but not a defined tier
    """
    if level > current_level:
        raise PolicyError(level, current_level)
    validate_level(level, tier_count)

    held = normalize_rewards(rewards)
    reward_id = reward_id_for_level(level)
    if reward_id in held:
        return ClaimResult(level=current_level, rewards=held, changed=False)

    # never move the level backwards, even if a lower tier was missing
    new_level = max(current_level, level + 1)
    return ClaimResult(
        level=new_level,
        rewards=normalize_rewards(held + [reward_id]),
        changed=True,
    )


def reset_progress() -> Tuple[int, List[str]]:
    return INITIAL_LEVEL, []
