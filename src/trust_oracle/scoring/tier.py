"""VerificationTier enumeration.

Five tiers are defined. The tier is an assurance level attached to an agent
by the platform; the scoring engine carries it through unchanged and never
derives or upgrades it from the numeric score.
"""
from __future__ import annotations

from enum import IntEnum


class VerificationTier(IntEnum):
    """Ordered verification tiers for an agent.

    Values are ordered so that higher integers represent stronger assurance.

    UNVERIFIED (0):
        No verification performed.
    BASIC (1):
        Email and platform registration confirmed.
    VERIFIED (2):
        Skill verification and peer endorsements completed.
    AUDITED (3):
        Code or behaviour audit completed.
    ENTERPRISE (4):
        Full security audit plus a service-level agreement.
    """

    UNVERIFIED = 0
    BASIC = 1
    VERIFIED = 2
    AUDITED = 3
    ENTERPRISE = 4

    @classmethod
    def from_value(cls, value: object) -> VerificationTier:
        """Coerce an int, tier, or case-insensitive tier name to a tier.

        Raises
        ------
        ValueError
            If *value* does not name one of the five tiers.
        """
        if isinstance(value, VerificationTier):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid verification tier {value!r}")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            key = value.strip().upper()
            if key.isdigit():
                return cls(int(key))
            try:
                return cls[key]
            except KeyError:
                pass
        raise ValueError(
            f"Invalid verification tier {value!r}. "
            f"Expected 0-4 or one of {[t.name for t in cls]}."
        )
