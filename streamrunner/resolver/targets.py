"""Feature flags, playback targets and the flag admission check."""
from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Iterable


class Flags(str, Enum):
    """Capability flags attached to streams and required by sources."""

    # the stream URL can be fetched cross-origin from a browser
    CORS_ALLOWED = "cors-allowed"
    # the stream URL is bound to the IP that requested it
    IP_LOCKED = "ip-locked"


class Targets(str, Enum):
    """Environments a resolved stream is played back in."""

    BROWSER = "browser"
    BROWSER_EXTENSION = "browser-extension"
    NATIVE = "native"
    ANY = "any"


FeatureMap = FrozenSet[str]

TARGET_FEATURES: dict[Targets, FeatureMap] = {
    Targets.BROWSER: frozenset({Flags.CORS_ALLOWED.value}),
    Targets.BROWSER_EXTENSION: frozenset({Flags.CORS_ALLOWED.value}),
    Targets.NATIVE: frozenset({Flags.CORS_ALLOWED.value}),
    Targets.ANY: frozenset({Flags.CORS_ALLOWED.value}),
}


def get_target_features(
    target: Targets | str, consistent_ip_for_requests: bool = False
) -> FeatureMap:
    """Return the enabled feature set for a playback target.

    IP-locked streams are only enabled when every request of a run leaves
    from the same address as the player.
    """

    try:
        resolved = Targets(target)
    except ValueError as exc:
        raise ValueError(f"Unknown target: {target}") from exc

    features = set(TARGET_FEATURES[resolved])
    if consistent_ip_for_requests:
        features.add(Flags.IP_LOCKED.value)
    return frozenset(features)


def flags_allowed_in_features(features: Iterable[str], flags: Iterable[str]) -> bool:
    """Check that every flag is part of the enabled feature set."""

    enabled = {_flag_value(flag) for flag in features}
    return all(_flag_value(flag) in enabled for flag in flags)


def _flag_value(flag: Flags | str) -> str:
    return flag.value if isinstance(flag, Flags) else flag
