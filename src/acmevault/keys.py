"""Object key layout for sites, users and the most-recent-user pointer.

Keys look like ``<prefix>/domain/<domain>`` and ``<prefix>/user/<email>``.
Names are lowercased so lookups are case-insensitive. No other validation
is applied: an empty name yields a well-formed but degenerate key.
"""

from __future__ import annotations

from dataclasses import dataclass

from acmevault.constants import DOMAIN_SEGMENT, RECENT_USER_NAME, USER_SEGMENT


@dataclass(frozen=True)
class KeyNamespace:
    """Maps logical entities to object keys under ``prefix``."""

    prefix: str

    def __post_init__(self) -> None:
        # "acme/host/" and "acme/host" name the same namespace
        object.__setattr__(self, "prefix", self.prefix.rstrip("/"))

    def _join(self, segment: str, name: str) -> str:
        if self.prefix:
            return f"{self.prefix}/{segment}/{name}"
        return f"{segment}/{name}"

    def domain_key(self, domain: str) -> str:
        return self._join(DOMAIN_SEGMENT, domain.lower())

    def user_key(self, email: str) -> str:
        return self._join(USER_SEGMENT, email.lower())

    def recent_user_key(self) -> str:
        """Key of the pointer naming the last stored user."""
        return self.user_key(RECENT_USER_NAME)
