"""Access decision engine: ordered URL rules evaluated against a Principal's authorities.

Evaluation per request:

1. Path matches a public pattern -> PUBLIC_ALLOWED (no principal needed).
2. First rule whose pattern matches decides; a permit_all rule -> PUBLIC_ALLOWED.
3. No principal -> AUTHENTICATION_REQUIRED.
4. Principal holds one of the rule's authorities -> AUTHORIZATION_GRANTED, else DENIED.
5. No rule matched -> AUTHORIZATION_DENIED (deny by default).

Rules are never reordered. A policy whose ordering would let a public pattern shadow a
restrictive rule is rejected when it is built.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from app.schemas.principal import Principal
from app.services.identity_resolver import role_authority
from app.services.path_patterns import matches, patterns_overlap, validate_pattern

if TYPE_CHECKING:
    from app.core.config import Settings


class AccessDecision(str, Enum):
    PUBLIC_ALLOWED = "public_allowed"
    AUTHENTICATION_REQUIRED = "authentication_required"
    AUTHORIZATION_GRANTED = "authorization_granted"
    AUTHORIZATION_DENIED = "authorization_denied"

    @property
    def allowed(self) -> bool:
        return self in (AccessDecision.PUBLIC_ALLOWED, AccessDecision.AUTHORIZATION_GRANTED)


class AccessPolicyError(Exception):
    """The configured rule list is invalid; raised once at startup."""


@dataclass(frozen=True)
class AccessRule:
    """A path pattern and the authorities allowed to reach it (or permit_all)."""

    pattern: str
    authorities: frozenset[str] = field(default_factory=frozenset)
    permit_all: bool = False

    @classmethod
    def has_any_role(cls, pattern: str, *roles: str) -> "AccessRule":
        return cls(pattern, frozenset(role_authority(r) for r in roles))

    @classmethod
    def public(cls, pattern: str) -> "AccessRule":
        return cls(pattern, permit_all=True)

    def applies_to(self, path: str) -> bool:
        return matches(self.pattern, path)


class AccessPolicy:
    """Immutable, validated rule list plus public paths. Safe to share between requests."""

    def __init__(self, rules: Iterable[AccessRule], public_paths: Iterable[str] = ()) -> None:
        self._rules = tuple(rules)
        self._public_paths = tuple(public_paths)
        _validate(self._rules, self._public_paths)

    @property
    def rules(self) -> tuple[AccessRule, ...]:
        return self._rules

    @property
    def public_paths(self) -> tuple[str, ...]:
        return self._public_paths

    def is_public_path(self, path: str) -> bool:
        return any(matches(pattern, path) for pattern in self._public_paths)

    def find_rule(self, path: str) -> AccessRule | None:
        """First rule whose pattern matches path, or None."""
        for rule in self._rules:
            if rule.applies_to(path):
                return rule
        return None

    def decide(self, path: str, principal: Principal | None) -> AccessDecision:
        if self.is_public_path(path):
            return AccessDecision.PUBLIC_ALLOWED
        rule = self.find_rule(path)
        if rule is not None and rule.permit_all:
            return AccessDecision.PUBLIC_ALLOWED
        if principal is None:
            return AccessDecision.AUTHENTICATION_REQUIRED
        if rule is None:
            return AccessDecision.AUTHORIZATION_DENIED
        if principal.has_any_authority(rule.authorities):
            return AccessDecision.AUTHORIZATION_GRANTED
        return AccessDecision.AUTHORIZATION_DENIED


def _validate(rules: tuple[AccessRule, ...], public_paths: tuple[str, ...]) -> None:
    for pattern in (*public_paths, *(r.pattern for r in rules)):
        try:
            validate_pattern(pattern)
        except ValueError as e:
            raise AccessPolicyError(str(e)) from e

    for rule in rules:
        if rule.permit_all and rule.authorities:
            raise AccessPolicyError(
                f"Rule {rule.pattern!r} cannot be both permit_all and require authorities"
            )
        if not rule.permit_all and not rule.authorities:
            raise AccessPolicyError(f"Rule {rule.pattern!r} has no required authorities")

    restrictive = [r for r in rules if not r.permit_all]
    for public in public_paths:
        for rule in restrictive:
            if patterns_overlap(public, rule.pattern):
                raise AccessPolicyError(
                    f"Public path {public!r} overlaps restricted rule {rule.pattern!r}"
                )

    for i, rule in enumerate(rules):
        if not rule.permit_all:
            continue
        for later in rules[i + 1 :]:
            if not later.permit_all and patterns_overlap(rule.pattern, later.pattern):
                raise AccessPolicyError(
                    f"permit_all rule {rule.pattern!r} shadows later restricted rule "
                    f"{later.pattern!r}; order rules from most to least restrictive"
                )


def build_access_policy(settings: "Settings") -> AccessPolicy:
    """Build the policy from ACCESS_RULES and PUBLIC_PATHS. Raises AccessPolicyError."""
    rules = []
    for entry in settings.ACCESS_RULES:
        if entry.permit_all:
            if entry.roles:
                raise AccessPolicyError(
                    f"Rule {entry.pattern!r} cannot be both permit_all and require roles"
                )
            rules.append(AccessRule.public(entry.pattern))
        else:
            if any(not role.strip() for role in entry.roles):
                raise AccessPolicyError(f"Rule {entry.pattern!r} contains an empty role name")
            rules.append(AccessRule.has_any_role(entry.pattern, *entry.roles))
    return AccessPolicy(rules, settings.PUBLIC_PATHS)
