from enum import IntEnum
from typing import Iterable, Optional, Sequence

from flask import current_app

from pagecms.domain.exceptions import AuthorizationError, ValidationError
from pagecms.models.access_rule import AccessRule
from .principal import Principal
from .roles import AUTHENTICATED_USERS, EVERYONE


class AccessLevel(IntEnum):
    DENY = 0
    READ = 1
    READ_WRITE = 2

    @classmethod
    def parse(cls, value) -> "AccessLevel":
        if isinstance(value, AccessLevel):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValidationError(
                "invalid_access_level",
                f"Unknown access level: {value!r}",
            ) from None

    @property
    def slug(self) -> str:
        return self.name.lower()


def _full_access_roles() -> Sequence[str]:
    return current_app.config.get("FULL_ACCESS_ROLES", [])


def is_authorized(principal: Principal, roles: Iterable[str]) -> bool:
    """True if the principal is in ANY of the given roles."""
    if not principal.is_authenticated:
        return False

    for role in list(_full_access_roles()) + list(roles):
        if principal.is_in_role(role):
            return True
    return False


def demand_roles(principal: Principal, roles: Iterable[str]) -> None:
    roles = list(roles)
    if not is_authorized(principal, roles):
        current_app.logger.warning(
            "User %s is not in any of roles %s", principal.user_name, roles
        )
        raise AuthorizationError(roles=roles)


def _rule_matches(rule, principal: Principal) -> bool:
    if rule.is_for_role:
        identity = rule.identity.lower()
        if identity == EVERYONE:
            return True
        if identity == AUTHENTICATED_USERS:
            return principal.is_authenticated
        return principal.is_in_role(rule.identity)

    return (
        principal.user_name is not None
        and rule.identity.lower() == principal.user_name.lower()
    )


def get_access_level(principal: Principal, rules) -> AccessLevel:
    """
    Effective access level of the principal for an entity with the given rules.

    Full-access roles always get read-write. Without rules the configured
    default applies. Otherwise a matching deny wins, else the highest
    matching level; no match means deny.
    """
    if any(principal.is_in_role(role) for role in _full_access_roles()):
        return AccessLevel.READ_WRITE

    rules = list(rules or [])
    if not rules:
        return AccessLevel.parse(current_app.config.get("DEFAULT_ACCESS_LEVEL", "read_write"))

    levels = [
        AccessLevel.parse(rule.access_level)
        for rule in rules
        if _rule_matches(rule, principal)
    ]

    if not levels or AccessLevel.DENY in levels:
        return AccessLevel.DENY
    return max(levels)


def demand_access(
    principal: Principal,
    roles: Iterable[str],
    entity=None,
    level: AccessLevel = AccessLevel.READ_WRITE,
) -> None:
    """
    Role check, plus an access rule check on ``entity`` when one is given.
    """
    demand_roles(principal, roles)

    if entity is not None:
        demand_access_level(principal, entity, level)


def demand_access_level(principal: Principal, entity, level: AccessLevel) -> None:
    granted = get_access_level(principal, entity.access_rules)
    if granted < level:
        current_app.logger.warning(
            "User %s has %s access to %s, %s required",
            principal.user_name, granted.slug, entity.id, level.slug,
        )
        raise AuthorizationError(
            f"Access level {level.slug} required for {entity.id}"
        )


def remove_duplicate_rules(page) -> None:
    seen = set()
    for rule in list(page.access_rules):
        if rule.key in seen:
            page.access_rules.remove(rule)
        else:
            seen.add(rule.key)


def update_access_control(page, submitted: Optional[Iterable[dict]]) -> None:
    """
    Reconcile the page's access rules with the submitted list in place.

    ``None`` or an empty list removes every rule.
    """
    wanted = {}
    for item in submitted or []:
        rule = AccessRule()
        rule.identity = item["identity"].strip()
        rule.is_for_role = bool(item.get("is_for_role", False))
        rule.access_level = AccessLevel.parse(item["access_level"]).slug
        wanted.setdefault(rule.key, rule)

    for rule in list(page.access_rules):
        target = wanted.pop(rule.key, None)
        if target is None:
            page.access_rules.remove(rule)
        elif rule.access_level != target.access_level:
            rule.access_level = target.access_level

    for rule in wanted.values():
        page.access_rules.append(rule)
