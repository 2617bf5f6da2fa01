"""
Ability / Policy Table

Capabilities are an explicit (role, action, subject) table. A rule may carry
named instance predicates; there is no general expression evaluator.

Semantics:
- "manage" in a rule matches every action.
- can(action, subject) without an instance answers the type-level question
  ("may this principal do this to some record of this type?"), so a
  conditional rule counts as allowed.
- can(action, subject, instance) requires every predicate of some matching
  rule to hold for the instance. Tenant predicates compare against the
  resolved context, so another tenant's records never match.
- Anything not listed is denied.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple
from uuid import UUID

from .entities.enums import ContextScope, Role


class Action(str, Enum):
    manage = "manage"
    read = "read"
    create = "create"
    update = "update"
    delete = "delete"
    assign_role = "assign-role"
    invite_member = "invite-member"
    remove_member = "remove-member"
    view_audit_log = "view-audit-log"
    export_data = "export-data"
    manage_api_keys = "manage-api-keys"
    publish_practice = "publish-practice"


class Subject(str, Enum):
    Facility = "Facility"
    Team = "Team"
    ClubMembership = "ClubMembership"
    PermissionGrant = "PermissionGrant"
    AuditLog = "AuditLog"
    ApiKey = "ApiKey"
    SsoConfig = "SsoConfig"
    Practice = "Practice"
    Lineup = "Lineup"
    Equipment = "Equipment"
    AthleteProfile = "AthleteProfile"
    Season = "Season"
    Regatta = "Regatta"
    Entry = "Entry"
    Announcement = "Announcement"


@dataclass(frozen=True)
class TenantContext:
    """Resolved request scope the ability is evaluated against."""

    user_id: UUID
    scope: ContextScope = ContextScope.club
    club_id: Optional[UUID] = None
    facility_id: Optional[UUID] = None
    linked_athlete_ids: FrozenSet[str] = field(default_factory=frozenset)


def _attr(instance: Any, name: str) -> Any:
    if isinstance(instance, Mapping):
        return instance.get(name)
    return getattr(instance, name, None)


def _same(left: Any, right: Any) -> bool:
    return left is not None and right is not None and str(left) == str(right)


# Named instance predicates


def tenant_match(ctx: TenantContext, instance: Any) -> bool:
    tenant = _attr(instance, "team_id")
    if tenant is None:
        tenant = _attr(instance, "club_id")
    if tenant is None:
        tenant = _attr(instance, "tenant_id")
    return _same(tenant, ctx.club_id)


def club_match(ctx: TenantContext, instance: Any) -> bool:
    return _same(_attr(instance, "id"), ctx.club_id)


def facility_match(ctx: TenantContext, instance: Any) -> bool:
    return _same(_attr(instance, "id"), ctx.facility_id)


def in_facility(ctx: TenantContext, instance: Any) -> bool:
    facility = _attr(instance, "facility_id")
    if facility is None:
        facility = _attr(instance, "tenant_id")
    return _same(facility, ctx.facility_id)


def owner_match(ctx: TenantContext, instance: Any) -> bool:
    return _same(_attr(instance, "team_member_id"), ctx.user_id)


def actor_match(ctx: TenantContext, instance: Any) -> bool:
    return _same(_attr(instance, "user_id"), ctx.user_id)


def linked_athlete_match(ctx: TenantContext, instance: Any) -> bool:
    athlete_id = _attr(instance, "id")
    return athlete_id is not None and str(athlete_id) in ctx.linked_athlete_ids


Predicate = Callable[[TenantContext, Any], bool]


@dataclass(frozen=True)
class Rule:
    role: Role
    action: Action
    subject: Subject
    predicates: Tuple[Predicate, ...] = ()
    scope: Optional[ContextScope] = ContextScope.club

    def matches(self, action: Action, subject: Subject) -> bool:
        if self.subject != subject:
            return False
        return self.action == Action.manage or self.action == action


def _rules(role: Role, scope: Optional[ContextScope], *entries) -> Tuple[Rule, ...]:
    return tuple(
        Rule(role, action, subject, tuple(predicates), scope)
        for action, subject, *predicates in entries
    )


A = Action
S = Subject
T = tenant_match

POLICY_TABLE: Tuple[Rule, ...] = (
    # FACILITY_ADMIN, facility-level view: admin powers over the facility's clubs.
    # No practice or lineup authoring without COACH.
    *_rules(
        Role.FACILITY_ADMIN,
        ContextScope.facility,
        (A.manage, S.Facility, facility_match),
        (A.manage, S.Team, in_facility),
        (A.assign_role, S.Team, in_facility),
        (A.assign_role, S.ClubMembership, in_facility),
        (A.invite_member, S.ClubMembership, in_facility),
        (A.remove_member, S.ClubMembership, in_facility),
        (A.view_audit_log, S.AuditLog, in_facility),
        (A.export_data, S.Team, in_facility),
        (A.manage_api_keys, S.ApiKey, in_facility),
        (A.manage, S.SsoConfig, in_facility),
        (A.read, S.Practice, in_facility),
        (A.read, S.Lineup, in_facility),
        (A.read, S.Equipment, in_facility),
        (A.read, S.AthleteProfile, in_facility),
        (A.read, S.Season, in_facility),
        (A.read, S.Regatta, in_facility),
        (A.read, S.Entry, in_facility),
    ),
    # FACILITY_ADMIN drilled down into one club: read-only.
    *_rules(
        Role.FACILITY_ADMIN,
        ContextScope.club,
        (A.read, S.Team, club_match),
        (A.read, S.Practice, T),
        (A.read, S.Lineup, T),
        (A.read, S.Equipment, T),
        (A.read, S.AthleteProfile, T),
        (A.read, S.Season, T),
        (A.read, S.Regatta, T),
        (A.read, S.Entry, T),
        (A.read, S.Announcement, T),
    ),
    *_rules(
        Role.CLUB_ADMIN,
        ContextScope.club,
        (A.manage, S.Team, club_match),
        (A.assign_role, S.ClubMembership, T),
        (A.invite_member, S.ClubMembership, T),
        (A.remove_member, S.ClubMembership, T),
        (A.manage, S.PermissionGrant, T),
        (A.view_audit_log, S.AuditLog, T),
        (A.export_data, S.Team, club_match),
        (A.manage_api_keys, S.ApiKey, T),
        (A.read, S.Practice, T),
        (A.read, S.Lineup, T),
        (A.read, S.Equipment, T),
        (A.read, S.AthleteProfile, T),
        (A.read, S.Season, T),
        (A.read, S.Regatta, T),
        (A.read, S.Entry, T),
        (A.manage, S.Announcement, T),
    ),
    *_rules(
        Role.COACH,
        ContextScope.club,
        (A.manage, S.Practice, T),
        (A.publish_practice, S.Practice, T),
        (A.manage, S.Lineup, T),
        (A.manage, S.Equipment, T),
        (A.read, S.AthleteProfile, T),
        (A.manage, S.Season, T),
        (A.manage, S.Regatta, T),
        (A.manage, S.Entry, T),
        (A.manage, S.Announcement, T),
        # Own audit entries only
        (A.view_audit_log, S.AuditLog, T, actor_match),
    ),
    *_rules(
        Role.ATHLETE,
        ContextScope.club,
        (A.read, S.Practice, T),
        (A.read, S.Lineup, T),
        (A.read, S.Equipment, T),
        (A.read, S.Season, T),
        (A.read, S.Regatta, T),
        (A.read, S.Entry, T),
        (A.read, S.Announcement, T),
        (A.read, S.AthleteProfile, T, owner_match),
        (A.update, S.AthleteProfile, T, owner_match),
    ),
    *_rules(
        Role.PARENT,
        ContextScope.club,
        (A.read, S.Practice, T),
        (A.read, S.AthleteProfile, T, linked_athlete_match),
        (A.read, S.Lineup, T),
        (A.read, S.Regatta, T),
        (A.read, S.Entry, T),
        (A.read, S.Announcement, T),
    ),
)

# A role whose precondition fails contributes no rules at all.
ROLE_PRECONDITIONS: Dict[Role, Callable[[TenantContext], bool]] = {
    Role.PARENT: lambda ctx: bool(ctx.linked_athlete_ids),
}


class Ability:
    """Compiled capability predicate for one principal in one context."""

    def __init__(
        self,
        rules: Iterable[Rule],
        context: Optional[TenantContext] = None,
        is_super_admin: bool = False,
    ):
        self.rules = tuple(rules)
        self.context = context
        self.is_super_admin = is_super_admin

    @classmethod
    def empty(cls) -> "Ability":
        return cls(())

    def can(self, action, subject, instance: Any = None) -> bool:
        if self.is_super_admin:
            return True
        try:
            action = Action(action)
            subject = Subject(subject)
        except ValueError:
            return False

        for rule in self.rules:
            if not rule.matches(action, subject):
                continue
            if instance is None:
                return True
            if all(predicate(self.context, instance) for predicate in rule.predicates):
                return True
        return False

    def cannot(self, action, subject, instance: Any = None) -> bool:
        return not self.can(action, subject, instance)


def build_ability(
    effective_roles: Iterable[Role],
    tenant_context: Optional[TenantContext],
    is_super_admin: bool = False,
) -> Ability:
    """
    Compile the rules that apply to a set of effective roles in a context.

    An empty role set, or a missing context, yields an ability that denies
    everything (unless the principal is a super admin).
    """
    if is_super_admin:
        return Ability((), tenant_context, is_super_admin=True)
    if tenant_context is None:
        return Ability.empty()

    roles = {Role(role) for role in effective_roles}
    active_roles = {
        role
        for role in roles
        if ROLE_PRECONDITIONS.get(role, lambda ctx: True)(tenant_context)
    }
    rules = [
        rule
        for rule in POLICY_TABLE
        if rule.role in active_roles and (rule.scope is None or rule.scope == tenant_context.scope)
    ]
    return Ability(rules, tenant_context)
