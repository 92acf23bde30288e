"""Token scopes, roles and the checks that tie them together."""

from __future__ import annotations

from collections.abc import Iterable

OrganizationRole = str
RepositoryRole = str
Role = str
TokenScope = str
TokenScopes = dict

ORG_ROLE_NONE = "NONE"
ORG_ROLE_OWNER = "OWNER"
ORG_ROLE_MEMBER = "MEMBER"

REPO_ROLE_NONE = "NONE"
REPO_ROLE_ADMIN = "ADMIN"
REPO_ROLE_MAINTAINER = "MAINTAIN"
REPO_ROLE_WRITE = "WRITE"
REPO_ROLE_TRIAGE = "TRIAGE"
REPO_ROLE_READ = "READ"

SCOPE_NONE = "None"

REPO_ADMIN = "repo"
REPO_REPO_STATUS = "repo:status"
REPO_REPO_DEPLOYMENT = "repo_deployment"
REPO_PUBLIC_REPO = "public_repo"
REPO_REPO_INVITE = "repo:invite"
REPO_SECURITY_EVENTS = "security_events"
REPO_DELETE = "delete_repo"

WORKFLOW = "workflow"

PACKAGES_WRITE = "write:packages"
PACKAGES_READ = "read:packages"
PACKAGES_DELETE = "delete:packages"

ORG_ADMIN = "admin:org"
ORG_WRITE = "write:org"
ORG_READ = "read:org"

PUBLIC_KEY_ADMIN = "admin:public_key"
PUBLIC_KEY_WRITE = "write:public_key"
PUBLIC_KEY_READ = "read:public_key"

ORG_HOOK_ADMIN = "admin:org_hook"
REPO_HOOK_ADMIN = "admin:repo_hook"
REPO_HOOK_WRITE = "write:repo_hook"
REPO_HOOK_READ = "read:repo_hook"

GIST = "gist"

NOTIFICATIONS = "notifications"

USER_ALL = "user"
USER_READ = "read:user"
USER_EMAIL = "read:email"
USER_FOLLOW = "user:follow"

DISCUSSION_WRITE = "write:discussion"
DISCUSSION_READ = "read:discussion"

ENTERPRISE_ADMIN = "admin:enterprise"
ENTERPRISE_MANAGE_RUNNERS = "manage_runners:enterprise"
ENTERPRISE_MANAGE_BILLING = "manage_billing:enterprise"
ENTERPRISE_READ = "read:enterprise"

PROJECT_ALL = "project"
PROJECT_READ = "read:project"

GPG_KEY_ADMIN = "admin:gpg_key"
GPG_KEY_WRITE = "write:gpg_key"
GPG_KEY_READ = "read:gpg_key"

ALL_SCOPES: tuple[str, ...] = (
    REPO_ADMIN,
    REPO_REPO_STATUS,
    REPO_REPO_DEPLOYMENT,
    REPO_PUBLIC_REPO,
    REPO_REPO_INVITE,
    REPO_SECURITY_EVENTS,
    REPO_DELETE,
    WORKFLOW,
    PACKAGES_WRITE,
    PACKAGES_READ,
    PACKAGES_DELETE,
    ORG_ADMIN,
    ORG_WRITE,
    ORG_READ,
    PUBLIC_KEY_ADMIN,
    PUBLIC_KEY_WRITE,
    PUBLIC_KEY_READ,
    ORG_HOOK_ADMIN,
    REPO_HOOK_ADMIN,
    REPO_HOOK_WRITE,
    REPO_HOOK_READ,
    GIST,
    NOTIFICATIONS,
    USER_ALL,
    USER_READ,
    USER_EMAIL,
    USER_FOLLOW,
    DISCUSSION_WRITE,
    DISCUSSION_READ,
    ENTERPRISE_ADMIN,
    ENTERPRISE_MANAGE_RUNNERS,
    ENTERPRISE_MANAGE_BILLING,
    ENTERPRISE_READ,
    PROJECT_ALL,
    PROJECT_READ,
    GPG_KEY_ADMIN,
    GPG_KEY_WRITE,
    GPG_KEY_READ,
)

# Scopes that take effect for each role; scopes not listed are never granted.
_ORG_MEMBER_VALID_SCOPES = frozenset({
    PACKAGES_READ,
    ORG_READ,
    PUBLIC_KEY_ADMIN, PUBLIC_KEY_WRITE, PUBLIC_KEY_READ,
    GIST,
    NOTIFICATIONS,
    USER_ALL, USER_READ, USER_EMAIL, USER_FOLLOW,
    DISCUSSION_WRITE, DISCUSSION_READ,
    PROJECT_ALL, PROJECT_READ,
    GPG_KEY_ADMIN, GPG_KEY_WRITE, GPG_KEY_READ,
})

_REPO_ADMIN_VALID_SCOPES = frozenset(ALL_SCOPES) - {
    ORG_ADMIN, ORG_WRITE, ORG_READ,
    ORG_HOOK_ADMIN,
    ENTERPRISE_ADMIN, ENTERPRISE_MANAGE_RUNNERS, ENTERPRISE_MANAGE_BILLING, ENTERPRISE_READ,
}

_REPO_NON_ADMIN_VALID_SCOPES = frozenset({
    REPO_REPO_STATUS, REPO_REPO_DEPLOYMENT, REPO_PUBLIC_REPO,
    WORKFLOW,
    PACKAGES_WRITE, PACKAGES_READ, PACKAGES_DELETE,
    PUBLIC_KEY_ADMIN, PUBLIC_KEY_WRITE, PUBLIC_KEY_READ,
    REPO_HOOK_ADMIN, REPO_HOOK_WRITE, REPO_HOOK_READ,
    GIST,
    NOTIFICATIONS,
    USER_ALL, USER_READ, USER_EMAIL, USER_FOLLOW,
    DISCUSSION_WRITE, DISCUSSION_READ,
    PROJECT_READ,
    GPG_KEY_ADMIN, GPG_KEY_WRITE, GPG_KEY_READ,
})

_REPO_READ_VALID_SCOPES = frozenset({
    REPO_REPO_STATUS, REPO_PUBLIC_REPO,
    PACKAGES_READ,
    ORG_READ,
    PUBLIC_KEY_READ,
    REPO_HOOK_ADMIN, REPO_HOOK_WRITE, REPO_HOOK_READ,
    GIST,
    NOTIFICATIONS,
    USER_ALL, USER_READ, USER_EMAIL, USER_FOLLOW,
    DISCUSSION_READ,
    PROJECT_READ,
    GPG_KEY_ADMIN, GPG_KEY_WRITE, GPG_KEY_READ,
})

_REPO_ROLE_SCOPES = {
    REPO_ROLE_ADMIN: _REPO_ADMIN_VALID_SCOPES,
    REPO_ROLE_MAINTAINER: _REPO_NON_ADMIN_VALID_SCOPES,
    REPO_ROLE_WRITE: _REPO_NON_ADMIN_VALID_SCOPES,
    REPO_ROLE_TRIAGE: _REPO_NON_ADMIN_VALID_SCOPES,
    REPO_ROLE_READ: _REPO_READ_VALID_SCOPES,
}

# (if granted, then also grant ...) applied in order.
_IMPLICATIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (REPO_ADMIN, (
        REPO_REPO_STATUS, REPO_REPO_DEPLOYMENT, REPO_PUBLIC_REPO, REPO_REPO_INVITE,
        REPO_SECURITY_EVENTS, REPO_DELETE, REPO_HOOK_ADMIN, WORKFLOW,
    )),
    (REPO_HOOK_ADMIN, (REPO_HOOK_WRITE,)),
    (REPO_HOOK_WRITE, (REPO_HOOK_READ,)),
    (ORG_ADMIN, (
        ORG_WRITE, ORG_READ, ORG_HOOK_ADMIN, PROJECT_ALL, PACKAGES_WRITE,
        PACKAGES_DELETE, DISCUSSION_WRITE,
    )),
    (USER_ALL, (
        USER_EMAIL, USER_FOLLOW, USER_READ, PUBLIC_KEY_ADMIN, GPG_KEY_ADMIN,
        NOTIFICATIONS, GIST,
    )),
    (PACKAGES_WRITE, (PACKAGES_READ,)),
    (PUBLIC_KEY_ADMIN, (PUBLIC_KEY_WRITE,)),
    (PUBLIC_KEY_WRITE, (PUBLIC_KEY_READ,)),
    (GPG_KEY_ADMIN, (GPG_KEY_WRITE,)),
    (GPG_KEY_WRITE, (GPG_KEY_READ,)),
    (DISCUSSION_WRITE, (DISCUSSION_READ,)),
    (ENTERPRISE_ADMIN, (ENTERPRISE_MANAGE_BILLING, ENTERPRISE_MANAGE_RUNNERS, ENTERPRISE_READ)),
    (PROJECT_ALL, (PROJECT_READ,)),
    (GPG_KEY_ADMIN, (GPG_KEY_WRITE, GPG_KEY_READ)),
)


def is_org_role(role: Role) -> bool:
    return role in (ORG_ROLE_OWNER, ORG_ROLE_MEMBER)


def is_repository_role(role: Role) -> bool:
    return role in (
        REPO_ROLE_ADMIN,
        REPO_ROLE_MAINTAINER,
        REPO_ROLE_WRITE,
        REPO_ROLE_TRIAGE,
        REPO_ROLE_READ,
    )


def has_scope(required_scope: str, available_scopes: dict, roles: Iterable[Role]) -> bool:
    """Return True if any of the roles lets the token use ``required_scope``."""
    for role in roles:
        if is_org_role(role):
            if has_org_scope(required_scope, available_scopes, role):
                return True
        elif is_repository_role(role):
            if has_repo_scope(required_scope, available_scopes, role):
                return True
    return False


def get_org_role(can_administer: bool | None) -> OrganizationRole:
    """Owner if the user can administer the organization, otherwise member."""
    return ORG_ROLE_OWNER if can_administer else ORG_ROLE_MEMBER


def _denormalize(scopes: dict) -> dict:
    for granted, implied in _IMPLICATIONS:
        if scopes.get(granted):
            for scope in implied:
                scopes[scope] = True
    return scopes


def parse_token_scopes(scopes_list: Iterable[str]) -> dict:
    """Build a full scope map from the scopes a token reports, with implied scopes set."""
    scopes = dict.fromkeys(ALL_SCOPES, False)
    for scope in scopes_list:
        scopes[scope] = True
    return _denormalize(scopes)


def has_org_scope(to_check: str, scopes: dict, org_role: OrganizationRole) -> bool:
    if org_role == ORG_ROLE_OWNER:
        return bool(scopes.get(to_check, False))
    if org_role == ORG_ROLE_MEMBER and to_check in _ORG_MEMBER_VALID_SCOPES:
        return bool(scopes.get(to_check, False))
    return False


def has_repo_scope(to_check: str, scopes: dict, repo_role: RepositoryRole) -> bool:
    allowed = _REPO_ROLE_SCOPES.get(repo_role, frozenset())
    return to_check in allowed and bool(scopes.get(to_check, False))