import pytest

from legitify import permissions as p


def test_role_classification():
    assert p.is_org_role(p.ORG_ROLE_OWNER)
    assert p.is_org_role(p.ORG_ROLE_MEMBER)
    assert not p.is_org_role(p.ORG_ROLE_NONE)
    for role in (p.REPO_ROLE_ADMIN, p.REPO_ROLE_MAINTAINER, p.REPO_ROLE_WRITE,
                 p.REPO_ROLE_TRIAGE, p.REPO_ROLE_READ):
        assert p.is_repository_role(role)
        assert not p.is_org_role(role)
    assert not p.is_repository_role(p.REPO_ROLE_NONE)


def test_get_org_role():
    assert p.get_org_role(True) == p.ORG_ROLE_OWNER
    assert p.get_org_role(False) == p.ORG_ROLE_MEMBER
    assert p.get_org_role(None) == p.ORG_ROLE_MEMBER


def test_parse_empty_has_every_scope_false():
    scopes = p.parse_token_scopes([])
    assert set(scopes) == set(p.ALL_SCOPES)
    assert not any(scopes.values())


def test_parse_repo_implies_repo_family():
    scopes = p.parse_token_scopes([p.REPO_ADMIN])
    for implied in (p.REPO_REPO_STATUS, p.REPO_REPO_DEPLOYMENT, p.REPO_PUBLIC_REPO,
                    p.REPO_REPO_INVITE, p.REPO_SECURITY_EVENTS, p.REPO_DELETE,
                    p.REPO_HOOK_ADMIN, p.REPO_HOOK_WRITE, p.REPO_HOOK_READ, p.WORKFLOW):
        assert scopes[implied]
    assert not scopes[p.ORG_READ]


def test_parse_org_admin_implies_chain():
    scopes = p.parse_token_scopes([p.ORG_ADMIN])
    for implied in (p.ORG_WRITE, p.ORG_READ, p.ORG_HOOK_ADMIN, p.PROJECT_ALL,
                    p.PROJECT_READ, p.PACKAGES_WRITE, p.PACKAGES_READ,
                    p.PACKAGES_DELETE, p.DISCUSSION_WRITE, p.DISCUSSION_READ):
        assert scopes[implied]
    assert not scopes[p.REPO_ADMIN]


def test_parse_user_implies_keys_chain():
    scopes = p.parse_token_scopes([p.USER_ALL])
    for implied in (p.USER_EMAIL, p.USER_FOLLOW, p.USER_READ, p.PUBLIC_KEY_ADMIN,
                    p.PUBLIC_KEY_WRITE, p.PUBLIC_KEY_READ, p.GPG_KEY_ADMIN,
                    p.GPG_KEY_WRITE, p.GPG_KEY_READ, p.NOTIFICATIONS, p.GIST):
        assert scopes[implied]


def test_parse_enterprise_admin():
    scopes = p.parse_token_scopes([p.ENTERPRISE_ADMIN])
    assert scopes[p.ENTERPRISE_MANAGE_BILLING]
    assert scopes[p.ENTERPRISE_MANAGE_RUNNERS]
    assert scopes[p.ENTERPRISE_READ]


def test_parse_keeps_unknown_scopes():
    scopes = p.parse_token_scopes(["custom:scope"])
    assert scopes["custom:scope"]


def test_parse_is_monotonic():
    narrow = p.parse_token_scopes([p.PACKAGES_WRITE])
    wide = p.parse_token_scopes([p.PACKAGES_WRITE, p.ORG_ADMIN])
    assert all(wide[k] for k, v in narrow.items() if v)


def test_owner_gets_any_granted_scope():
    scopes = p.parse_token_scopes([p.ORG_ADMIN])
    assert p.has_org_scope(p.ORG_ADMIN, scopes, p.ORG_ROLE_OWNER)
    assert not p.has_org_scope(p.REPO_ADMIN, scopes, p.ORG_ROLE_OWNER)


def test_member_limited_scopes():
    scopes = p.parse_token_scopes([p.ORG_ADMIN])
    assert not p.has_org_scope(p.ORG_ADMIN, scopes, p.ORG_ROLE_MEMBER)
    assert p.has_org_scope(p.ORG_READ, scopes, p.ORG_ROLE_MEMBER)
    assert not p.has_org_scope(p.ORG_READ, scopes, p.ORG_ROLE_NONE)


def test_repo_scope_per_role():
    scopes = p.parse_token_scopes([p.REPO_ADMIN])
    assert p.has_repo_scope(p.REPO_ADMIN, scopes, p.REPO_ROLE_ADMIN)
    assert not p.has_repo_scope(p.REPO_ADMIN, scopes, p.REPO_ROLE_WRITE)
    assert p.has_repo_scope(p.REPO_REPO_DEPLOYMENT, scopes, p.REPO_ROLE_MAINTAINER)
    assert not p.has_repo_scope(p.REPO_REPO_DEPLOYMENT, scopes, p.REPO_ROLE_READ)
    assert p.has_repo_scope(p.REPO_REPO_STATUS, scopes, p.REPO_ROLE_READ)
    assert not p.has_repo_scope(p.REPO_REPO_STATUS, scopes, p.REPO_ROLE_NONE)


def test_repo_scope_needs_token_grant():
    scopes = p.parse_token_scopes([])
    assert not p.has_repo_scope(p.GIST, scopes, p.REPO_ROLE_ADMIN)


@pytest.mark.parametrize("role", [p.REPO_ROLE_ADMIN, p.REPO_ROLE_WRITE, p.REPO_ROLE_READ])
def test_repo_roles_never_grant_org_admin(role):
    scopes = p.parse_token_scopes(list(p.ALL_SCOPES))
    assert not p.has_repo_scope(p.ORG_ADMIN, scopes, role)
    assert not p.has_repo_scope(p.ENTERPRISE_ADMIN, scopes, role)


def test_has_scope_any_role():
    scopes = p.parse_token_scopes([p.REPO_ADMIN])
    assert not p.has_scope(p.REPO_ADMIN, scopes, [p.REPO_ROLE_READ])
    assert p.has_scope(p.REPO_ADMIN, scopes, [p.REPO_ROLE_READ, p.REPO_ROLE_ADMIN])
    assert p.has_scope(p.REPO_ADMIN, scopes, [p.ORG_ROLE_OWNER])
    assert not p.has_scope(p.REPO_ADMIN, scopes, [p.ORG_ROLE_NONE, "bogus"])
    assert not p.has_scope(p.REPO_ADMIN, scopes, [])