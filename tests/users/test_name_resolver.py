from __future__ import annotations

from conftest import FakeClock, InMemoryUserRoles
from src.storeops.storeops.core.enums import Role
from src.storeops.storeops.users.model import UserRole
from src.storeops.storeops.users.name_cache import NameCache
from src.storeops.storeops.users.resolver import NameResolver, display_or_email


def test_resolves_and_caches_display_name(names, user_roles):
    assert names.name_for_email("  AKI@example.com ") == "Aki"
    assert names.name_for_email("aki@example.com") == "Aki"

    assert user_roles.lookups == [["aki@example.com"]]


def test_unknown_email_falls_back_to_email(names):
    assert names.name_for_email("ghost@example.com") == "ghost@example.com"
    assert names.name_for_email("") == ""


def test_store_failure_falls_back_to_email(clock):
    repo = InMemoryUserRoles([UserRole("aki@example.com", "Aki", Role.CAST)], fail=True)
    resolver = NameResolver(repo, NameCache(ttl_seconds=60, clock=clock))

    assert resolver.name_for_email("aki@example.com") == "aki@example.com"
    resolver.prefetch(["aki@example.com"])


def test_cache_expires_after_ttl(names, user_roles, clock):
    names.name_for_email("ken@example.com")
    clock.advance(59)
    names.name_for_email("ken@example.com")
    assert len(user_roles.lookups) == 1

    clock.advance(2)
    names.name_for_email("ken@example.com")
    assert len(user_roles.lookups) == 2


def test_prefetch_chunks_and_skips_cached(clock):
    users = [UserRole(f"u{i}@example.com", f"User {i}", Role.CAST) for i in range(5)]
    repo = InMemoryUserRoles(users)
    resolver = NameResolver(repo, NameCache(ttl_seconds=60, clock=clock), chunk_size=2)

    resolver.name_for_email("u0@example.com")
    resolver.prefetch([u.email.upper() for u in users] + [None, ""])

    assert repo.lookups[0] == ["u0@example.com"]
    assert [len(chunk) for chunk in repo.lookups[1:]] == [2, 2]
    assert resolver.name_for_email("u4@example.com") == "User 4"
    assert len(repo.lookups) == 3


def test_separate_caches_do_not_share_state():
    repo = InMemoryUserRoles([UserRole("aki@example.com", "Aki", Role.CAST)])
    first = NameResolver(repo, NameCache(clock=FakeClock()))
    second = NameResolver(repo, NameCache(clock=FakeClock()))

    first.name_for_email("aki@example.com")
    second.name_for_email("aki@example.com")

    assert len(repo.lookups) == 2


def test_display_or_email():
    assert display_or_email("a@example.com", "Aki") == "Aki"
    assert display_or_email("a@example.com", "   ") == "a@example.com"
    assert display_or_email("a@example.com", None) == "a@example.com"
