"""Owner/group name resolution with per-run memoization.

The host account database is consulted through injectable lookup callables so
tests can substitute a fixed mapping. Any lookup failure falls back to the
decimal identifier.
"""

from __future__ import annotations

from collections.abc import Callable

IdLookup = Callable[[int], str]


def _host_user_name(uid: int) -> str:
    """Return the account name for ``uid`` from the host password database."""
    try:
        import pwd
    except ImportError as exc:
        raise KeyError(uid) from exc
    return pwd.getpwuid(uid).pw_name


def _host_group_name(gid: int) -> str:
    """Return the group name for ``gid`` from the host group database."""
    try:
        import grp
    except ImportError as exc:
        raise KeyError(gid) from exc
    return grp.getgrgid(gid).gr_name


class IdentityCache:
    """Memoized numeric-identifier to display-name resolver."""

    def __init__(self, user_lookup: IdLookup | None = None, group_lookup: IdLookup | None = None) -> None:
        self._user_lookup = user_lookup or _host_user_name
        self._group_lookup = group_lookup or _host_group_name
        self._users: dict[int, str] = {}
        self._groups: dict[int, str] = {}

    @classmethod
    def from_mapping(cls, users: dict[int, str], groups: dict[int, str]) -> IdentityCache:
        """Build a cache backed by fixed mappings instead of the host database."""
        return cls(user_lookup=users.__getitem__, group_lookup=groups.__getitem__)

    @staticmethod
    def _resolve(cache: dict[int, str], lookup: IdLookup, ident: int) -> str:
        cached = cache.get(ident)
        if cached is not None:
            return cached
        try:
            name = lookup(ident)
        except (KeyError, OverflowError, ValueError):
            name = str(ident)
        cache[ident] = name
        return name

    def owner_name(self, uid: int) -> str:
        return self._resolve(self._users, self._user_lookup, uid)

    def group_name(self, gid: int) -> str:
        return self._resolve(self._groups, self._group_lookup, gid)


__all__ = [
    "IdLookup",
    "IdentityCache",
]
