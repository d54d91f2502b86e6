# Path: knxproj/engine/extraction/passwords.py
"""
Password Resolvers

A password resolver is any callable taking the entry path inside a
container and returning the password (str or bytes) or None.

Resolvers here:
- static_password: one password for every encrypted entry
- PasswordMap: per-entry passwords by exact path or file name
- CachingPasswordResolver: per-session cache around any resolver
"""

from typing import Callable, Optional, Union

Password = Union[str, bytes]
PasswordResolver = Callable[[str], Optional[Password]]


def to_password_bytes(password: Optional[Password]) -> Optional[bytes]:
    """Normalize a password to bytes (None stays None)."""
    if password is None:
        return None
    if isinstance(password, bytes):
        return password
    return password.encode('utf-8')


def static_password(password: Optional[Password]) -> PasswordResolver:
    """Resolver returning the same password for every entry."""
    def resolve(entry_path: str) -> Optional[Password]:
        return password
    return resolve


class PasswordMap:
    """
    Per-entry passwords.

    Looks up the full entry path first, then its file name, then the default.

    Example:
        resolver = PasswordMap({'P-0497.zip': 'secret'}, default=None)
    """

    def __init__(self, passwords: dict[str, Password], default: Optional[Password] = None):
        self.passwords = dict(passwords)
        self.default = default

    def __call__(self, entry_path: str) -> Optional[Password]:
        if entry_path in self.passwords:
            return self.passwords[entry_path]
        name = entry_path.rsplit('/', 1)[-1]
        return self.passwords.get(name, self.default)


class CachingPasswordResolver:
    """
    Caches resolver results per entry path for one extraction session.

    The wrapped resolver is invoked at most once per distinct path.
    """

    def __init__(self, resolver: Optional[PasswordResolver] = None):
        self.resolver = resolver
        self._cache: dict[str, Optional[bytes]] = {}

    def __call__(self, entry_path: str) -> Optional[bytes]:
        if entry_path not in self._cache:
            password = self.resolver(entry_path) if self.resolver else None
            self._cache[entry_path] = to_password_bytes(password)
        return self._cache[entry_path]


__all__ = [
    'Password',
    'PasswordResolver',
    'to_password_bytes',
    'static_password',
    'PasswordMap',
    'CachingPasswordResolver',
]
