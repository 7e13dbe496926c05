"""
Principals

Users and roles as permission targets. Only name lookups are exposed.
"""

from typing import ClassVar

from .query import QueryBuilder
from .vault_object import VaultObject


class User(VaultObject):
    """Directory user, looked up by login name"""
    QUERY_TABLE: ClassVar[str] = "User"

    def query_builder(self) -> QueryBuilder:
        return QueryBuilder(self.QUERY_TABLE).equals_if("Username", self.name)


class Role(VaultObject):
    """Role, looked up by name"""
    QUERY_TABLE: ClassVar[str] = "Role"


__all__ = ["User", "Role"]
