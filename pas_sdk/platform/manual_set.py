"""
Manual Sets

Manually maintained collections of objects of one type.
"""

import logging
from typing import ClassVar, Sequence, Tuple

from ..restapi import BaseAPIResponse
from .fields import wire_field
from .permissions import PermissionCategory
from .query import QueryBuilder
from .vault_object import VaultObject

logger = logging.getLogger(__name__)

MEMBER_ACTIONS = ("add", "remove")


class ManualSet(VaultObject):
    """Manual set"""
    API_CREATE: ClassVar[str] = "/Collection/CreateManualCollection"
    API_READ: ClassVar[str] = "/Collection/GetCollection"
    API_UPDATE: ClassVar[str] = "/Collection/UpdateCollection"
    API_DELETE: ClassVar[str] = "/Collection/DeleteCollection"
    API_PERMISSIONS: ClassVar[str] = "/Collection/SetCollectionPermissions"
    API_UPDATE_MEMBERS: ClassVar[str] = "/Collection/UpdateMembersCollection"

    QUERY_TABLE: ClassVar[str] = "Sets"
    PERMISSION_CATEGORY: ClassVar[PermissionCategory] = PermissionCategory.SET

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("name", "object_type")

    object_type: str = wire_field("", wire="ObjectType", config="type")
    sub_object_type: str = wire_field("", wire="SubObjectType", config="subtype")
    collection_type: str = wire_field("ManualBucket", wire="CollectionType")

    def query_builder(self) -> QueryBuilder:
        return (
            QueryBuilder(self.QUERY_TABLE)
            .equals("CollectionType", self.collection_type)
            .equals_if("Name", self.name)
            .equals_if("ObjectType", self.object_type)
        )

    def update_set_members(self, ids: Sequence[str], action: str, table: str) -> BaseAPIResponse:
        """
        Add or remove members.

        Args:
            ids: Member object IDs
            action: "add" or "remove"
            table: Member table, i.e. the members' set type
        """
        if action not in MEMBER_ACTIONS:
            raise ValueError(f"Invalid set member action {action!r}, expected one of {MEMBER_ACTIONS}")
        self._require_id()

        members = [{"MemberType": "Row", "Table": table, "Key": member_id} for member_id in ids]
        args = {"id": self.id, action: members}
        logger.debug(f"{action} {len(members)} member(s) for set {self.id}")
        return self._call(self.API_UPDATE_MEMBERS, args, BaseAPIResponse)


__all__ = ["ManualSet", "MEMBER_ACTIONS"]
