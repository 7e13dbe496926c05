"""
Systems

Managed systems (servers, network devices). Windows and Unix systems accept
a wider set of rights than other classes.
"""

import logging
from typing import Any, ClassVar, List, Mapping, Tuple

from ..protocols import TransportProtocol
from .enums import ComputerClass, SetType
from .fields import wire_field
from .permissions import VALID_PERMISSIONS, Permission, PermissionCategory
from .query import QueryBuilder
from .vault_object import VaultObject

logger = logging.getLogger(__name__)

_WIN_NIX_CLASSES = (ComputerClass.WINDOWS.value, ComputerClass.UNIX.value)


class System(VaultObject):
    """Managed system"""
    API_CREATE: ClassVar[str] = "/ServerManage/AddResource"
    API_READ: ClassVar[str] = "/ServerManage/GetResource"
    API_UPDATE: ClassVar[str] = "/ServerManage/UpdateResource"
    API_DELETE: ClassVar[str] = "/ServerManage/DeleteResource"
    API_PERMISSIONS: ClassVar[str] = "/ServerManage/SetResourcePermissions"

    QUERY_TABLE: ClassVar[str] = "Server"
    SET_TYPE: ClassVar[str] = SetType.SYSTEM.value
    PERMISSION_CATEGORY: ClassVar[PermissionCategory] = PermissionCategory.SYSTEM

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("name", "fqdn", "computer_class")

    fqdn: str = wire_field("", wire="FQDN", config="fqdn")
    computer_class: str = wire_field("", wire="ComputerClass", config="computer_class")
    session_type: str = wire_field("", wire="SessionType", config="session_type")
    port: int = wire_field(0, wire="Port", config="port")
    login_default_profile: str = wire_field("", wire="LoginDefaultProfile", config="default_profile_id")
    sets: List[str] = wire_field(default_factory=list, wire="Sets", config="sets")

    def __init__(self, client: TransportProtocol, **data: Any):
        super().__init__(client, **data)
        self.resolve_valid_permissions()

    def resolve_valid_permissions(self) -> Mapping[str, str]:
        """Pick the rights table for the current computer class"""
        category = (
            PermissionCategory.WIN_NIX
            if self.computer_class in _WIN_NIX_CLASSES
            else PermissionCategory.SYSTEM
        )
        self._valid_permissions = VALID_PERMISSIONS[category]
        return self._valid_permissions

    def resolve_permissions(self) -> List[Permission]:
        # computer_class may have changed since construction (e.g. after read())
        self.resolve_valid_permissions()
        return super().resolve_permissions()

    def query_builder(self) -> QueryBuilder:
        return (
            QueryBuilder(self.QUERY_TABLE)
            .equals_if("Name", self.name)
            .equals_if("FQDN", self.fqdn)
            .equals_if("ComputerClass", self.computer_class)
        )


__all__ = ["System"]
