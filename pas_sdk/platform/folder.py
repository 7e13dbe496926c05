"""
Secret Folders

Secret folder resource and resolution of backslash-delimited folder paths
(``folder1\\folder2``) into folder IDs.
"""

import logging
from typing import ClassVar, Tuple

from ..protocols import TransportProtocol
from .fields import wire_field
from .permissions import PermissionCategory
from .query import QueryBuilder
from .vault_object import VaultObject

logger = logging.getLogger(__name__)

PATH_DELIMITER = "\\"


def split_folder_path(path: str) -> Tuple[str, str]:
    """
    Split a folder path into (parent_path, name).

    The parent path is the original string with exactly the trailing
    ``\\<name>`` removed; a single segment has an empty parent.
    """
    segments = path.split(PATH_DELIMITER)
    name = segments[-1]
    if len(segments) == 1:
        return "", name
    return path[: -len(PATH_DELIMITER + name)], name


def resolve_folder_id(client: TransportProtocol, path: str) -> str:
    """
    Resolve a folder path to the folder's ID.

    Parents are resolved before children, so ``a\\b\\c`` looks up ``a``,
    then ``b`` under ``a``, then ``c`` under ``a\\b``. An empty path resolves
    to an empty ID.

    Raises:
        NotFoundError: a folder on the path does not exist
        TooManyResultsError: a folder name is ambiguous under its parent
    """
    if not path:
        return ""

    parent_path, name = split_folder_path(path)
    parent_id = resolve_folder_id(client, parent_path) if parent_path else ""

    folder = SecretFolder(client, name=name, parent_path=parent_path, parent_id=parent_id)
    folder_id = folder.get_id_by_name()
    logger.debug(f"Resolved folder {path} to {folder_id}")
    return folder_id


class SecretFolder(VaultObject):
    """Folder in the secret tree"""
    API_CREATE: ClassVar[str] = "/ServerManage/AddSecretsFolder"
    API_READ: ClassVar[str] = "/ServerManage/GetSecretsFolder"
    API_UPDATE: ClassVar[str] = "/ServerManage/UpdateSecretsFolder"
    API_DELETE: ClassVar[str] = "/ServerManage/DeleteSecretsFolder"
    API_PERMISSIONS: ClassVar[str] = "/ServerManage/SetSecretsFolderPermissions"

    QUERY_TABLE: ClassVar[str] = "Sets"
    PERMISSION_CATEGORY: ClassVar[PermissionCategory] = PermissionCategory.FOLDER

    parent_id: str = wire_field("", wire="Parent", config="parent_id")
    parent_path: str = wire_field("", wire="ParentPath", config="parent_path")
    # Destination when moving the folder; takes precedence over parent_path
    new_parent_path: str = ""

    def query_builder(self) -> QueryBuilder:
        return (
            QueryBuilder(self.QUERY_TABLE)
            .equals("ObjectType", "DataVault")
            .equals("CollectionType", "Phantom")
            .equals_if("Name", self.name)
            .equals_if("ParentPath", self.parent_path)
        )

    def _resolve_dependencies(self) -> None:
        if self.new_parent_path:
            self.parent_path = self.new_parent_path
            self.parent_id = ""
        if not self.parent_id and self.parent_path:
            self.parent_id = resolve_folder_id(self._client, self.parent_path)


__all__ = ["PATH_DELIMITER", "split_folder_path", "resolve_folder_id", "SecretFolder"]
