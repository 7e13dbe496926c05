"""
Secrets

Generic secret stored in the vault, optionally inside a folder tree.
"""

import logging
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel

from ..protocols import MissingAttributeError, PlatformError
from ..restapi import BoolResponse, GenericMapResponse
from .enums import SecretType, SetType
from .fields import from_map, wire_field
from .folder import resolve_folder_id
from .permissions import PermissionCategory
from .query import QueryBuilder
from .vault_object import VaultObject

logger = logging.getLogger(__name__)

CHECKOUT_DESCRIPTION = "Checkout by pas-sdk"


class ChallengeRules(BaseModel):
    """Conditional challenge rules applied when a secret is retrieved"""
    enabled: bool = wire_field(False, wire="Enabled", config="enabled")
    unique_key: str = wire_field("", wire="UniqueKey", config="unique_key")
    rules: List[Dict[str, Any]] = wire_field(default_factory=list, wire="Rules", config="rule")


class WorkflowSettings(BaseModel):
    """Request/approval workflow; serialized inline with the owning object"""
    workflow_enabled: bool = wire_field(False, wire="WorkflowEnabled", config="workflow_enabled")
    workflow_approvers: List[Dict[str, Any]] = wire_field(
        default_factory=list, wire="WorkflowApproversList", config="workflow_approver"
    )


class Secret(VaultObject):
    """Generic secret"""
    API_CREATE: ClassVar[str] = "/ServerManage/AddSecret"
    API_READ: ClassVar[str] = "/ServerManage/GetSecret"
    API_UPDATE: ClassVar[str] = "/ServerManage/UpdateSecret"
    API_DELETE: ClassVar[str] = "/ServerManage/DeleteSecret"
    API_PERMISSIONS: ClassVar[str] = "/ServerManage/SetSecretPermissions"
    API_RETRIEVE_SECRET: ClassVar[str] = "/ServerManage/RetrieveSecretContents"
    API_MOVE_SECRET: ClassVar[str] = "/ServerManage/MoveSecret"
    API_GET_CHALLENGE: ClassVar[str] = "/ServerManage/GetSecretRightsAndChallenges"

    CREATE_EXTRA: ClassVar[Mapping[str, Any]] = {"updateChallenges": False}
    UPDATE_EXTRA: ClassVar[Mapping[str, Any]] = {"updateChallenges": True}

    QUERY_TABLE: ClassVar[str] = "DataVault"
    SET_TYPE: ClassVar[str] = SetType.SECRET.value
    PERMISSION_CATEGORY: ClassVar[PermissionCategory] = PermissionCategory.SECRET

    # Text secrets also need secret_text, see _require_fields()
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("secret_name", "secret_type")
    LOOKUP_FIELDS: ClassVar[Tuple[str, ...]] = ("secret_name",)

    secret_name: str = wire_field("", wire="SecretName", config="secret_name")
    secret_text: str = wire_field("", wire="SecretText", config="secret_text")
    secret_type: str = wire_field("", wire="Type", config="type")
    folder_id: str = wire_field("", wire="FolderId", config="folder_id")
    parent_path: str = wire_field("", wire="ParentPath", config="parent_path")
    # Challenge profile used when no rule matches; always sent so it can be cleared
    default_profile_id: str = wire_field(
        "", wire="DataVaultDefaultProfile", config="default_profile_id", omit_empty=False
    )
    challenge_rules: Optional[ChallengeRules] = wire_field(None, wire="DataVaultRules", config="challenge_rule")
    sets: List[str] = wire_field(default_factory=list, wire="Sets", config="sets")
    workflow: WorkflowSettings = wire_field(default_factory=WorkflowSettings, inline=True)
    # Destination when moving the secret; takes precedence over parent_path
    new_parent_path: str = ""

    def _require_fields(self, fields: Sequence[str]) -> None:
        # File secrets carry their content in an upload, not in SecretText
        if fields == self.REQUIRED_FIELDS and self.secret_type == SecretType.TEXT.value:
            fields = tuple(fields) + ("secret_text",)
        super()._require_fields(fields)

    def query_builder(self) -> QueryBuilder:
        # ParentPath is always constrained so top-level secrets do not match nested ones
        return (
            QueryBuilder(self.QUERY_TABLE)
            .equals_if("SecretName", self.secret_name)
            .equals("ParentPath", self.parent_path)
        )

    def _resolve_dependencies(self) -> None:
        if self.new_parent_path:
            self.parent_path = self.new_parent_path
            self.folder_id = ""
        if not self.folder_id and self.parent_path:
            self.folder_id = resolve_folder_id(self._client, self.parent_path)

    def _read_supplement(self) -> None:
        """Merge challenge profile and rules into the secret"""
        resp = self._call(self.API_GET_CHALLENGE, {"ID": self.id}, GenericMapResponse)
        result = resp.result

        profile = result.get("DataVaultDefaultProfile")
        if isinstance(profile, str):
            self.default_profile_id = profile

        challenges = result.get("Challenges")
        if isinstance(challenges, dict):
            profile = challenges.get("DataVaultDefaultProfile")
            if isinstance(profile, str):
                self.default_profile_id = profile
            rules = challenges.get("DataVaultRules")
            if isinstance(rules, dict):
                self.challenge_rules = from_map(rules, ChallengeRules())

    def _bind_row(self, row: Dict[str, Any]) -> None:
        super()._bind_row(row)
        if isinstance(row.get("FolderId"), str):
            self.folder_id = row["FolderId"]

    def move_secret(self) -> BoolResponse:
        """Move the secret into ``folder_id`` (resolved from the paths if unset)"""
        self._require_id()
        self._resolve_dependencies()

        args = {"ID": self.id, "targetFolderId": self.folder_id}
        logger.debug(f"Moving secret {self.id} to folder {self.folder_id or '<root>'}")
        return self._call(self.API_MOVE_SECRET, args, BoolResponse)

    def checkout_secret(self) -> str:
        """
        Retrieve the secret content.

        When the ID is unknown the secret is looked up by name and parent
        path first.

        Returns:
            Secret text
        """
        if not self.id:
            if not self.secret_name:
                raise MissingAttributeError("Missing required attributes SecretName")
            self.get_id_by_name()

        args = {"ID": self.id, "Description": CHECKOUT_DESCRIPTION}
        resp = self._call(self.API_RETRIEVE_SECRET, args, GenericMapResponse)

        text = resp.result.get("SecretText")
        if not isinstance(text, str):
            raise PlatformError(f"Failed to retrieve secret {self.secret_name}")
        return text


__all__ = ["ChallengeRules", "WorkflowSettings", "Secret", "CHECKOUT_DESCRIPTION"]
