"""
Vault Object

Shared lifecycle for every PAS resource type: create, read, update, delete,
name-based lookup, permission assignment and set membership.

Concrete types declare their API paths, response shapes, query table and
fields; this base class owns validation, response handling and error policy.

Lifecycle:
    Unbound     no ID
    Identified  ID known (assigned, created, or looked up by name)
    Loaded      full attribute set fetched with read()
"""

import logging
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Tuple, Type

from pydantic import BaseModel, ConfigDict, PrivateAttr

from ..protocols import (
    FieldDecodeError,
    MissingAttributeError,
    MissingIDError,
    PermissionValidationError,
    TransportProtocol,
    UnsupportedOperationError,
)
from ..restapi import BaseAPIResponse, BoolResponse, GenericMapResponse, StringResponse
from .fields import from_map, to_wire_map, wire_field
from .permissions import VALID_PERMISSIONS, Permission, PermissionCategory, resolve_permissions
from .query import QueryBuilder, query_vault_object

logger = logging.getLogger(__name__)


class VaultObject(BaseModel):
    """Base class of every PAS resource object"""
    model_config = ConfigDict(extra="forbid")

    # API paths; None means the resource type does not support the operation
    API_CREATE: ClassVar[Optional[str]] = None
    API_READ: ClassVar[Optional[str]] = None
    API_UPDATE: ClassVar[Optional[str]] = None
    API_DELETE: ClassVar[Optional[str]] = None
    API_PERMISSIONS: ClassVar[Optional[str]] = None

    # Envelope shapes returned by the APIs above
    CREATE_RESPONSE: ClassVar[Type[BaseAPIResponse]] = StringResponse
    UPDATE_RESPONSE: ClassVar[Type[BaseAPIResponse]] = GenericMapResponse
    DELETE_RESPONSE: ClassVar[Type[BaseAPIResponse]] = BoolResponse

    # Extra arguments merged into create/update payloads
    CREATE_EXTRA: ClassVar[Mapping[str, Any]] = {}
    UPDATE_EXTRA: ClassVar[Mapping[str, Any]] = {}

    QUERY_TABLE: ClassVar[Optional[str]] = None
    # Object type used for set membership (e.g. "DataVault", "Server")
    SET_TYPE: ClassVar[Optional[str]] = None
    PERMISSION_CATEGORY: ClassVar[PermissionCategory] = PermissionCategory.GENERIC

    # Attributes that must be set before create() / before a name lookup
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("name",)
    LOOKUP_FIELDS: ClassVar[Tuple[str, ...]] = ("name",)

    id: str = wire_field("", wire="ID")
    name: str = wire_field("", wire="Name", config="name")
    description: str = wire_field("", wire="Description", config="description")
    permissions: List[Permission] = wire_field(default_factory=list, config="permission")

    _client: TransportProtocol = PrivateAttr()
    _valid_permissions: Mapping[str, str] = PrivateAttr()

    def __init__(self, client: TransportProtocol, **data: Any):
        super().__init__(**data)
        self._client = client
        self._valid_permissions = VALID_PERMISSIONS[self.PERMISSION_CATEGORY]

    @property
    def client(self) -> TransportProtocol:
        return self._client

    @property
    def valid_permissions(self) -> Mapping[str, str]:
        """Right name translation table for this object"""
        return self._valid_permissions

    @property
    def type_name(self) -> str:
        return type(self).__name__

    # ============ Helpers ============

    def _require_id(self) -> None:
        if not self.id:
            logger.error(f"Missing ID for {self.type_name}")
            raise MissingIDError(self.type_name)

    def _require_api(self, api: Optional[str], operation: str) -> str:
        if not api:
            raise UnsupportedOperationError(f"{self.type_name} does not support {operation}")
        return api

    def _require_fields(self, fields: Sequence[str]) -> None:
        missing = [f for f in fields if not getattr(self, f)]
        if missing:
            message = f"Missing required attributes for {self.type_name}: {', '.join(missing)}"
            logger.error(message)
            raise MissingAttributeError(message)

    def _call(self, api: str, args: Any, response_model: Type[BaseAPIResponse]) -> BaseAPIResponse:
        """Execute a call and raise EnvelopeError if the envelope reports failure"""
        resp = self._client.call(api, args, response_model)
        if not resp.success:
            logger.error(f"{api} failed for {self.type_name} {self.id}: {resp.message} {resp.exception or ''}")
        resp.raise_for_failure()
        return resp

    def _resolve_dependencies(self) -> None:
        """Resolve IDs this object depends on (e.g. folder ID); no-op by default"""

    def _read_supplement(self) -> None:
        """Secondary reads merged into the object after read(); no-op by default"""

    def _write_args(self, extra: Mapping[str, Any]) -> Dict[str, Any]:
        args = to_wire_map(self)
        args.update(extra)
        logger.debug(f"Generated map for {self.type_name}: keys={sorted(args)}")
        return args

    # ============ Lifecycle ============

    def create(self) -> StringResponse:
        """Create the object and bind the returned ID"""
        api = self._require_api(self.API_CREATE, "create")
        self._require_fields(self.REQUIRED_FIELDS)
        self._resolve_dependencies()

        resp = self._call(api, self._write_args(self.CREATE_EXTRA), self.CREATE_RESPONSE)
        if not isinstance(resp.result, str) or not resp.result:
            raise FieldDecodeError(f"{api} did not return an ID for {self.type_name}")

        # Bind the ID so the same object can be updated afterwards
        self.id = resp.result
        logger.info(f"Created {self.type_name} {self.id}")
        return resp

    def read(self) -> GenericMapResponse:
        """Fetch the object by ID and populate its fields"""
        api = self._require_api(self.API_READ, "read")
        self._require_id()

        resp = self._call(api, {"ID": self.id}, GenericMapResponse)
        from_map(resp.result, self)
        self._read_supplement()
        return resp

    def update(self) -> BaseAPIResponse:
        """Send the current field values for an existing object"""
        api = self._require_api(self.API_UPDATE, "update")
        self._require_id()
        self._resolve_dependencies()

        resp = self._call(api, self._write_args(self.UPDATE_EXTRA), self.UPDATE_RESPONSE)
        logger.info(f"Updated {self.type_name} {self.id}")
        return resp

    def delete(self) -> BaseAPIResponse:
        """Delete the object by ID"""
        api = self._require_api(self.API_DELETE, "delete")
        self._require_id()

        resp = self._call(api, {"ID": self.id}, self.DELETE_RESPONSE)
        logger.info(f"Deleted {self.type_name} {self.id}")
        return resp

    # ============ Lookup ============

    def query_builder(self) -> QueryBuilder:
        """Predicates identifying this object; defaults to Name equality"""
        return QueryBuilder(self.QUERY_TABLE).equals_if("Name", self.name)

    def query(self) -> Dict[str, Any]:
        """
        Find the single row matching this object's identifying fields.

        Raises:
            NotFoundError: no match
            TooManyResultsError: more than one match
        """
        if not self.QUERY_TABLE:
            raise UnsupportedOperationError(f"{self.type_name} does not support query")
        return query_vault_object(self._client, self.query_builder().build())

    def get_id_by_name(self) -> str:
        """Look the object up by its identifying fields and bind its ID"""
        self._require_fields(self.LOOKUP_FIELDS)
        self._bind_row(self.query())
        return self.id

    def _bind_row(self, row: Dict[str, Any]) -> None:
        """Bind identifiers from a query row"""
        object_id = row.get("ID")
        if not isinstance(object_id, str) or not object_id:
            raise FieldDecodeError(f"Query row for {self.type_name} has no ID")
        self.id = object_id

    def get_by_name(self) -> GenericMapResponse:
        """Look the object up by name, then read it"""
        self.get_id_by_name()
        return self.read()

    def delete_by_name(self) -> BaseAPIResponse:
        """Look the object up by name, then delete it"""
        self.get_id_by_name()
        return self.delete()

    # ============ Permissions & Sets ============

    def resolve_permissions(self) -> List[Permission]:
        """Resolve ``permissions`` against this object's valid-permissions table"""
        return resolve_permissions(self._client, self.permissions, self.valid_permissions)

    def set_permissions(self, is_remove: bool = False) -> BaseAPIResponse:
        """
        Grant (or with is_remove, revoke) the resolved ``permissions``.

        Every entry must have been resolved first (see resolve_permissions()).
        """
        api = self._require_api(self.API_PERMISSIONS, "permissions")
        self._require_id()

        unresolved = [p.principal_name for p in self.permissions if not p.principal_id]
        if unresolved:
            raise PermissionValidationError(f"Unresolved principals: {', '.join(unresolved)}")

        grants = []
        for perm in self.permissions:
            grant = to_wire_map(perm)
            grant["Rights"] = "None" if is_remove else perm.rights
            grants.append(grant)

        args = {"ID": self.id, "PVID": self.id, "RowKey": self.id, "Grants": grants}
        return self._call(api, args, BaseAPIResponse)

    def add_to_sets_by_name(self, set_names: Sequence[str]) -> None:
        """Add this object to each manual set named in ``set_names``"""
        # Imported here: ManualSet is itself a VaultObject
        from .manual_set import ManualSet

        self._require_id()
        if not self.SET_TYPE:
            raise UnsupportedOperationError(f"{self.type_name} cannot be added to sets")

        for set_name in set_names:
            manual_set = ManualSet(self._client, name=set_name, object_type=self.SET_TYPE)
            manual_set.get_id_by_name()
            manual_set.update_set_members([self.id], "add", self.SET_TYPE)
            logger.info(f"Added {self.type_name} {self.id} to set {set_name}")


__all__ = ["VaultObject"]
