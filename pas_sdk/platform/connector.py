"""
Connectors

Connectors register themselves with the service when installed, so the SDK
only finds, reads and deletes them.
"""

from typing import ClassVar, Tuple, Type

from ..restapi import BaseAPIResponse, GenericMapResponse
from .enums import ConnectorStatus
from .fields import from_map, wire_field
from .query import QueryBuilder, query_vault_object
from .vault_object import VaultObject


class Connector(VaultObject):
    """Connector (proxy) host"""
    API_DELETE: ClassVar[str] = "/ServerManage/DeleteProxy"
    DELETE_RESPONSE: ClassVar[Type[BaseAPIResponse]] = GenericMapResponse

    QUERY_TABLE: ClassVar[str] = "Proxy"
    # Any combination of the query filters may identify a connector
    LOOKUP_FIELDS: ClassVar[Tuple[str, ...]] = ()

    machine_name: str = wire_field("", wire="MachineName", config="machine_name")
    ssh_service: str = wire_field("", wire="SSHService", config="ssh_service")
    rdp_service: str = wire_field("", wire="RDPService", config="rdp_service")
    ad_proxy: str = wire_field("", wire="ADProxy", config="ad_proxy")
    app_gateway: str = wire_field("", wire="AppGateway", config="app_gateway")
    http_api_service: str = wire_field("", wire="HttpAPIService", config="http_api_service")
    ldap_proxy: str = wire_field("", wire="LDAPProxy", config="ldap_proxy")
    radius_service: str = wire_field("", wire="RadiusService", config="radius_service")
    radius_external_service: str = wire_field("", wire="RadiusExternalService", config="radius_external_service")
    online: bool = wire_field(False, wire="Online", config="online")
    version: str = wire_field("", wire="Version", config="version")
    vpc_identifier: str = wire_field("", wire="VpcIdentifier", config="vpc_identifier")
    vm_identifier: str = wire_field("", wire="VmIdentifier", config="vm_identifier")
    # Query filter only: "Active" matches online connectors, anything else offline ones
    status: str = ""

    def query_builder(self) -> QueryBuilder:
        query = QueryBuilder(self.QUERY_TABLE).equals_if("Name", self.name)
        if self.status:
            query.equals("Online", self.status == ConnectorStatus.ACTIVE.value)
        return (
            query.equals_if("Version", self.version)
            .equals_if("VpcIdentifier", self.vpc_identifier)
            .equals_if("VmIdentifier", self.vm_identifier)
        )

    def read(self) -> GenericMapResponse:
        """Populate the connector from its query row; there is no Get API for connectors"""
        self._require_id()
        row = query_vault_object(self._client, QueryBuilder(self.QUERY_TABLE).equals("ID", self.id).build())
        from_map(row, self)
        return GenericMapResponse(success=True, result=row)


__all__ = ["Connector"]
