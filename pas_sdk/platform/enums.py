"""
Platform Enums

Values the PAS API expects for resource sub-kinds.
"""

from enum import Enum


class SecretType(str, Enum):
    """Secret content types"""
    TEXT = "Text"
    FILE = "File"


class SetType(str, Enum):
    """Object types a manual set can contain"""
    SECRET = "DataVault"
    SYSTEM = "Server"
    ACCOUNT = "VaultAccount"
    DATABASE = "VaultDatabase"
    DOMAIN = "VaultDomain"
    SERVICE = "Subscriptions"
    SSH_KEY = "SshKeys"


class ComputerClass(str, Enum):
    """System classes"""
    WINDOWS = "Windows"
    UNIX = "Unix"
    CISCO_IOS = "CiscoIOS"
    CISCO_NXOS = "CiscoNXOS"
    JUNIPER_JUNOS = "JuniperJunos"
    HP_NONSTOP = "HPNonStopOS"
    IBM_I = "IBMi"
    CHECKPOINT_GAIA = "CheckPointGaia"
    PALOALTO_PANOS = "PaloAltoNetworksPANOS"
    F5_BIGIP = "F5NetworksBIGIP"
    VMWARE_VMKERNEL = "VMwareVMkernel"
    GENERIC_SSH = "GenericSsh"
    CUSTOM_SSH = "CustomSsh"


class ConnectorStatus(str, Enum):
    """Connector online status used in queries"""
    ACTIVE = "Active"
    INACTIVE = "Inactive"
