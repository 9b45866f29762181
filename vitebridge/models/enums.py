from enum import Enum


class DevServerState(str, Enum):
    UNINITIALIZED = "uninitialized"
    CONFIG_PROBED = "config_probed"
    ACTIVE = "active"
    INACTIVE = "inactive"
