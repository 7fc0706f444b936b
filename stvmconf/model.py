"""Data types describing the boot parameters, table indexes and remote domains."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import IntEnum

SYS_TVM_INDEX = 0
MAX_TABLE = 255
DEFAULT_LISTEN_PORT = 5050
PERMIT_NONE = 0
PERMIT_DEFAULT = 15
RESOURCE_INIT = 0


class BootType(IntEnum):
    """How the engine is deployed."""

    SIMPLE = 0
    LOCAL = 1
    CLUSTER = 2


class ConfigError(Exception):
    """Raised when a configuration file is missing or malformed."""


def cpu_count() -> int:
    """Number of processors, never less than one."""
    return os.cpu_count() or 1


@dataclass
class Boot:
    """Global boot parameters."""

    node: str = ""
    log: str = ""
    boot_type: BootType = BootType.SIMPLE
    max_table: int = 0
    max_field: int = 0
    max_domain: int = 0
    max_seque: int = 0
    boot_exec: int = 0
    boot_port: int = 0


@dataclass
class TableIndex:
    """A table known to this node, local or served by a remote domain."""

    table: int = 0
    table_name: str = ""
    part: str = ""
    owner: str = ""
    permit: int = PERMIT_NONE
    remote: bool = False
    updated: str = ""


@dataclass
class Domain:
    """A remote domain, optionally bound to a table it serves."""

    owner: str = ""
    ip: str = ""
    port: int = 0
    group: int = 0
    timeout: int = 0
    max_try: int = 0
    keep_alive: int = 0
    table: int = 0
    mtable: int = 0
    table_name: str = ""
    part: str = ""
    status: int = RESOURCE_INIT
    last_time: int = 0


def default_boot() -> Boot:
    """Boot parameters used when no configuration has been compiled."""
    return Boot(
        node="STVM",
        log="stvm.log",
        boot_type=BootType.SIMPLE,
        max_table=255,
        max_field=3000,
        max_domain=1024,
        max_seque=1024,
        boot_exec=cpu_count(),
        boot_port=2000,
    )