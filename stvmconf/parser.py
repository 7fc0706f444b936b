"""Parsing of the plain-text engine configuration file."""

from __future__ import annotations

import re
import warnings
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from .model import (
    DEFAULT_LISTEN_PORT,
    MAX_TABLE,
    PERMIT_DEFAULT,
    PERMIT_NONE,
    RESOURCE_INIT,
    SYS_TVM_INDEX,
    Boot,
    BootType,
    ConfigError,
    Domain,
    TableIndex,
    cpu_count,
)

_COMMENT_PREFIXES = ("#", "//", "/*", "＃", "--")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atol(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _unquote(text: str) -> str:
    first = text.find('"')
    if first < 0:
        return text
    last = text.rfind('"')
    return text[first + 1:last] if last > first else text[first + 1:]


def _fields(line: str) -> list[str]:
    return line.replace("\t", " ").split()


def parse_field(text: str) -> tuple[str, str]:
    """Split ``KEY=value`` into its key and its unquoted value."""
    if "=" not in text:
        raise ConfigError(f"{text}\n*may be lost '='")
    parts = text.split("=")
    target = parts[0].rstrip()
    value = _unquote(parts[1].lstrip())
    if not value:
        raise ConfigError(f"{text}\n*config error, The initial value is not set")
    return target, value


def read_section(path, target: str) -> list[str]:
    """Return the non-comment lines of the section headed by ``target``."""
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as handle:
            raw_lines = handle.read().splitlines()
    except OSError as exc:
        raise ConfigError(f"file not found: {path}") from exc

    lines: list[str] = []
    inside = False
    for raw in raw_lines:
        line = raw.strip()
        if not line or line.startswith(_COMMENT_PREFIXES):
            continue
        if not inside:
            if line == target:
                inside = True
            continue
        if line.startswith("*"):
            break
        lines.append(line)
    return lines


def parse_boot(path) -> Boot:
    """Parse the ``*GLOBLE`` section into boot parameters."""
    boot = Boot()
    for line in read_section(path, "*GLOBLE"):
        key, value = parse_field(line)
        key = key.upper()
        if key == "MACHINE":
            boot.node = value
        elif key == "LOGNAME":
            boot.log = value
        elif key == "DEPLOY":
            lowered = value.lower()
            if lowered == "cluster":
                boot.boot_type = BootType.CLUSTER
            elif lowered == "local":
                boot.boot_type = BootType.LOCAL
            else:
                boot.boot_type = BootType.SIMPLE
        elif key == "MAXTABLE":
            boot.max_table = _atol(value)
            if boot.max_table <= 5:
                warnings.warn(f"{line}\n*Set STVM maximum support table number error")
            elif boot.max_table > 255:
                raise ConfigError(f"{line}\n*STVM maximum support table 255")
        elif key == "MAXFILED":
            boot.max_field = _atol(value)
            if boot.max_field <= 100:
                raise ConfigError(f"{line}\n*Set the number of STVM field details error")
        elif key == "MAXDOMAIN":
            boot.max_domain = _atol(value)
            if boot.max_domain <= 0:
                raise ConfigError(f"{line}\n*Error in setting maximum number of domain")
        elif key == "MAXSEQUE":
            boot.max_seque = _atol(value)
            if boot.max_seque <= 0:
                raise ConfigError(f"{line}\n*Error in setting maximum number of sequences")
        elif key == "SERVER_EXEC":
            boot.boot_exec = _atol(value)
            if boot.boot_exec <= 0:
                raise ConfigError(f"{line}\n*LIS.tvm: startup number set error")
        elif key == "SERVER_PORT":
            boot.boot_port = _atol(value)
            if boot.boot_port <= 0:
                raise ConfigError(f"{line}\n*LIS.tvm: Error starting port setting")
        else:
            raise ConfigError(f"{line}\n*Invalid parameter")

    if not boot.node:
        raise ConfigError("MACHINE\n*The local node is not set")

    if boot.max_table <= 0:
        boot.max_table = MAX_TABLE
    if boot.max_field <= 0:
        boot.max_field = 3000
    if boot.max_domain <= 0:
        boot.max_domain = 500
    if boot.max_seque <= 0:
        boot.max_seque = 500
    if boot.boot_exec <= 0:
        boot.boot_exec = cpu_count()
    if boot.boot_port <= 0:
        boot.boot_port = DEFAULT_LISTEN_PORT
    return boot


def parse_index(path) -> list[TableIndex]:
    """Parse the ``*LOCAL_RESOURCE`` section into local table indexes."""
    indexes: list[TableIndex] = []
    for line in read_section(path, "*LOCAL_RESOURCE"):
        fields = _fields(line)
        if not fields:
            continue
        index = TableIndex()
        for field in fields:
            key, value = parse_field(field)
            key = key.upper()
            if key == "TABLE":
                index.table = _atol(value)
            elif key == "PERMIT":
                index.permit = _atol(value)
            else:
                raise ConfigError(f"{line}\n*Invalid parameter")
        if index.table <= 0:
            raise ConfigError(f"{line}\n*Table setting error")
        if index.permit <= 0:
            index.permit = PERMIT_DEFAULT
        indexes.append(index)
    return indexes


def parse_resources(path) -> list[Domain]:
    """Parse the ``*REMOTE_DOMAIN`` section into remote domains."""
    domains: list[Domain] = []
    for line in read_section(path, "*REMOTE_DOMAIN"):
        fields = _fields(line)
        if not fields:
            continue
        domain = Domain()
        for field in fields:
            key, value = parse_field(field)
            key = key.upper()
            if key == "DOMAINID":
                domain.owner = value
            elif key == "GROUP":
                domain.group = _atol(value)
            elif key == "WSADDR":
                host, _, port = value.partition(":")
                domain.ip = host
                domain.port = _atol(port.split(":")[0])
            elif key == "TIMEOUT":
                domain.timeout = _atol(value)
            elif key == "MAXTRY":
                domain.max_try = _atol(value)
            elif key == "KEEPALIVE":
                domain.keep_alive = _atol(value)

        if not domain.owner:
            raise ConfigError(f"{line}\n*The domain name is not set")
        if not domain.ip:
            raise ConfigError(f"{line}\n*The domain address is not set")
        if domain.port <= 0:
            raise ConfigError(f"{line}\n*The domain port is set incorrectly or unset")

        domain.group = domain.group if domain.group > 0 else 1
        domain.timeout = domain.timeout if domain.timeout > 0 else 2
        domain.max_try = domain.max_try if domain.max_try > 0 else 3
        domain.keep_alive = domain.keep_alive if domain.keep_alive > 0 else 30
        domains.append(domain)
    return domains


def find_resource(domains, owner: str) -> Domain | None:
    """Return the first domain owned by ``owner``, or None."""
    return next((domain for domain in domains if domain.owner == owner), None)


def parse_table(node: str, line: str) -> TableIndex:
    """Parse a remote ``TABLE=`` line into a table index owned by ``node``."""
    index = TableIndex()
    for field in _fields(line):
        key, value = parse_field(field)
        key = key.upper()
        if key == "TABLE":
            index.table = _atol(value)
        elif key == "TABLENAME":
            index.table_name = value
        elif key == "PART":
            index.part = value
    if not index.part:
        index.part = node
    index.owner = node
    index.remote = True
    index.permit = PERMIT_NONE
    index.updated = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    return index


def parse_domain(line: str, index: TableIndex | None, resource: Domain) -> Domain:
    """Parse a ``DOMAINID=`` line binding ``resource`` to the table ``index``."""
    if index is None:
        raise ConfigError(f"{line}\n*DOMAINID appears before any TABLE")
    domain = Domain()
    for field in _fields(line):
        key, value = parse_field(field)
        key = key.upper()
        if key == "MTABLE":
            domain.mtable = _atol(value)
        elif key == "DOMAINID":
            domain.owner = value
        else:
            raise ConfigError(f"{line}\n*Invalid parameter")

    return replace(
        domain,
        owner=resource.owner,
        ip=resource.ip,
        port=resource.port,
        group=resource.group,
        timeout=resource.timeout,
        max_try=resource.max_try,
        keep_alive=resource.keep_alive,
        table=index.table,
        table_name=index.table_name,
        part=resource.owner,
        status=RESOURCE_INIT,
        last_time=0,
    )


def _domain_reference(text: str) -> str:
    segment = text.split("=")[1].strip() if "=" in text else ""
    if segment.startswith('"'):
        end = segment.find('"', 1)
        return segment[1:end] if end > 0 else segment[1:]
    return segment.split()[0] if segment else ""


def parse_remote(path, boot: Boot) -> tuple[list[TableIndex], list[Domain]]:
    """Parse the remote tables and the domains that serve them."""
    resources = parse_resources(path)
    lines = read_section(path, "*REMOTE_TABLE")

    if not lines:
        for resource in resources:
            resource.table = SYS_TVM_INDEX
            resource.mtable = SYS_TVM_INDEX
            resource.table_name = "SYS_TVM_INDEX"
            resource.part = resource.owner
        return [], resources

    indexes: list[TableIndex] = []
    domains: list[Domain] = []
    current: TableIndex | None = None
    for raw in lines:
        line = raw.replace("\t", " ")
        if line.startswith("TABLE"):
            current = parse_table(boot.node, line)
            indexes.append(current)
            continue

        position = line.find("DOMAINID")
        if position < 0:
            raise ConfigError(f"set error:{line}")
        owner = _domain_reference(line[position:])
        resource = find_resource(resources, owner)
        if resource is None:
            raise ConfigError(f"No domain ({owner}) is found")
        domains.append(parse_domain(line, current, resource))
    return indexes, domains


def domain_is_repeat(domains) -> bool:
    """True when two domains share address, port, partition and table name."""
    seen = set()
    for domain in domains:
        key = (domain.port, domain.ip, domain.part, domain.table_name)
        if key in seen:
            return True
        seen.add(key)
    return False