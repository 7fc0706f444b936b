"""Compiled runtime configuration: writing, reading and exporting it."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Callable

from .model import Boot, BootType, ConfigError, Domain, TableIndex, default_boot
from .parser import domain_is_repeat, parse_boot, parse_index, parse_remote

ENV_CONFIG = "TVMCFG"
RUNCFG_TAG = b"TVMC"


@dataclass
class RuntimeConfig:
    """Everything a compiled configuration holds."""

    boot: Boot = field(default_factory=Boot)
    local: list[TableIndex] = field(default_factory=list)
    remote: list[TableIndex] = field(default_factory=list)
    domains: list[Domain] = field(default_factory=list)

    def to_bytes(self) -> bytes:
        """Serialise with the runtime tag in front."""
        payload = {
            "boot": asdict(self.boot),
            "local": [asdict(index) for index in self.local],
            "remote": [asdict(index) for index in self.remote],
            "domains": [asdict(domain) for domain in self.domains],
        }
        return RUNCFG_TAG + json.dumps(payload, ensure_ascii=False).encode("utf-8")

    @classmethod
    def from_bytes(cls, data: bytes) -> "RuntimeConfig":
        """Deserialise, checking the runtime tag."""
        if data[: len(RUNCFG_TAG)] != RUNCFG_TAG:
            raise ConfigError("boot configuration version mismatch")
        try:
            payload = json.loads(data[len(RUNCFG_TAG):].decode("utf-8"))
            boot_data = dict(payload["boot"])
            boot_data["boot_type"] = BootType(boot_data["boot_type"])
            return cls(
                boot=Boot(**boot_data),
                local=[TableIndex(**item) for item in payload.get("local", [])],
                remote=[TableIndex(**item) for item in payload.get("remote", [])],
                domains=[Domain(**item) for item in payload.get("domains", [])],
            )
        except (ValueError, KeyError, TypeError) as exc:
            raise ConfigError("corrupt runtime configuration") from exc


def config_path(path=None) -> Path:
    """Return ``path``, or the runtime configuration named by the environment."""
    if path is not None:
        return Path(path)
    env = os.environ.get(ENV_CONFIG)
    if not env:
        raise ConfigError(f"{ENV_CONFIG} is not set")
    return Path(env)


def _write(config: RuntimeConfig, path) -> Path:
    target = config_path(path)
    try:
        target.write_bytes(config.to_bytes())
    except OSError as exc:
        raise ConfigError(f"open ({target}) failure, {exc.strerror}") from exc
    return target


def write_default(path=None) -> RuntimeConfig:
    """Write the default boot parameters as the runtime configuration."""
    config = RuntimeConfig(boot=default_boot())
    _write(config, path)
    return config


def read_config(path=None) -> RuntimeConfig:
    """Read the whole compiled runtime configuration."""
    source = config_path(path)
    try:
        data = source.read_bytes()
    except OSError as exc:
        raise ConfigError(f"file not found: {source}") from exc
    return RuntimeConfig.from_bytes(data)


def read_boot(path=None) -> Boot:
    """Boot parameters from the runtime configuration."""
    return read_config(path).boot


def read_local_index(path=None) -> list[TableIndex]:
    """Local table indexes from the runtime configuration."""
    return read_config(path).local


def read_domain_index(path=None) -> list[TableIndex]:
    """Remote table indexes from the runtime configuration."""
    return read_config(path).remote


def read_domain_table(path=None) -> list[Domain]:
    """Domains serving remote tables, from the runtime configuration."""
    return read_config(path).domains


def make_config(source, target=None) -> RuntimeConfig:
    """Compile the text configuration ``source`` into the runtime configuration."""
    if not source or not str(source):
        raise ConfigError("The configuration file is not set")
    if not os.access(source, os.R_OK):
        raise ConfigError(f"Insufficient authority({source}), please confirm!!!")

    boot = parse_boot(source)
    config = RuntimeConfig(boot=boot)
    if boot.boot_type == BootType.CLUSTER:
        config.local = parse_index(source)
        config.remote, config.domains = parse_remote(source, boot)
        if domain_is_repeat(config.domains):
            raise ConfigError("domain or table repeated")
    _write(config, target)
    return config


def _render(config: RuntimeConfig) -> str:
    boot = config.boot
    parts = [
        "*GLOBLE\n",
        f'MACHINE="{boot.node}"\n',
        f"MAXTABLE={boot.max_table}\n",
        f"MAXFILED={boot.max_field}\n",
        f"MAXDOMAIN={boot.max_domain}\n",
        f"MAXSEQUE={boot.max_seque}\n",
        f"SERVER_EXEC={boot.boot_exec}\n",
        f"SERVER_PORT={boot.boot_port}\n",
        f'LOGNAME="{boot.log}"\n\n',
        "*LOCAL_RESOURCE\n",
    ]
    parts.extend(f"TABLE={index.table} PERMIT={index.permit}\n" for index in config.local)
    parts.append("\n*REMOTE_DOMAIN")
    for index in config.remote:
        parts.append(
            f'\nTABLE={index.table} TABLENAME="{index.table_name}" PART="{index.part}" '
        )
        serving = [
            domain
            for domain in config.domains
            if domain.table_name == index.table_name and domain.part == index.part
        ]
        if serving:
            first = serving[0]
            parts.append(
                f"GROUP={first.group} TIMEOUT={first.timeout} "
                f"MAXTRY={first.max_try} KEEPALIVE={first.keep_alive}\n"
            )
        parts.extend(
            f'\tDOMAINID="{domain.owner}" WSADDR="{domain.ip}:{domain.port}"\n'
            for domain in serving
        )
    return "".join(parts)


def unmake_config(target, source=None, confirm: Callable[[], bool] | None = None) -> bool:
    """Export the runtime configuration back to text in ``target``.

    When ``target`` already exists, ``confirm`` is asked whether to overwrite
    it; without ``confirm`` an existing file is left alone. Returns True when
    the file was written.
    """
    destination = Path(target)
    if destination.exists() and (confirm is None or not confirm()):
        return False
    text = _render(read_config(source))
    try:
        destination.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"open file error, {exc.strerror}") from exc
    return True