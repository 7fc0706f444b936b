# stvmconf

Tools for the boot configuration of an in-memory table store. A plain-text
configuration file is parsed and checked, then compiled into a runtime
configuration file; a compiled file can be read back or exported as text
again.

## The text format

The file is made of sections, each opened by a line starting with `*`:

```
*GLOBLE
MACHINE="STVM"
MAXTABLE=255
MAXFILED=3000
MAXDOMAIN=1024
MAXSEQUE=1024
SERVER_EXEC=4
SERVER_PORT=2000
DEPLOY="cluster"
LOGNAME="stvm.log"

*LOCAL_RESOURCE
TABLE=20 PERMIT=15

*REMOTE_DOMAIN
DOMAINID="NODE2" WSADDR="127.0.0.1:5050" GROUP=1 TIMEOUT=2 MAXTRY=3 KEEPALIVE=30

*REMOTE_TABLE
TABLE=20 TABLENAME="TBL_USER_INFO" PART="NODE2"
	DOMAINID="NODE2"
```

Blank lines and lines starting with `#`, `＃`, `//`, `/*` or `--` are
ignored. `MACHINE` is required; parameters left out get defaults (for
example `MAXTABLE` 255, `MAXDOMAIN` and `MAXSEQUE` 500, `SERVER_EXEC` the
number of processors, `SERVER_PORT` 5050). `DEPLOY` may be `cluster`,
`local` or anything else for a simple deployment. Only a cluster
configuration carries the local-resource, remote-domain and remote-table
sections into the compiled file.

Out-of-range values, unknown parameters, a `*REMOTE_TABLE` line naming an
undeclared domain, and two domains serving the same table from the same
address are reported as `stvmconf.model.ConfigError`.

## Use from Python

```python
from stvmconf.parser import parse_boot
from stvmconf.store import make_config, read_config

boot = parse_boot("stvm.conf")
print(boot.node, boot.max_table, boot.boot_type)

make_config("stvm.conf", "stvm.cfg")
runtime = read_config("stvm.cfg")
print(runtime.boot, runtime.local, runtime.remote, runtime.domains)
```

- `stvmconf.model` holds the data types `Boot`, `BootType`, `TableIndex`
  and `Domain`, the `ConfigError` exception and `default_boot()`.
- `stvmconf.parser` gives the individual steps: `parse_field`,
  `read_section`, `parse_boot`, `parse_index`, `parse_resources`,
  `parse_table`, `parse_domain`, `parse_remote`, `find_resource` and
  `domain_is_repeat`.
- `stvmconf.store` writes and reads the compiled file through
  `RuntimeConfig`: `make_config`, `write_default`, `read_config`,
  `read_boot`, `read_local_index`, `read_domain_index`,
  `read_domain_table` and `unmake_config`, which writes a compiled
  configuration back out as text (asking a `confirm` callable before
  overwriting an existing file).

The compiled file is the tag `TVMC` followed by the configuration as
UTF-8 JSON. Where no path is given, it is looked up through the `TVMCFG`
environment variable.

## Command line

```
stvmconf [--config RUNTIME_FILE] compile SOURCE     # compile a text configuration
stvmconf [--config RUNTIME_FILE] export TARGET [-y] # write the runtime file back as text
stvmconf [--config RUNTIME_FILE] default            # write the default runtime file
stvmconf [--config RUNTIME_FILE] show               # print the boot parameters
```

Without `--config`, the runtime file named by `TVMCFG` is used. `export`
asks before overwriting an existing target unless `-y` is given. The exit
status is 1 when the configuration is missing or invalid.

## What it does not do

This package only handles the configuration. It does not start or run the
table store, hold tables or queues, or connect to the remote domains that a
configuration names.

## Tests

```
pip install .[test]
pytest
```