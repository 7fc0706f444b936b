import dataclasses

import pytest

from stvmconf.model import (
    Boot,
    BootType,
    ConfigError,
    Domain,
    RESOURCE_INIT,
    TableIndex,
    default_boot,
)


def test_default_boot_values():
    boot = default_boot()
    assert boot.node == "STVM"
    assert boot.log == "stvm.log"
    assert boot.max_table == 255
    assert boot.max_field == 3000
    assert boot.max_domain == 1024
    assert boot.max_seque == 1024
    assert boot.boot_port == 2000
    assert boot.boot_type is BootType.SIMPLE


def test_default_boot_exec_positive():
    assert default_boot().boot_exec >= 1


def test_default_boot_returns_fresh_objects():
    first = default_boot()
    first.node = "OTHER"
    assert default_boot().node == "STVM"


def test_empty_boot_is_zeroed():
    boot = Boot()
    assert boot.node == ""
    assert (boot.max_table, boot.max_field, boot.boot_port) == (0, 0, 0)


@pytest.mark.parametrize("boot_type", [BootType.LOCAL, BootType.CLUSTER])
def test_boot_keeps_chosen_type(boot_type):
    boot = Boot(boot_type=boot_type)
    assert boot.boot_type is boot_type
    assert boot.boot_type is not default_boot().boot_type


def test_config_error_carries_message():
    error = ConfigError("broken")
    assert isinstance(error, Exception)
    assert str(error) == "broken"


def test_table_index_replace_round_trip():
    index = TableIndex(table=20, table_name="TBL_USER_INFO", part="P1")
    changed = dataclasses.replace(index, part="P2")
    assert changed.part == "P2"
    assert dataclasses.replace(changed, part="P1") == index


def test_domain_defaults_to_initial_status():
    domain = Domain(owner="DBS", ip="127.0.0.1", port=5050)
    assert domain.status == RESOURCE_INIT
    assert domain.last_time == 0