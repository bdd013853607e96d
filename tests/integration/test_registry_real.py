"""Integration tests for RealRegistry (Layer 2: Adapter Implementation Tests).

These tests verify the real registry implementation against an in-memory
stand-in for the winreg module. They cover the error translation and DWORD
handling without requiring Windows.
"""

import sys
from types import ModuleType

import pytest

from dpstctl.core.context import DpstContext
from dpstctl.core.controller import DISPLAY_CLASS_KEY, FEATURE_VALUE_NAME, run_operation
from dpstctl.core.errors import ConfigurationWriteError
from dpstctl.core.registry.abc import RegistryAccessError, RegistryNotFoundError
from dpstctl.core.registry.real import RealRegistry
from dpstctl.core.types import Operation
from tests.fakes.backup import FakeBackupWriter

REG_SZ = 1
REG_DWORD = 4

CLASS_SUBKEY = DISPLAY_CLASS_KEY.partition("\\")[2]


class _KeyHandle:
    def __init__(self, subkey: str) -> None:
        self.subkey = subkey

    def __enter__(self) -> "_KeyHandle":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None


def _fake_winreg(
    keys: dict[str, dict[str, tuple[object, int]]],
    *,
    denied: set[str] | None = None,
    set_value_error: OSError | None = None,
) -> ModuleType:
    """Build a winreg stand-in over HKEY_LOCAL_MACHINE subkey paths.

    Args:
        keys: Mapping of subkey path -> value name -> (data, registry type)
        denied: Subkey paths whose OpenKey raises PermissionError
        set_value_error: Exception raised by SetValueEx
    """
    denied = denied or set()
    module = ModuleType("winreg")
    module.HKEY_LOCAL_MACHINE = "HKLM"
    module.KEY_READ = 0x20019
    module.KEY_SET_VALUE = 0x0002
    module.REG_SZ = REG_SZ
    module.REG_DWORD = REG_DWORD
    module.set_calls = []

    def children(subkey: str) -> list[str]:
        prefix = subkey + "\\"
        return [
            path[len(prefix) :]
            for path in keys
            if path.startswith(prefix) and "\\" not in path[len(prefix) :]
        ]

    def find_value(handle: _KeyHandle, name: str) -> tuple[object, int]:
        for stored, entry in keys[handle.subkey].items():
            if stored.casefold() == name.casefold():
                return entry
        raise FileNotFoundError(2, "The system cannot find the file specified")

    def open_key(hive: str, subkey: str, reserved: int, access: int) -> _KeyHandle:
        assert hive == "HKLM"
        if subkey in denied:
            raise PermissionError(5, "Access is denied")
        if subkey not in keys:
            raise FileNotFoundError(2, "The system cannot find the file specified")
        return _KeyHandle(subkey)

    def query_info_key(handle: _KeyHandle) -> tuple[int, int, int]:
        return len(children(handle.subkey)), len(keys[handle.subkey]), 0

    def enum_key(handle: _KeyHandle, index: int) -> str:
        return children(handle.subkey)[index]

    def enum_value(handle: _KeyHandle, index: int) -> tuple[str, object, int]:
        name = list(keys[handle.subkey])[index]
        data, value_type = keys[handle.subkey][name]
        return name, data, value_type

    def query_value_ex(handle: _KeyHandle, name: str) -> tuple[object, int]:
        return find_value(handle, name)

    def set_value_ex(
        handle: _KeyHandle, name: str, reserved: int, value_type: int, data: int
    ) -> None:
        if set_value_error is not None:
            raise set_value_error
        module.set_calls.append((handle.subkey, name, value_type, data))
        keys[handle.subkey][name] = (data, value_type)

    module.OpenKey = open_key
    module.QueryInfoKey = query_info_key
    module.EnumKey = enum_key
    module.EnumValue = enum_value
    module.QueryValueEx = query_value_ex
    module.SetValueEx = set_value_ex
    return module


def _install(monkeypatch: pytest.MonkeyPatch, module: ModuleType) -> ModuleType:
    monkeypatch.setitem(sys.modules, "winreg", module)
    return module


def _adapter_keys() -> dict[str, dict[str, tuple[object, int]]]:
    return {
        CLASS_SUBKEY: {},
        CLASS_SUBKEY + "\\0000": {"DriverDesc": ("Intel(R) UHD Graphics", REG_SZ)},
        CLASS_SUBKEY + "\\0001": {
            "DriverDesc": ("Intel(R) Iris(R) Xe Graphics", REG_SZ),
            FEATURE_VALUE_NAME: (0x9240, REG_DWORD),
        },
        CLASS_SUBKEY + "\\Properties": {},
    }


def test_list_subkeys_enumerates_direct_children(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _fake_winreg(_adapter_keys()))

    assert RealRegistry().list_subkeys(DISPLAY_CLASS_KEY) == ["0000", "0001", "Properties"]


def test_list_value_names_enumerates_values(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _fake_winreg(_adapter_keys()))

    names = RealRegistry().list_value_names(DISPLAY_CLASS_KEY + "\\0001")

    assert names == ["DriverDesc", FEATURE_VALUE_NAME]


def test_short_hive_name_is_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _fake_winreg(_adapter_keys()))

    value = RealRegistry().read_dword("HKLM\\" + CLASS_SUBKEY + "\\0001", FEATURE_VALUE_NAME)

    assert value == 0x9240


def test_missing_key_raises_not_found(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _fake_winreg(_adapter_keys()))

    with pytest.raises(RegistryNotFoundError):
        RealRegistry().list_subkeys(DISPLAY_CLASS_KEY + "\\0009")


def test_missing_value_raises_not_found(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _fake_winreg(_adapter_keys()))

    with pytest.raises(RegistryNotFoundError):
        RealRegistry().read_dword(DISPLAY_CLASS_KEY + "\\0000", FEATURE_VALUE_NAME)


def test_denied_key_raises_access_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _fake_winreg(_adapter_keys(), denied={CLASS_SUBKEY + "\\0000"}))

    with pytest.raises(RegistryAccessError, match="Access is denied"):
        RealRegistry().list_value_names(DISPLAY_CLASS_KEY + "\\0000")


def test_non_dword_value_raises_access_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _fake_winreg(_adapter_keys()))

    with pytest.raises(RegistryAccessError, match="not a REG_DWORD"):
        RealRegistry().read_dword(DISPLAY_CLASS_KEY + "\\0001", "DriverDesc")


def test_read_dword_is_masked_to_32_bits(monkeypatch: pytest.MonkeyPatch) -> None:
    keys = _adapter_keys()
    keys[CLASS_SUBKEY + "\\0001"][FEATURE_VALUE_NAME] = (0x1_0000_9250, REG_DWORD)
    _install(monkeypatch, _fake_winreg(keys))

    value = RealRegistry().read_dword(DISPLAY_CLASS_KEY + "\\0001", FEATURE_VALUE_NAME)

    assert value == 0x9250


def test_write_dword_sets_masked_dword(monkeypatch: pytest.MonkeyPatch) -> None:
    winreg = _install(monkeypatch, _fake_winreg(_adapter_keys()))

    RealRegistry().write_dword(DISPLAY_CLASS_KEY + "\\0001", FEATURE_VALUE_NAME, 0x1_0000_9250)

    assert winreg.set_calls == [(CLASS_SUBKEY + "\\0001", FEATURE_VALUE_NAME, REG_DWORD, 0x9250)]


def test_write_permission_error_raises_access_error(monkeypatch: pytest.MonkeyPatch) -> None:
    error = PermissionError(5, "Access is denied")
    _install(monkeypatch, _fake_winreg(_adapter_keys(), set_value_error=error))

    with pytest.raises(RegistryAccessError, match="Access is denied"):
        RealRegistry().write_dword(DISPLAY_CLASS_KEY + "\\0001", FEATURE_VALUE_NAME, 0x9250)


def test_disable_reports_write_failure_from_real_registry(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    error = PermissionError(5, "Access is denied")
    _install(monkeypatch, _fake_winreg(_adapter_keys(), set_value_error=error))
    backups = FakeBackupWriter()
    ctx = DpstContext.for_test(registry=RealRegistry(), backup_writer=backups)

    with pytest.raises(ConfigurationWriteError) as exc_info:
        run_operation(ctx, Operation.DISABLE)

    assert exc_info.value.exit_code == 5
    assert [record.prior_value for record in backups.records] == [0x9240]


def test_locates_differently_cased_value_name(monkeypatch: pytest.MonkeyPatch) -> None:
    keys = _adapter_keys()
    keys[CLASS_SUBKEY + "\\0001"] = {"featuretestcontrol": (0x9240, REG_DWORD)}
    _install(monkeypatch, _fake_winreg(keys))
    ctx = DpstContext.for_test(registry=RealRegistry())

    result = run_operation(ctx, Operation.STATUS)

    assert result.entry.path == DISPLAY_CLASS_KEY + "\\0001"
    assert result.feature_enabled is True
