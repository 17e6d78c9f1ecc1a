import asyncio
import json
import os

import pytest

import config
from dotnet_cli import (
    CommandFailedError,
    DotNetInfo,
    OperationCancelledError,
    RuntimeInfo,
    SdkInfo,
    SdkVersionCheck,
    SpawnFailedError,
    select_latest_sdk,
)
from tools import (
    CheckSdkVersionTool,
    DotNetInfoTool,
    EffectiveSdkTool,
    LatestSdkTool,
    ListRuntimesTool,
    ListSdksTool,
    create_tools,
)

SDKS = [
    SdkInfo(version="8.0.100", path="/usr/share/dotnet/sdk"),
    SdkInfo(version="9.0.302", path="/usr/share/dotnet/sdk"),
]


class FakeService:
    executable = "dotnet"

    def __init__(self, sdks=None, error=None):
        self.sdks = SDKS if sdks is None else sdks
        self.error = error
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if self.error is not None:
            raise self.error

    async def list_installed_sdks(self, *, cancel_event=None):
        self._record("list_installed_sdks")
        return list(self.sdks)

    async def get_latest_sdk(self, *, sdks=None, cancel_event=None):
        self._record("get_latest_sdk")
        return select_latest_sdk(self.sdks if sdks is None else sdks)

    async def list_installed_runtimes(self, *, cancel_event=None):
        self._record("list_installed_runtimes")
        return [RuntimeInfo(name="Microsoft.NETCore.App", version="9.0.7", path="/usr/share/dotnet/shared")]

    async def get_dotnet_info(self, *, cancel_event=None):
        self._record("get_dotnet_info")
        return DotNetInfo(
            sdk_version="9.0.302",
            runtime_version="9.0.7",
            os_version="ubuntu",
            architecture="x64",
            raw_output=".NET SDK:\n Version: 9.0.302\n",
        )

    async def get_effective_sdk_version(self, working_directory=None, *, cancel_event=None):
        self._record("get_effective_sdk_version", working_directory)
        return "8.0.100"

    async def check_sdk_version(self, version, *, cancel_event=None):
        self._record("check_sdk_version", version)
        return SdkVersionCheck(
            requested_version=version,
            is_installed=version == "8.0.100",
            closest_matches=[sdk for sdk in self.sdks if sdk.version.startswith(version.split(".")[0])],
        )


def _envelope(result):
    assert len(result) == 1
    return json.loads(result[0].text)


def _payload(result):
    envelope = _envelope(result)
    assert envelope["status"] == "success", envelope
    assert envelope["content_type"] == "json"
    return json.loads(envelope["content"])


@pytest.mark.asyncio
async def test_list_sdks_tool_returns_count_and_entries():
    tool = ListSdksTool(FakeService())

    payload = _payload(await tool.execute({}))

    assert payload["count"] == 2
    assert payload["sdks"][1] == {"version": "9.0.302", "path": "/usr/share/dotnet/sdk"}


@pytest.mark.asyncio
async def test_list_runtimes_tool_returns_count_and_entries():
    tool = ListRuntimesTool(FakeService())

    payload = _payload(await tool.execute(None))

    assert payload["count"] == 1
    assert payload["runtimes"][0]["name"] == "Microsoft.NETCore.App"


@pytest.mark.asyncio
async def test_dotnet_info_tool_omits_raw_output_by_default():
    tool = DotNetInfoTool(FakeService())

    payload = _payload(await tool.execute({}))

    assert payload == {
        "sdk_version": "9.0.302",
        "runtime_version": "9.0.7",
        "os_version": "ubuntu",
        "architecture": "x64",
    }


@pytest.mark.asyncio
async def test_dotnet_info_tool_includes_raw_output_on_request():
    tool = DotNetInfoTool(FakeService())

    payload = _payload(await tool.execute({"include_raw_output": True}))

    assert payload["raw_output"].startswith(".NET SDK:")


@pytest.mark.asyncio
async def test_effective_sdk_tool_passes_working_directory(tmp_path):
    service = FakeService()
    tool = EffectiveSdkTool(service)

    payload = _payload(await tool.execute({"working_directory": str(tmp_path)}))

    assert service.calls == [("get_effective_sdk_version", str(tmp_path))]
    assert payload["effective_version"] == "8.0.100"
    assert payload["working_directory"] == str(tmp_path)
    assert "global.json" in payload["note"]


@pytest.mark.asyncio
async def test_effective_sdk_tool_blank_directory_uses_cwd():
    service = FakeService()
    tool = EffectiveSdkTool(service)

    payload = _payload(await tool.execute({"working_directory": "   "}))

    assert service.calls == [("get_effective_sdk_version", None)]
    assert payload["working_directory"] == os.getcwd()


@pytest.mark.asyncio
async def test_check_sdk_tool_reports_installation():
    tool = CheckSdkVersionTool(FakeService())

    payload = _payload(await tool.execute({"version": " 8.0.100 "}))

    assert payload["requested_version"] == "8.0.100"
    assert payload["is_installed"] is True
    assert [sdk["version"] for sdk in payload["closest_matches"]] == ["8.0.100"]


@pytest.mark.asyncio
async def test_check_sdk_tool_accepts_numeric_version():
    service = FakeService()
    tool = CheckSdkVersionTool(service)

    payload = _payload(await tool.execute({"version": 9.0}))

    assert service.calls == [("check_sdk_version", "9.0")]
    assert payload["is_installed"] is False


@pytest.mark.asyncio
async def test_check_sdk_tool_requires_version():
    service = FakeService()
    tool = CheckSdkVersionTool(service)

    envelope = _envelope(await tool.execute({}))

    assert envelope["status"] == "error"
    assert envelope["metadata"]["error_type"] == "invalid_request"
    assert service.calls == []


@pytest.mark.asyncio
async def test_latest_sdk_tool_reports_latest_and_total():
    service = FakeService()
    tool = LatestSdkTool(service)

    payload = _payload(await tool.execute({}))

    assert payload == {"latest_version": "9.0.302", "path": "/usr/share/dotnet/sdk", "total_sdks_installed": 2}
    assert service.calls == [("list_installed_sdks",), ("get_latest_sdk",)]


@pytest.mark.asyncio
async def test_latest_sdk_tool_without_sdks_is_not_found():
    tool = LatestSdkTool(FakeService(sdks=[]))

    envelope = _envelope(await tool.execute({}))

    assert envelope["status"] == "error"
    assert envelope["content"] == "No SDKs installed"
    assert envelope["metadata"]["error_type"] == "not_found"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, error_type",
    [
        (SpawnFailedError("Failed to start 'dotnet --list-sdks'", command=["dotnet", "--list-sdks"]), "spawn_failed"),
        (
            CommandFailedError("exited with status 1", command=["dotnet"], returncode=1, stderr="boom\n"),
            "command_failed",
        ),
        (OperationCancelledError("cancelled", command=["dotnet"]), "cancelled"),
    ],
)
async def test_cli_failures_become_error_envelopes(error, error_type):
    tool = ListSdksTool(FakeService(error=error))

    envelope = _envelope(await tool.execute({}))

    assert envelope["status"] == "error"
    assert envelope["content"] == str(error)
    assert envelope["metadata"]["error_type"] == error_type
    assert envelope["metadata"]["tool"] == "list_installed_sdks"
    if error_type == "command_failed":
        assert envelope["metadata"]["return_code"] == 1
        assert envelope["metadata"]["stderr"] == "boom"


@pytest.mark.asyncio
async def test_unexpected_errors_become_internal_errors():
    tool = ListRuntimesTool(FakeService(error=KeyError("surprise")))

    envelope = _envelope(await tool.execute({}))

    assert envelope["status"] == "error"
    assert envelope["metadata"]["error_type"] == "internal_error"


@pytest.mark.asyncio
async def test_tool_timeout_reports_error(monkeypatch):
    class SlowService(FakeService):
        async def list_installed_sdks(self, *, cancel_event=None):
            await asyncio.sleep(5)
            return []

    monkeypatch.setattr(config, "DOTNET_COMMAND_TIMEOUT", 0.05)
    tool = ListSdksTool(SlowService())

    envelope = _envelope(await tool.execute({}))

    assert envelope["status"] == "error"
    assert envelope["metadata"]["error_type"] == "timeout"


def test_zero_timeout_disables_adapter_timeout(monkeypatch):
    monkeypatch.setattr(config, "DOTNET_COMMAND_TIMEOUT", 0)

    assert ListSdksTool(FakeService()).get_timeout() is None


def test_input_schemas_are_closed_objects():
    tools = create_tools(FakeService())

    for tool in tools.values():
        schema = tool.get_input_schema()
        assert schema["type"] == "object"
        assert schema["additionalProperties"] is False

    assert tools["check_sdk_version"].get_input_schema()["required"] == ["version"]
    assert tools["get_effective_sdk"].get_input_schema()["required"] == []


def test_create_tools_can_exclude_effective_sdk():
    service = FakeService()

    assert list(create_tools(service)) == [
        "list_installed_sdks",
        "list_installed_runtimes",
        "get_dotnet_info",
        "get_effective_sdk",
        "check_sdk_version",
        "get_latest_sdk",
    ]
    assert "get_effective_sdk" not in create_tools(service, include_effective_sdk=False)


def test_tools_are_annotated_read_only():
    annotations = ListSdksTool(FakeService()).get_annotations()

    assert annotations["readOnlyHint"] is True
    assert annotations["openWorldHint"] is False
