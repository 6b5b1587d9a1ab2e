# tests/test_bridge_api.py
import asyncio

import pytest
from pydantic import ValidationError

from medibridge.bridge import registry
from medibridge.bridge.api import BridgeApi, ReadySignal, build_bridge_api
from medibridge.bridge.message_handler import handle_bridge_message, reply_origin
from medibridge.bridge.protocol import OPERATION_SPECS, BridgePathError

TRUSTED = "http://localhost:8765"


def _call(path, args=(), request_id="mediBridge-1-abc"):
    return {
        "source": "mediBridge",
        "type": "bridge-call",
        "requestId": request_id,
        "path": list(path),
        "args": list(args),
    }


def _handle(api, data, origin=TRUSTED):
    return asyncio.run(handle_bridge_message(api, data, origin=origin, allowed_origins=[TRUSTED]))


@pytest.fixture
def api(database):
    return build_bridge_api(database)


def test_registry_covers_the_operation_catalog():
    assert set(registry.REGISTRY) == {spec.name for spec in OPERATION_SPECS}


def test_surface_uses_python_attribute_names(api):
    assert set(api.namespaces) == {
        "setup", "modules", "patients", "appointments", "prescriptions",
        "billing", "inventory", "analytics", "collaboration", "medical_certificates",
    }
    assert callable(api.medical_certificates.add)
    assert callable(api.billing.record_payment)
    assert callable(api.setup.is_complete)
    assert api.resolve(["medicalCertificates", "list"]) is api.medical_certificates.list
    assert api.operation("billing.recordPayment") is api.billing.record_payment


def test_surface_is_read_only(api):
    with pytest.raises(AttributeError):
        api.patients = None
    with pytest.raises(AttributeError):
        api.patients.list = None
    with pytest.raises(AttributeError):
        api.patients.remove


def test_in_process_calls_reach_the_database(api):
    async def scenario():
        created = await api.patients.add({"fullName": "Kumari Dissanayake"})
        return created, await api.patients.list()

    created, patients = asyncio.run(scenario())

    assert created == {"id": 1}
    assert patients[0]["fullName"] == "Kumari Dissanayake"


def test_in_process_call_validates_payload(api):
    with pytest.raises(ValidationError):
        asyncio.run(api.patients.add({"nic": "no name"}))


def test_unknown_operation_is_rejected(db):
    with pytest.raises(registry.UnknownOperationError, match="Unknown bridge operation: patients.delete"):
        registry.invoke("patients.delete", db)


def test_write_operation_requires_payload(db):
    with pytest.raises(ValueError, match="requires a payload"):
        registry.invoke("patients.add", db)


def test_resolve_errors(api):
    with pytest.raises(BridgePathError, match="Unknown bridge path: patients.delete"):
        api.resolve(["patients", "delete"])
    with pytest.raises(BridgePathError, match="not callable"):
        api.resolve(["patients"])
    with pytest.raises(BridgePathError, match="not callable"):
        api.resolve([])


def test_message_call_succeeds(api):
    reply = _handle(api, _call(["patients", "add"], [{"fullName": "Ruwan"}]))

    assert reply == {
        "source": "mediBridge",
        "type": "bridge-response",
        "requestId": "mediBridge-1-abc",
        "success": True,
        "result": {"id": 1},
        "targetOrigin": TRUSTED,
    }


def test_message_call_to_unknown_path_fails(api):
    reply = _handle(api, _call(["patients", "delete"]))

    assert reply["success"] is False
    assert reply["error"] == "Unknown bridge path: patients.delete"


def test_message_call_to_namespace_fails(api):
    reply = _handle(api, _call(["patients"]))

    assert reply["success"] is False
    assert reply["error"] == "Bridge target at patients is not callable."


def test_message_call_with_invalid_payload_fails(api):
    reply = _handle(api, _call(["patients", "add"], [{"nic": "123"}]))

    assert reply["success"] is False
    assert "fullName" in reply["error"]


def test_untagged_and_untrusted_messages_are_ignored(api):
    assert _handle(api, {"type": "bridge-call", "requestId": "x", "path": ["patients", "list"]}) is None
    assert _handle(api, "not a message") is None
    assert _handle(api, _call(["patients", "list"]), origin="http://evil.example") is None


def test_reply_origin_falls_back_to_wildcard():
    assert reply_origin(None) == "*"
    assert reply_origin("null") == "*"
    assert reply_origin(TRUSTED) == TRUSTED


def test_ready_signal_fires_once():
    signal = ReadySignal()
    calls = []

    signal.add_listener(lambda: calls.append("early"))
    signal.fire()
    signal.fire()
    signal.add_listener(lambda: calls.append("late"))

    assert signal.is_set
    assert calls == ["early", "late"]


def test_removed_listener_is_not_called():
    signal = ReadySignal()
    calls = []

    def listener():
        calls.append("called")

    signal.add_listener(listener)
    signal.remove_listener(listener)
    signal.fire()

    assert calls == []


def test_bridge_api_exposes_its_database(database):
    assert BridgeApi(database).database is database
