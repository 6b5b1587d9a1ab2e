# tests/test_setup_service.py
import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from medibridge.bridge import registry
from medibridge.models.models import PracticeType
from medibridge.modules.feature_modules import modules_service
from medibridge.modules.feature_modules.catalog import MODULES, default_modules_for
from medibridge.modules.feature_modules.schemas import UpdateModulesRequest
from medibridge.modules.setup import setup_service
from medibridge.modules.setup.schemas import CompleteSetupRequest


def _answers(**overrides):
    answers = {
        "name": "Dr. Anura Jayasinghe",
        "specialty": "General Practice",
        "practiceType": "private_practice",
        "centreName": "Jaya Medical Centre",
        "location": "Kandy",
    }
    answers.update(overrides)
    return CompleteSetupRequest.model_validate(answers)


def test_setup_is_incomplete_on_a_fresh_database(db):
    assert setup_service.is_setup_complete(db) is False
    assert setup_service.get_profile(db) == {"profile": None, "modules": []}


def test_complete_setup_saves_profile_and_default_modules(db):
    result = setup_service.complete_setup(db, _answers(practiceType="dispensary"))

    assert result == {"success": True}
    assert setup_service.is_setup_complete(db) is True

    profile = setup_service.get_profile(db)
    assert profile["profile"]["name"] == "Dr. Anura Jayasinghe"
    assert profile["profile"]["practiceType"] == "dispensary"
    assert profile["profile"]["centreName"] == "Jaya Medical Centre"
    assert [module["key"] for module in profile["modules"]] == default_modules_for(PracticeType.DISPENSARY)
    assert all(module["enabled"] == 1 for module in profile["modules"])


def test_complete_setup_twice_keeps_single_row_and_created_at(db):
    setup_service.complete_setup(db, _answers())
    first = setup_service.get_profile(db)["profile"]

    setup_service.complete_setup(db, _answers(name="Dr. A. Jayasinghe", location="Colombo", modules=["billing"]))
    second = setup_service.get_profile(db)["profile"]

    assert db.prepare("SELECT COUNT(1) AS count FROM doctor_profile").get()["count"] == 1
    assert second["id"] == 1
    assert second["name"] == "Dr. A. Jayasinghe"
    assert second["location"] == "Colombo"
    assert second["createdAt"] == first["createdAt"]
    assert modules_service.get_enabled_keys(db) == ["billing"]


def test_blank_optional_text_is_stored_as_null(db):
    setup_service.complete_setup(db, _answers(centreName="   ", location=""))

    profile = setup_service.get_profile(db)["profile"]
    assert profile["centreName"] is None
    assert profile["location"] is None


def test_setup_rejects_unknown_practice_type():
    with pytest.raises(ValidationError):
        _answers(practiceType="hospital")


def test_update_modules_replaces_the_whole_set(db):
    modules_service.update_modules(db, UpdateModulesRequest(modules=["appointments", "billing", "analytics"]))
    modules_service.update_modules(db, UpdateModulesRequest(modules=["analytics", "collaboration"]))

    assert sorted(modules_service.get_enabled_keys(db)) == ["analytics", "collaboration"]


def test_update_modules_accepts_a_bare_key_list(db):
    result = registry.invoke("modules.updateModules", db, ["billing", "analytics"])

    assert result == {"success": True}
    assert sorted(modules_service.get_enabled_keys(db)) == ["analytics", "billing"]


def test_failed_module_update_keeps_previous_set(db):
    modules_service.update_modules(db, UpdateModulesRequest(modules=["appointments"]))

    with pytest.raises(IntegrityError):
        modules_service.update_modules(db, UpdateModulesRequest(modules=["billing", "billing"]))

    assert modules_service.get_enabled_keys(db) == ["appointments"]


def test_get_modules_flags_every_catalog_entry(db):
    modules_service.update_modules(db, UpdateModulesRequest(modules=["pharmacy_inventory"]))

    modules = modules_service.get_modules(db)

    assert [module["key"] for module in modules] == [module.key for module in MODULES]
    enabled = {module["key"] for module in modules if module["enabled"]}
    assert enabled == {"pharmacy_inventory"}
