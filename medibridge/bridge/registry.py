# medibridge/bridge/registry.py
"""
Explicit dispatch table from bridge operation names to service handlers.

Each handler takes the live database ``Connection`` and, for write
operations, a validated request model.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Type

from pydantic import BaseModel

from medibridge.common.database.database import Connection
from medibridge.common.utils.global_messages import GlobalMessages
from medibridge.modules.analytics import analytics_service
from medibridge.modules.appointments import appointments_service
from medibridge.modules.appointments.schemas import AppointmentCreateRequest
from medibridge.modules.billing import billing_service
from medibridge.modules.billing.schemas import PaymentCreateRequest
from medibridge.modules.collaboration import collaboration_service
from medibridge.modules.collaboration.schemas import CollaborationNoteCreateRequest
from medibridge.modules.feature_modules import modules_service
from medibridge.modules.feature_modules.schemas import UpdateModulesRequest
from medibridge.modules.inventory import inventory_service
from medibridge.modules.inventory.schemas import InventoryUpsertRequest
from medibridge.modules.medical_certificates import medical_certificates_service
from medibridge.modules.medical_certificates.schemas import MedicalCertificateCreateRequest
from medibridge.modules.patients import patients_service
from medibridge.modules.patients.schemas import PatientCreateRequest
from medibridge.modules.prescriptions import prescriptions_service
from medibridge.modules.prescriptions.schemas import PrescriptionCreateRequest
from medibridge.modules.setup import setup_service
from medibridge.modules.setup.schemas import CompleteSetupRequest

logger = logging.getLogger(__name__)


class UnknownOperationError(LookupError):
    def __init__(self, name: str):
        super().__init__(GlobalMessages.UNKNOWN_OPERATION.format(name=name))
        self.name = name


@dataclass(frozen=True)
class Operation:
    name: str
    handler: Callable[..., Any]
    payload_model: Optional[Type[BaseModel]] = None


def _table(*operations: Operation) -> Mapping[str, Operation]:
    return MappingProxyType({operation.name: operation for operation in operations})


REGISTRY: Mapping[str, Operation] = _table(
    Operation("setup.isComplete", setup_service.is_setup_complete),
    Operation("setup.getProfile", setup_service.get_profile),
    Operation("setup.completeSetup", setup_service.complete_setup, CompleteSetupRequest),
    Operation("modules.getModules", modules_service.get_modules),
    Operation("modules.updateModules", modules_service.update_modules, UpdateModulesRequest),
    Operation("patients.list", patients_service.list_patients),
    Operation("patients.add", patients_service.add_patient, PatientCreateRequest),
    Operation("appointments.list", appointments_service.list_appointments),
    Operation("appointments.add", appointments_service.add_appointment, AppointmentCreateRequest),
    Operation("prescriptions.list", prescriptions_service.list_prescriptions),
    Operation("prescriptions.add", prescriptions_service.add_prescription, PrescriptionCreateRequest),
    Operation("billing.list", billing_service.list_billing_records),
    Operation("billing.recordPayment", billing_service.record_payment, PaymentCreateRequest),
    Operation("inventory.list", inventory_service.list_inventory),
    Operation("inventory.upsert", inventory_service.upsert_inventory_item, InventoryUpsertRequest),
    Operation("analytics.overview", analytics_service.get_overview),
    Operation("collaboration.list", collaboration_service.list_notes),
    Operation("collaboration.add", collaboration_service.add_note, CollaborationNoteCreateRequest),
    Operation("medicalCertificates.list", medical_certificates_service.list_certificates),
    Operation("medicalCertificates.add", medical_certificates_service.add_certificate, MedicalCertificateCreateRequest),
)


def get_operation(name: str) -> Operation:
    try:
        return REGISTRY[name]
    except KeyError:
        raise UnknownOperationError(name) from None


def invoke(name: str, db: Connection, payload: Any = None) -> Any:
    """Run the named operation against ``db``.

    ``payload`` may be a request model instance or raw camelCase data, which
    is validated here; pydantic ``ValidationError`` propagates to the caller.
    """
    operation = get_operation(name)
    logger.debug(f"Invoking bridge operation {name}")

    if operation.payload_model is None:
        return operation.handler(db)

    if payload is None:
        raise ValueError(GlobalMessages.PAYLOAD_REQUIRED.format(name=name))

    if isinstance(payload, operation.payload_model):
        request = payload
    else:
        request = operation.payload_model.model_validate(payload)

    return operation.handler(db, request)
