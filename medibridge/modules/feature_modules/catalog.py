# medibridge/modules/feature_modules/catalog.py
"""Catalog of feature modules a practice can switch on."""

from dataclasses import dataclass
from typing import List, Tuple

from medibridge.models.models import PracticeType

ALL_PRACTICES = (
    PracticeType.PRIVATE_PRACTICE,
    PracticeType.DISPENSARY,
    PracticeType.CHANNELING_CENTER,
)


@dataclass(frozen=True)
class ModuleMeta:
    key: str
    name: str
    description: str
    icon: str
    default_enabled: bool
    recommended_for: Tuple[PracticeType, ...]


MODULES: Tuple[ModuleMeta, ...] = (
    ModuleMeta(
        key="appointments",
        name="Appointment Scheduling",
        description="Manage consultations, time slots, and SMS reminders.",
        icon="IconCalendar",
        default_enabled=True,
        recommended_for=ALL_PRACTICES,
    ),
    ModuleMeta(
        key="patient_records",
        name="Patient Records",
        description="Maintain comprehensive, searchable patient health records.",
        icon="IconStethoscope",
        default_enabled=True,
        recommended_for=ALL_PRACTICES,
    ),
    ModuleMeta(
        key="e_prescriptions",
        name="E-Prescriptions",
        description="Generate digital or printable prescriptions with dosage instructions.",
        icon="IconPrescription",
        default_enabled=True,
        recommended_for=(PracticeType.PRIVATE_PRACTICE, PracticeType.DISPENSARY),
    ),
    ModuleMeta(
        key="billing",
        name="Billing & Payments",
        description="Track payments, create invoices, and reconcile easily.",
        icon="IconReceipt2",
        default_enabled=True,
        recommended_for=(PracticeType.PRIVATE_PRACTICE, PracticeType.CHANNELING_CENTER),
    ),
    ModuleMeta(
        key="pharmacy_inventory",
        name="Pharmacy & Inventory",
        description="Manage stock levels, expiries, and reorder alerts for dispensaries.",
        icon="IconBuildingStore",
        default_enabled=False,
        recommended_for=(PracticeType.DISPENSARY,),
    ),
    ModuleMeta(
        key="analytics",
        name="Analytics Dashboard",
        description="Visualize revenue, patient flow, and operational KPIs.",
        icon="IconChartArcs",
        default_enabled=True,
        recommended_for=(PracticeType.PRIVATE_PRACTICE, PracticeType.CHANNELING_CENTER),
    ),
    ModuleMeta(
        key="clinical_calculators",
        name="Clinical Calculators",
        description="Run BMI, BSA, dosing and triage calculators offline.",
        icon="IconCalculator",
        default_enabled=True,
        recommended_for=ALL_PRACTICES,
    ),
    ModuleMeta(
        key="collaboration",
        name="Multi-Doctor Collaboration",
        description="Coordinate cross-cover, referrals, and shared notes securely.",
        icon="IconUsersGroup",
        default_enabled=False,
        recommended_for=(PracticeType.CHANNELING_CENTER,),
    ),
    ModuleMeta(
        key="medical_certificates",
        name="Medical Certificates",
        description="Issue sick leave, fitness certificates, and medical reports.",
        icon="IconCertificate",
        default_enabled=True,
        recommended_for=ALL_PRACTICES,
    ),
)

PRACTICE_TYPE_LABELS = {
    PracticeType.PRIVATE_PRACTICE: "Private Practice",
    PracticeType.DISPENSARY: "Dispensary",
    PracticeType.CHANNELING_CENTER: "Channeling Center",
}


def default_modules_for(practice_type: PracticeType) -> List[str]:
    """Module keys recommended for a practice type, in catalog order."""
    return [module.key for module in MODULES if practice_type in module.recommended_for]
