# medibridge/models/models.py

import enum

from sqlalchemy import (
    CheckConstraint, Column, Float, ForeignKey, Integer, Text, text,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()

CURRENT_TIMESTAMP = text("CURRENT_TIMESTAMP")


# ============================================================================
# ENUMS
# ============================================================================

class PracticeType(enum.Enum):
    PRIVATE_PRACTICE = "private_practice"
    DISPENSARY = "dispensary"
    CHANNELING_CENTER = "channeling_center"


class AppointmentStatus(enum.Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"


class BillingStatus(enum.Enum):
    PENDING = "pending"
    PAID = "paid"


DEFAULT_CURRENCY = "LKR"
DEFAULT_REORDER_LEVEL = 10


# ============================================================================
# PRACTICE MODELS
# ============================================================================

class DoctorProfile(Base):
    __tablename__ = "doctor_profile"
    __table_args__ = (CheckConstraint("id = 1", name="ck_doctor_profile_singleton"),)

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(Text, nullable=False)
    specialty = Column(Text, nullable=False)
    practice_type = Column(Text, nullable=False)
    centre_name = Column(Text, nullable=True)
    location = Column(Text, nullable=True)
    password = Column(Text, nullable=True)
    created_at = Column(Text, server_default=CURRENT_TIMESTAMP)

    def __repr__(self):
        return f"<DoctorProfile(name={self.name}, specialty={self.specialty})>"


class EnabledModule(Base):
    __tablename__ = "enabled_modules"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    module_key = Column(Text, nullable=False, unique=True)
    enabled = Column(Integer, nullable=False, server_default=text("1"))
    metadata_ = Column("metadata", Text, nullable=True)


# ============================================================================
# CLINICAL MODELS
# ============================================================================

class Patient(Base):
    __tablename__ = "patients"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    full_name = Column(Text, nullable=False)
    nic = Column(Text, nullable=True)
    contact = Column(Text, nullable=True)
    dob = Column(Text, nullable=True)
    allergies = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(Text, server_default=CURRENT_TIMESTAMP)

    def __repr__(self):
        return f"<Patient(id={self.id}, full_name={self.full_name})>"


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)
    doctor_notes = Column(Text, nullable=True)
    scheduled_for = Column(Text, nullable=False)
    status = Column(Text, nullable=False, server_default=text(f"'{AppointmentStatus.SCHEDULED.value}'"))
    clinic_room = Column(Text, nullable=True)
    created_at = Column(Text, server_default=CURRENT_TIMESTAMP)


class Prescription(Base):
    __tablename__ = "prescriptions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)
    diagnosis = Column(Text, nullable=True)
    medication = Column(Text, nullable=True)
    dosage = Column(Text, nullable=True)
    duration = Column(Text, nullable=True)
    issued_at = Column(Text, server_default=CURRENT_TIMESTAMP)


class MedicalCertificate(Base):
    __tablename__ = "medical_certificates"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)
    certificate_type = Column(Text, nullable=False)
    diagnosis = Column(Text, nullable=True)
    from_date = Column(Text, nullable=False)
    to_date = Column(Text, nullable=False)
    days_count = Column(Integer, nullable=False)
    restrictions = Column(Text, nullable=True)
    additional_notes = Column(Text, nullable=True)
    issued_at = Column(Text, server_default=CURRENT_TIMESTAMP)


# ============================================================================
# OPERATIONS MODELS
# ============================================================================

class BillingRecord(Base):
    __tablename__ = "billing_records"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)
    amount = Column(Float, nullable=False)
    currency = Column(Text, nullable=False, server_default=text(f"'{DEFAULT_CURRENCY}'"))
    status = Column(Text, nullable=False, server_default=text(f"'{BillingStatus.PENDING.value}'"))
    payment_method = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(Text, server_default=CURRENT_TIMESTAMP)


class InventoryItem(Base):
    __tablename__ = "inventory_items"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    item_name = Column(Text, nullable=False)
    sku = Column(Text, nullable=True)
    quantity = Column(Integer, nullable=False, server_default=text("0"))
    reorder_level = Column(Integer, nullable=False, server_default=text(str(DEFAULT_REORDER_LEVEL)))
    supplier = Column(Text, nullable=True)
    unit_price = Column(Float, nullable=True)
    updated_at = Column(Text, server_default=CURRENT_TIMESTAMP)


class CollaborationNote(Base):
    __tablename__ = "collaboration_notes"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    author = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    tag = Column(Text, nullable=True)
    created_at = Column(Text, server_default=CURRENT_TIMESTAMP)


# Columns added after the first release; applied on every start and
# ignored when already present.
ADDITIVE_COLUMNS = (
    ("doctor_profile", "centre_name", "TEXT"),
    ("doctor_profile", "password", "TEXT"),
)
