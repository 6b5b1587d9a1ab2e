# medibridge/router/routers.py

from fastapi import FastAPI
from medibridge.bridge.bridge_controller import router as bridge_router
from medibridge.modules.setup.setup_controller import router as setup_router
from medibridge.modules.feature_modules.modules_controller import router as modules_router
from medibridge.modules.patients.patients_controller import router as patients_router
from medibridge.modules.appointments.appointments_controller import router as appointments_router
from medibridge.modules.prescriptions.prescriptions_controller import router as prescriptions_router
from medibridge.modules.billing.billing_controller import router as billing_router
from medibridge.modules.inventory.inventory_controller import router as inventory_router
from medibridge.modules.analytics.analytics_controller import router as analytics_router
from medibridge.modules.collaboration.collaboration_controller import router as collaboration_router
from medibridge.modules.medical_certificates.medical_certificates_controller import router as medical_certificates_router

def include_routers(app: FastAPI) -> None:
    """Include all API routers in the FastAPI application."""
    app.include_router(bridge_router)
    app.include_router(setup_router)
    app.include_router(modules_router)
    app.include_router(patients_router)
    app.include_router(appointments_router)
    app.include_router(prescriptions_router)
    app.include_router(billing_router)
    app.include_router(inventory_router)
    app.include_router(analytics_router)
    app.include_router(collaboration_router)
    app.include_router(medical_certificates_router)
