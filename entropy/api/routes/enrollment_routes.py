# enrollment_routes.py
from typing import Optional

from fastapi import APIRouter, Depends

from entropy.api.dependencies import current_user_id, get_enrollment_service
from entropy.models.user_model import ModuleActionIn
from entropy.services.enrollment_service import EnrollmentService

router = APIRouter(prefix="/modules", tags=["enrollments"])


def _module_id(payload: Optional[ModuleActionIn]):
    # sin body -> el servicio responde "Module ID is required"
    return payload.moduleId if payload else None


@router.get("")
def learning_state(user_id: int = Depends(current_user_id),
                   svc: EnrollmentService = Depends(get_enrollment_service)):
    return {"success": True, "data": svc.get_learning_state(user_id)}


@router.post("/enroll")
def enroll(payload: Optional[ModuleActionIn] = None, user_id: int = Depends(current_user_id),
           svc: EnrollmentService = Depends(get_enrollment_service)):
    return {
        "success": True,
        "message": "Successfully enrolled in module",
        "data": svc.enroll(user_id, _module_id(payload)),
    }


@router.post("/complete")
def complete(payload: Optional[ModuleActionIn] = None, user_id: int = Depends(current_user_id),
             svc: EnrollmentService = Depends(get_enrollment_service)):
    return {
        "success": True,
        "message": "Module marked as completed",
        "data": svc.complete(user_id, _module_id(payload)),
    }
