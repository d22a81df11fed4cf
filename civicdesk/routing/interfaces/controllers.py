"""
Routing Controllers (API Routes)
================================

FastAPI routes for classification and the department table.

Controllers are thin - they delegate to application services.
"""

from fastapi import APIRouter, Depends

from civicdesk.routing.application import (
    ClassifyRequest,
    ClassificationResponse,
    DepartmentListResponse,
    DepartmentResponse,
    IDepartmentProvider,
    RoutingService,
)
from civicdesk.routing.infrastructure import get_department_provider

router = APIRouter(prefix="/routing", tags=["Routing"])


CLASSIFY_RESPONSE_EXAMPLE = {
    "department": "Water",
    "priority": "High",
    "sla_hours": 48,
    "matched_keyword": "leak",
    "priority_trigger": "urgent",
    "used_default_department": False
}


def get_routing_service(
    departments: IDepartmentProvider = Depends(get_department_provider)
) -> RoutingService:
    """Get routing service instance."""
    return RoutingService(departments)


@router.post(
    "/classify",
    response_model=ClassificationResponse,
    summary="Classify a complaint description",
    description="""
    Run the keyword rules without storing anything.

    Departments are tried in table order and the first keyword hit wins.
    Priority is High if a high-severity term occurs, else Medium if a
    maintenance term occurs, else Medium for Health and Garbage, else Low.
    """,
    responses={200: {"content": {"application/json": {"example": CLASSIFY_RESPONSE_EXAMPLE}}}}
)
async def classify(
    request: ClassifyRequest,
    service: RoutingService = Depends(get_routing_service)
):
    result = service.classify(request.description)
    return ClassificationResponse(
        department=result.department,
        priority=result.priority.value,
        sla_hours=service.sla_hours_for(result.department),
        matched_keyword=result.matched_keyword,
        priority_trigger=result.priority_trigger,
        used_default_department=result.used_fallback
    )


@router.get(
    "/departments",
    response_model=DepartmentListResponse,
    summary="List departments in classification order"
)
async def list_departments(
    departments: IDepartmentProvider = Depends(get_department_provider)
):
    config = departments.get_config()
    service = RoutingService(departments)
    return DepartmentListResponse(
        departments=[
            DepartmentResponse(
                id=d.id,
                name=d.name,
                keywords=list(d.keywords),
                sla_hours=d.sla_hours
            )
            for d in service.list_departments()
        ],
        default_department=config.default_department,
        default_sla_hours=config.default_sla_hours
    )


# Export router for inclusion in main app
routing_router = router
