"""
Routing Application DTOs
========================

Pydantic models for request/response validation.
"""

from typing import List, Optional, Literal

from pydantic import BaseModel, Field, field_validator

PriorityStr = Literal["High", "Medium", "Low"]


# ========== Request DTOs ==========

class ClassifyRequest(BaseModel):
    """Request model for description classification."""
    description: str = Field(..., min_length=1, description="Complaint text")

    @field_validator("description")
    @classmethod
    def validate_description_length(cls, v: str) -> str:
        if len(v) > 5000:
            raise ValueError("Description too long (max 5000 characters)")
        return v


# ========== Response DTOs ==========

class ClassificationResponse(BaseModel):
    """Response model for classification."""
    department: str
    priority: PriorityStr
    sla_hours: int = Field(..., description="Resolution window for the department")
    matched_keyword: Optional[str] = Field(None, description="Department keyword that matched")
    priority_trigger: Optional[str] = Field(None, description="Term that set the priority")
    used_default_department: bool


class DepartmentResponse(BaseModel):
    """A row of the department reference table."""
    id: str
    name: str
    keywords: List[str]
    sla_hours: int


class DepartmentListResponse(BaseModel):
    departments: List[DepartmentResponse]
    default_department: str
    default_sla_hours: int
