"""
Routing Value Objects
=====================

The department reference table and its configuration wrapper.

`DepartmentConfig` is the single source of truth for SLA hours: both the
classifier and the SLA calculator read departments from it.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Department(BaseModel):
    """
    A municipal department.

    Keyword order matters: the classifier tries keywords in the order given.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Stable department identifier")
    name: str = Field(..., min_length=1, description="Display name, stored on complaints")
    keywords: List[str] = Field(default_factory=list, description="Lowercase match terms")
    sla_hours: int = Field(..., gt=0, description="Resolution window in hours")

    @field_validator("keywords")
    @classmethod
    def normalize_keywords(cls, v: List[str]) -> List[str]:
        """Lower-case keywords and drop repeats, keeping first occurrence order."""
        seen = []
        for keyword in v:
            keyword = keyword.strip().lower()
            if keyword and keyword not in seen:
                seen.append(keyword)
        return seen


DEFAULT_DEPARTMENTS: List[Dict] = [
    {"id": "water", "name": "Water",
     "keywords": ["water", "leak", "pipe", "tap", "drainage", "sewage", "plumbing"],
     "sla_hours": 48},
    {"id": "roads", "name": "Roads",
     "keywords": ["road", "pothole", "street", "traffic", "signal", "sign", "pavement"],
     "sla_hours": 72},
    {"id": "electricity", "name": "Electricity",
     "keywords": ["electricity", "power", "light", "streetlight", "wire", "pole", "outage"],
     "sla_hours": 48},
    {"id": "garbage", "name": "Garbage",
     "keywords": ["garbage", "waste", "trash", "dustbin", "cleaning", "sanitation"],
     "sla_hours": 24},
    {"id": "health", "name": "Health",
     "keywords": ["health", "hospital", "medical", "doctor", "medicine", "clinic"],
     "sla_hours": 24},
    {"id": "education", "name": "Education",
     "keywords": ["school", "education", "teacher", "student", "classroom", "books"],
     "sla_hours": 72},
]


class DepartmentConfig(BaseModel):
    """
    Department reference table loaded from YAML.

    This is a value object - treat it as immutable and swap the whole
    instance on reload.
    """
    departments: List[Department] = Field(
        default_factory=lambda: [Department(**d) for d in DEFAULT_DEPARTMENTS],
        description="Departments in classification order"
    )
    default_department: str = Field(
        default="Roads",
        description="Department assigned when no keyword matches"
    )
    default_sla_hours: int = Field(
        default=48,
        gt=0,
        description="SLA window for department names missing from the table"
    )
    approaching_ratio: float = Field(
        default=0.25,
        gt=0.0,
        lt=1.0,
        description="Share of the SLA window treated as 'approaching'"
    )

    @model_validator(mode="after")
    def validate_table(self) -> "DepartmentConfig":
        """Names must be unique and the fallback department must exist."""
        names = [d.name for d in self.departments]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"duplicate department names: {duplicates}")
        if self.departments and self.default_department not in names:
            raise ValueError(
                f"default_department '{self.default_department}' is not in the department table"
            )
        return self

    @property
    def names(self) -> List[str]:
        return [d.name for d in self.departments]

    def get(self, name: str) -> Optional[Department]:
        """Look up a department by display name."""
        for department in self.departments:
            if department.name == name:
                return department
        return None

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    def get_sla_hours(self, name: str) -> int:
        """SLA hours for a department, or the default for unknown names."""
        department = self.get(name)
        if department is None:
            return self.default_sla_hours
        return department.sla_hours
