import math
from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.job import MAX_SALARY

NEUTRAL = "all"


def parse_salary_floor(raw: str | float | int | None) -> int | None:
    """Turn a "minimum salary in thousands" input into a whole-unit floor.

    Blank, non-numeric, negative or non-finite input yields None (no constraint).
    Floors beyond the largest storable salary are clamped to it.
    """
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation:
        return None
    if not value.is_finite() or value < 0:
        return None
    if value > Decimal(MAX_SALARY) / 1000:
        return MAX_SALARY
    try:
        return math.ceil(value * 1000)
    except ArithmeticError:
        return None


class FilterCriteria(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    search: str = ""
    location: str = ""
    job_type: str = Field(NEUTRAL, alias="jobType")
    category: str = NEUTRAL
    # Raw user input in thousands; kept as text so malformed values degrade instead of failing.
    salary_min: str | float | None = Field(None, alias="salaryMin")

    def update(self, **changes) -> "FilterCriteria":
        return self.model_copy(update=changes)

    @property
    def search_text(self) -> str:
        return self.search.strip()

    @property
    def location_text(self) -> str:
        return self.location.strip()

    @property
    def job_type_value(self) -> str | None:
        value = self.job_type.strip()
        return None if value in ("", NEUTRAL) else value

    @property
    def category_value(self) -> str | None:
        value = self.category.strip()
        return None if value in ("", NEUTRAL) else value

    @property
    def salary_floor(self) -> int | None:
        return parse_salary_floor(self.salary_min)

    @property
    def is_neutral(self) -> bool:
        return not (
            self.search_text
            or self.location_text
            or self.job_type_value
            or self.category_value
            or self.salary_floor is not None
        )
