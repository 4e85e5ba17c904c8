import datetime
import enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class HolidayKind(enum.IntEnum):
    """How a holiday's date is derived. Values match the holiday_types table ids."""

    FIXED = 1
    FIXED_SHIFTED = 2
    EASTER_RELATIVE = 3
    EASTER_RELATIVE_SHIFTED = 4

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]

    @property
    def is_fixed(self) -> bool:
        return self in (HolidayKind.FIXED, HolidayKind.FIXED_SHIFTED)


_KIND_LABELS: dict[HolidayKind, str] = {
    HolidayKind.FIXED: "Fixed",
    HolidayKind.FIXED_SHIFTED: "Bridge law (moved to Monday)",
    HolidayKind.EASTER_RELATIVE: "Easter-relative",
    HolidayKind.EASTER_RELATIVE_SHIFTED: "Easter-relative, moved to Monday",
}


class HolidayVerdict(str, enum.Enum):
    """Answer to "is this date a holiday?"."""

    HOLIDAY = "HOLIDAY"
    NOT_HOLIDAY = "NOT_HOLIDAY"
    INVALID_DATE = "INVALID_DATE"


# Any leap year; only used to check that a day/month pair can exist
_LEAP_YEAR = 2000


class HolidayDefinition(BaseModel):
    """
    Abstract holiday rule from the catalog.

    day/month are only used by the fixed kinds, easter_offset_days only by the
    Easter-relative kinds, and the unused fields must stay empty. day/month
    must exist in a leap year; whether they exist in a given year (Feb 29)
    is decided at resolution time.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    kind: HolidayKind
    day: int | None = Field(default=None, ge=1, le=31)
    month: int | None = Field(default=None, ge=1, le=12)
    easter_offset_days: int = 0

    @model_validator(mode="after")
    def _check_fields_for_kind(self) -> "HolidayDefinition":
        label = f"{self.kind.name} holiday '{self.name}'"
        if self.kind.is_fixed:
            if self.day is None or self.month is None:
                raise ValueError(f"{label} needs both day and month")
            if self.easter_offset_days != 0:
                raise ValueError(f"{label} cannot have an Easter offset")
            try:
                datetime.date(_LEAP_YEAR, self.month, self.day)
            except ValueError as e:
                raise ValueError(f"{label}: {self.month}/{self.day} is never a calendar date") from e
        elif self.day is not None or self.month is not None:
            raise ValueError(f"{label} cannot have a day or month")
        return self


class ResolvedHoliday(BaseModel):
    """A holiday with its concrete date for one year."""

    model_config = ConfigDict(frozen=True)

    name: str
    date: datetime.date
