from fastapi import HTTPException, status

from holiday_api.core.config import HOLIDAY_MAX_YEAR, HOLIDAY_MIN_YEAR


def is_year_in_range(
    year: int,
    min_year: int = HOLIDAY_MIN_YEAR,
    max_year: int = HOLIDAY_MAX_YEAR,
) -> bool:
    """True om året ligger inom det intervall som API:t accepterar."""
    return min_year <= year <= max_year


def validate_year(
    year: int,
    min_year: int = HOLIDAY_MIN_YEAR,
    max_year: int = HOLIDAY_MAX_YEAR,
) -> int:
    """
    Säkerställ att year ligger inom det konfigurerade intervallet.

    Returnerar year om det är giltigt, annars kastas 400.
    """
    if not is_year_in_range(year, min_year, max_year):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid year. Must be between {min_year} and {max_year}",
        )
    return year
