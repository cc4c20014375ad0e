"""Height unit conversion."""

import math
from typing import NamedTuple

from ..constants import UnitConversion


class HeightConversion(NamedTuple):
    """A height in centimeters and in feet plus inches."""

    cm: float
    feet: int
    inches: float


def convert_height(cm: float) -> HeightConversion:
    """
    Convert centimeters to feet and inches, rounded to one decimal.

    Args:
        cm: Height in centimeters

    Returns:
        HeightConversion with rounded cm, whole feet and remaining inches
    """
    total_inches = cm / UnitConversion.CM_PER_INCH
    feet = math.floor(total_inches / UnitConversion.INCHES_PER_FOOT)
    inches = round(total_inches % UnitConversion.INCHES_PER_FOOT, 1)

    # 11.96 in rounds up to a full foot
    if inches >= UnitConversion.INCHES_PER_FOOT:
        feet += 1
        inches = 0.0

    return HeightConversion(cm=round(cm, 1), feet=feet, inches=inches)
