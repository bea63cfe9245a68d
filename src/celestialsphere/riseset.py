"""Rise/set hour angles under a constant refraction offset."""

import logging
import math

from celestialsphere.config import REFRACTION_ARCMIN
from celestialsphere.models import RiseSet

logger = logging.getLogger(__name__)

DEFAULT_REFRACTION_DEG = REFRACTION_ARCMIN / 60.0
SOLAR_MAX_DECLINATION = 23.45
_DAYS_PER_YEAR = 365.0
_EQUINOX_PHASE_DAYS = 284.0
_MIN_DENOMINATOR = 1e-12


def calculate_rise_set(
    latitude: float,
    declination: float,
    refraction_deg: float = DEFAULT_REFRACTION_DEG,
) -> RiseSet:
    """Hour angle at which an object reaches altitude -refraction.

    Solves ``cos h = (sin(-r) - sin φ sin δ) / (cos φ cos δ)``. When the right
    side is outside [-1, 1] the object never crosses the horizon; the result
    is then the sentinel hour angle 0 with ``degenerate`` set.

    Args:
        latitude: Observer latitude (degrees).
        declination: Object declination (degrees).
        refraction_deg: Apparent horizon depression (degrees). Defaults to 50'.

    Returns:
        RiseSet; rise is at ``-hour_angle``, set at ``+hour_angle`` (hours
        from transit).
    """
    phi = math.radians(latitude)
    delta = math.radians(declination)
    target = math.sin(math.radians(-refraction_deg))
    vertical = math.sin(phi) * math.sin(delta)
    denominator = math.cos(phi) * math.cos(delta)

    # Pole observer or polar object: altitude never changes
    if abs(denominator) < _MIN_DENOMINATOR:
        circumpolar = vertical > target
        logger.debug(
            "constant altitude: lat=%s dec=%s circumpolar=%s",
            latitude,
            declination,
            circumpolar,
        )
        return RiseSet(hour_angle=0.0, degenerate=True, circumpolar=circumpolar)

    cos_t = (target - vertical) / denominator
    if cos_t < -1.0 or cos_t > 1.0:
        circumpolar = cos_t < -1.0
        logger.debug(
            "no horizon crossing: lat=%s dec=%s cos_t=%.4f circumpolar=%s",
            latitude,
            declination,
            cos_t,
            circumpolar,
        )
        return RiseSet(hour_angle=0.0, degenerate=True, circumpolar=circumpolar)

    hour_angle = math.degrees(math.acos(cos_t)) / 15.0
    return RiseSet(hour_angle=hour_angle)


def solar_declination(day_of_year: float) -> float:
    """Approximate solar declination (degrees) as a sinusoid over the year.

    Zero near the equinoxes (day ~81 and ~264), +23.45 near day 172.
    """
    return SOLAR_MAX_DECLINATION * math.sin(
        2.0 * math.pi * (_EQUINOX_PHASE_DAYS + day_of_year) / _DAYS_PER_YEAR
    )


def clock_to_hour_angle(local_hours: float) -> float:
    """Local solar time to hour angle: noon is 0, 18h is +6h."""
    return local_hours - 12.0
