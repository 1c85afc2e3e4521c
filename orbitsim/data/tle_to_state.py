import logging
from datetime import datetime, timezone

import numpy as np
from sgp4.api import Satrec, jday

logger = logging.getLogger(__name__)


def tle_to_state(tle1, tle2, epoch=None):
    """
    Convert TLE to TEME position & velocity (km, km/s) at epoch (UTC, default now).
    Note: SGP4 returns TEME, not GCRF/ECI. We treat it as ECI for initialization;
    the difference (precession/nutation) is far below the integrator's fidelity.
    """
    sat = Satrec.twoline2rv(tle1, tle2)

    if epoch is None:
        now = datetime.now(timezone.utc)
    else:
        # accept naive -> treat as UTC
        now = epoch
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        else:
            now = now.astimezone(timezone.utc)

    jd, fr = jday(
        now.year, now.month, now.day,
        now.hour, now.minute, now.second + now.microsecond * 1e-6
    )

    e, r, v = sat.sgp4(jd, fr)
    if e != 0:
        raise RuntimeError(f"SGP4 propagation failed (code={e})")

    logger.debug("SGP4 state for NORAD %s at %s", sat.satnum, now.isoformat())
    return np.array(r, dtype=float), np.array(v, dtype=float)
