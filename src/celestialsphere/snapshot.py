"""CLI entry point for static scene snapshots.

Edit the requests below, then run:
    python -m celestialsphere.snapshot
"""

import logging

from dotenv import load_dotenv

load_dotenv()

from celestialsphere.config import load_config  # noqa: E402
from celestialsphere.coords import equatorial_to_direction  # noqa: E402
from celestialsphere.logging_config import setup_logging  # noqa: E402
from celestialsphere.modes import (  # noqa: E402
    EarthRequest,
    ExploreRequest,
    PZSRequest,
    SunriseRequest,
    solve_mode,
)
from celestialsphere.renderers.static import save_static_scene  # noqa: E402
from celestialsphere.triangle import VertexSet  # noqa: E402

setup_logging(logging.INFO)
config = load_config()

triangle = VertexSet(radius=config.scene_radius)
for ra_hours, dec_deg in [(0.0, 0.0), (6.0, 0.0), (3.0, 60.0)]:
    triangle = triangle.add_or_replace(
        equatorial_to_direction(ra_hours, dec_deg, config.scene_radius)
    )

requests = [
    ExploreRequest(vertices=triangle),
    EarthRequest(),
    PZSRequest(),
    SunriseRequest(day_of_year=172, local_time=17.0),
]

for request in requests:
    path = save_static_scene(solve_mode(request, config), config=config)
    print(f"Saved: {path}")
