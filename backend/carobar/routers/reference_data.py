"""Routers for reference entities served by the generic handlers alone.

Each entity gets GET / POST / PUT / DELETE at /api/<slug>:

    /api/colors          ?color=X
    /api/makers          ?name=X
    /api/countries       ?code=X
    /api/locations       ?name=X
    /api/vehicle-types   ?vehicle_type=X
    /api/banks           ?account_number=X
"""

from fastapi import APIRouter

from carobar.reference.entities import CONTROLLERS

routers: dict[str, APIRouter] = {
    slug: controller.build_router() for slug, controller in CONTROLLERS.items()
}
