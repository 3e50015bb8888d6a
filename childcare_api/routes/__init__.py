"""HTTP routers of the childcare API."""
from .entities import entity_routers
from .links import link_routers

all_routers = [*entity_routers, *link_routers]
