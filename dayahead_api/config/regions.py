"""
Registry of bidding zones served by the dashboard.

Only zones the upstream publishes freely are listed. ``DE-AT-LU`` is left out
because the upstream answers it with an error.
"""

from typing import Dict, List, Optional

from ..models import RegionDescriptor


REGIONS: List[RegionDescriptor] = [
    RegionDescriptor(code="AT", name="Austria"),
    RegionDescriptor(code="BE", name="Belgium"),
    RegionDescriptor(code="CH", name="Switzerland"),
    RegionDescriptor(code="CZ", name="Czech Republic"),
    RegionDescriptor(code="DE-LU", name="Germany, Luxembourg"),
    RegionDescriptor(code="DK1", name="Denmark 1"),
    RegionDescriptor(code="DK2", name="Denmark 2"),
    RegionDescriptor(code="FR", name="France"),
    RegionDescriptor(code="HU", name="Hungary"),
    RegionDescriptor(code="IT-North", name="Italy North"),
    RegionDescriptor(code="NL", name="Netherlands"),
    RegionDescriptor(code="NO2", name="Norway 2"),
    RegionDescriptor(code="PL", name="Poland"),
    RegionDescriptor(code="SE4", name="Sweden 4"),
    RegionDescriptor(code="SI", name="Slovenia"),
]

_REGIONS_BY_CODE: Dict[str, RegionDescriptor] = {region.code: region for region in REGIONS}


def find_region(code: str) -> Optional[RegionDescriptor]:
    """Look up a region by its exact, case-sensitive code."""
    return _REGIONS_BY_CODE.get(code)
