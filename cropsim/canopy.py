"""Green area index of the canopy."""

from __future__ import annotations

from cropsim.model import Crop


def leaf_area_index(crop: Crop) -> float:
    """Green area index: leaf classes plus stem and pod area (ha/ha)."""
    leaf_area = sum(leaf.weight * leaf.area for leaf in crop.leaves)
    prm = crop.prm
    return (
        leaf_area
        + crop.st.stems * prm.specific_stem_area(crop.st.development)
        + crop.st.storage * prm.specific_pod_area
    )