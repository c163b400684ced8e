"""
Search condition catalogue loading
"""
import json
import logging
from pathlib import Path
from typing import Union

from ..domain.models import EstateSearchCondition

logger = logging.getLogger(__name__)


def load_estate_search_condition(path: Union[str, Path]) -> EstateSearchCondition:
    """Read the estate condition fixture into an immutable catalogue"""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    condition = EstateSearchCondition.from_dict(data)
    logger.info(
        f"Loaded estate search condition from {path}: "
        f"{len(condition.door_width.ranges)} door width, "
        f"{len(condition.door_height.ranges)} door height, "
        f"{len(condition.rent.ranges)} rent ranges, "
        f"{len(condition.feature.list)} features"
    )
    return condition
