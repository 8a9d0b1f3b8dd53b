"""
CoAP resources exposed by a testbed node
"""

from .base import NodeResource
from .led import LedResource
from .stats import StatsResource
from .temperature import TemperatureResource

__all__ = ['NodeResource', 'LedResource', 'StatsResource', 'TemperatureResource']
