import logging

from tap_targets.config import CONFIG
from tap_targets.logging_config import setup_logging

if CONFIG.TAP_TARGETS_SETUP_LOGGING:
	logger = setup_logging()
else:
	logger = logging.getLogger('tap_targets')

from tap_targets.config import TapTargetsConfig
from tap_targets.dom.service import DomService
from tap_targets.dom.views import ClientRect, ComputedStyle, DOMNode, NodeType, SnapshotNode
from tap_targets.gatherer.service import TapTargetsGatherer, gather_tap_targets
from tap_targets.gatherer.views import TapTarget
from tap_targets.utils import truncate

__all__ = [
	'ClientRect',
	'ComputedStyle',
	'DOMNode',
	'DomService',
	'NodeType',
	'SnapshotNode',
	'TapTarget',
	'TapTargetsConfig',
	'TapTargetsGatherer',
	'gather_tap_targets',
	'truncate',
]
