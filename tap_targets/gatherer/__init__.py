from tap_targets.gatherer.client_rects import ClientRectCollector
from tap_targets.gatherer.service import TapTargetsGatherer, gather_tap_targets
from tap_targets.gatherer.text_block import TextBlockClassifier
from tap_targets.gatherer.views import TapTarget
from tap_targets.gatherer.visibility import VisibilityResolver

__all__ = [
	'ClientRectCollector',
	'TapTarget',
	'TapTargetsGatherer',
	'TextBlockClassifier',
	'VisibilityResolver',
	'gather_tap_targets',
]
