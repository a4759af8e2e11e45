import logging

from cdp_use import CDPClient

from tap_targets.config import TapTargetsConfig
from tap_targets.dom.page_functions import get_node_path, get_node_selector, get_outer_html
from tap_targets.dom.providers import (
	DocumentNodeSelector,
	GeometryProvider,
	NodeSelector,
	SnapshotGeometryProvider,
	SnapshotStyleProvider,
	StyleProvider,
)
from tap_targets.dom.service import DomService
from tap_targets.dom.views import ClientRect, DOMNode
from tap_targets.gatherer.client_rects import ClientRectCollector
from tap_targets.gatherer.text_block import TextBlockClassifier
from tap_targets.gatherer.views import TapTarget
from tap_targets.gatherer.visibility import VisibilityResolver
from tap_targets.utils import time_execution_async, time_execution_sync, truncate

logger = logging.getLogger(__name__)


class TapTargetsGatherer:
	"""Finds every visible tap target in a captured document.

	Candidates come from the configured tag and role selectors, in document
	order. Inline links inside running text are skipped, and so is anything that
	resolves to no visible rect.
	"""

	def __init__(
		self,
		root: DOMNode,
		config: TapTargetsConfig | None = None,
		style_provider: StyleProvider | None = None,
		geometry_provider: GeometryProvider | None = None,
		node_selector: NodeSelector | None = None,
	):
		self.root = root
		self.config = config or TapTargetsConfig()
		self.style_provider = style_provider or SnapshotStyleProvider()
		self.geometry_provider = geometry_provider or SnapshotGeometryProvider()
		self.node_selector = node_selector or DocumentNodeSelector(root)
		# rebuilt on every pass, only kept for inspection afterwards
		self.visibility_resolver: VisibilityResolver | None = None

	def _build_tap_target(self, node: DOMNode, client_rects: list[ClientRect]) -> TapTarget:
		return TapTarget(
			client_rects=client_rects,
			snippet=truncate(get_outer_html(node), self.config.snippet_max_length),
			path=get_node_path(node),
			selector=get_node_selector(node),
			href=node.get_attribute('href') or '',
		)

	@time_execution_sync('--collect_tap_targets')
	def collect_tap_targets(self) -> list[TapTarget]:
		visibility_resolver = VisibilityResolver(self.style_provider, memoize=self.config.memoize_visibility)
		rect_collector = ClientRectCollector(self.style_provider, self.geometry_provider, visibility_resolver)
		text_block_classifier = TextBlockClassifier(self.style_provider)
		self.visibility_resolver = visibility_resolver

		candidates = self.node_selector.query(self.config.selectors)

		targets: list[TapTarget] = []
		skipped_in_text_block = 0
		for node in candidates:
			if text_block_classifier.is_in_text_block(node):
				skipped_in_text_block += 1
				continue

			client_rects = rect_collector.visible_client_rects(node)
			if not client_rects:
				continue

			targets.append(self._build_tap_target(node, client_rects))

		cache_info = visibility_resolver.cache_info()
		logger.debug(
			f'🎯 {len(targets)} tap targets from {len(candidates)} candidates '
			f'({skipped_in_text_block} inline in text, visibility cache {cache_info.hits} hits / {cache_info.misses} misses)'
		)
		return targets


@time_execution_async('--gather_tap_targets')
async def gather_tap_targets(
	cdp_client: CDPClient,
	session_id: str | None = None,
	config: TapTargetsConfig | None = None,
) -> list[TapTarget]:
	"""Capture the page behind ``session_id`` and collect its tap targets."""
	root, timing = await DomService(cdp_client, session_id).get_dom_tree()
	logger.debug(f'DOM capture timing: {timing}')
	return TapTargetsGatherer(root, config).collect_tap_targets()
