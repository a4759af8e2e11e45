import asyncio
import logging
import time

from cdp_use import CDPClient
from cdp_use.cdp.dom.commands import GetDocumentReturns
from cdp_use.cdp.dom.types import Node
from cdp_use.cdp.domsnapshot.commands import CaptureSnapshotReturns

from tap_targets.dom.enhanced_snapshot import REQUIRED_COMPUTED_STYLES, build_snapshot_lookup
from tap_targets.dom.views import DOMNode, NodeType, SnapshotNode
from tap_targets.utils import time_execution_async, time_execution_sync

logger = logging.getLogger(__name__)


class DomService:
	"""
	Captures the DOM tree of one page together with its layout snapshot.

	The CDP client must already be connected and ``session_id`` attached to the
	page; this service only issues DOM/DOMSnapshot/Page commands on it.
	"""

	def __init__(self, cdp_client: CDPClient, session_id: str | None = None, device_pixel_ratio: float | None = None):
		self.cdp_client = cdp_client
		self.session_id = session_id
		self.device_pixel_ratio = device_pixel_ratio

	async def _get_device_pixel_ratio(self) -> float:
		if self.device_pixel_ratio is not None:
			return self.device_pixel_ratio

		try:
			metrics = await self.cdp_client.send.Page.getLayoutMetrics(session_id=self.session_id)
		except Exception as e:
			logger.warning(f'⚠️ Page.getLayoutMetrics() failed, assuming device pixel ratio 1.0: {e}')
			return 1.0

		# device pixels over CSS pixels, same viewport
		device_width = metrics.get('visualViewport', {}).get('clientWidth')
		css_width = metrics.get('cssVisualViewport', {}).get('clientWidth')
		if not device_width or not css_width:
			return 1.0
		return float(device_width) / float(css_width)

	@time_execution_async('--get_all_trees')
	async def _get_all_trees(self) -> tuple[GetDocumentReturns, CaptureSnapshotReturns, dict[str, float]]:
		snapshot_request = self.cdp_client.send.DOMSnapshot.captureSnapshot(
			params={
				'computedStyles': REQUIRED_COMPUTED_STYLES,
				'includePaintOrder': False,
				'includeDOMRects': True,
				'includeBlendedBackgroundColors': False,
				'includeTextColorOpacities': False,
			},
			session_id=self.session_id,
		)
		dom_tree_request = self.cdp_client.send.DOM.getDocument(params={'depth': -1, 'pierce': True}, session_id=self.session_id)

		start = time.time()
		dom_tree, snapshot = await asyncio.gather(dom_tree_request, snapshot_request)
		end = time.time()
		logger.debug(f'⏱️ DOM.getDocument() + DOMSnapshot.captureSnapshot() took {end - start:.3f} seconds')

		return dom_tree, snapshot, {'cdp_calls_total': end - start}

	@time_execution_sync('--build_dom_tree')
	def _build_dom_tree(self, dom_tree: GetDocumentReturns, snapshot_lookup: dict[int, SnapshotNode]) -> DOMNode:
		"""Link CDP nodes into ``DOMNode``s, depth-first without recursion."""
		node_lookup: dict[int, DOMNode] = {}

		def _construct_node(node: Node, parent: DOMNode | None) -> DOMNode:
			if 'parentId' in node and node['parentId'] not in node_lookup:
				raise ValueError(f'Node {node["nodeId"]} references unknown parent {node["parentId"]}')

			attributes: dict[str, str] = {}
			raw_attributes = node.get('attributes') or []
			for i in range(0, len(raw_attributes) - 1, 2):
				attributes[raw_attributes[i]] = raw_attributes[i + 1]

			dom_node = DOMNode(
				node_id=node['nodeId'],
				backend_node_id=node['backendNodeId'],
				node_type=NodeType(node['nodeType']),
				node_name=node['nodeName'],
				node_value=node.get('nodeValue') or '',
				attributes=attributes,
				parent_node=parent,
				snapshot_node=snapshot_lookup.get(node['backendNodeId']),
			)
			node_lookup[node['nodeId']] = dom_node
			return dom_node

		root = _construct_node(dom_tree['root'], None)
		# (cdp node, constructed node) pairs whose children still need building
		pending: list[tuple[Node, DOMNode]] = [(dom_tree['root'], root)]
		while pending:
			cdp_node, dom_node = pending.pop()

			for shadow_root in cdp_node.get('shadowRoots') or []:
				shadow_node = _construct_node(shadow_root, dom_node)
				dom_node.shadow_roots.append(shadow_node)
				pending.append((shadow_root, shadow_node))

			if cdp_node.get('contentDocument'):
				content_document = _construct_node(cdp_node['contentDocument'], dom_node)
				dom_node.content_document = content_document
				pending.append((cdp_node['contentDocument'], content_document))

			for child in cdp_node.get('children') or []:
				child_node = _construct_node(child, dom_node)
				dom_node.children_nodes.append(child_node)
				pending.append((child, child_node))

		logger.debug(f'Built DOM tree with {len(node_lookup)} nodes')
		return root

	@time_execution_async('--get_dom_tree')
	async def get_dom_tree(self) -> tuple[DOMNode, dict[str, float]]:
		"""Fetch and link the document tree, with layout data attached to every node."""
		device_pixel_ratio = await self._get_device_pixel_ratio()
		dom_tree, snapshot, cdp_timing = await self._get_all_trees()

		start = time.time()
		snapshot_lookup = build_snapshot_lookup(snapshot, device_pixel_ratio)
		root = self._build_dom_tree(dom_tree, snapshot_lookup)
		end = time.time()

		return root, {**cdp_timing, 'build_dom_tree': end - start}
