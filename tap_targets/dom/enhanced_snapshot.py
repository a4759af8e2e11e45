# @file purpose: Parses DOMSnapshot.captureSnapshot payloads into per-node layout data
"""
Layout lookup built from a CDP DOM snapshot.

The snapshot is index-based: node attributes live in parallel arrays, layout
entries point back at node indexes and every string is interned in a shared
``strings`` table. This module flattens it into ``backendNodeId -> SnapshotNode``
so the DOM tree from ``DOM.getDocument`` can be joined against it.
"""

from typing import Any

from cdp_use.cdp.domsnapshot.commands import CaptureSnapshotReturns

from tap_targets.dom.views import DOMRect, SnapshotNode

# Only the styles we need, the order here is the order of each layout ``styles`` entry
REQUIRED_COMPUTED_STYLES = [
	'display',
	'visibility',
	'overflow',
	'overflow-x',
	'overflow-y',
	'cursor',
	'pointer-events',
	'position',
]


def _parse_computed_styles(strings: list[str], style_indices: list[int]) -> dict[str, str]:
	styles: dict[str, str] = {}
	for i, style_index in enumerate(style_indices):
		if i < len(REQUIRED_COMPUTED_STYLES) and 0 <= style_index < len(strings):
			styles[REQUIRED_COMPUTED_STYLES[i]] = strings[style_index]
	return styles


def _parse_rect(raw: list[float] | None, device_pixel_ratio: float) -> DOMRect | None:
	if not raw or len(raw) < 4:
		return None
	# snapshot rects are in device pixels, everything downstream works in CSS pixels
	return DOMRect(
		x=raw[0] / device_pixel_ratio,
		y=raw[1] / device_pixel_ratio,
		width=raw[2] / device_pixel_ratio,
		height=raw[3] / device_pixel_ratio,
	)


def _layout_rect(layout: dict[str, Any], key: str, layout_idx: int, device_pixel_ratio: float) -> DOMRect | None:
	rects = layout.get(key) or []
	if layout_idx < len(rects):
		return _parse_rect(rects[layout_idx], device_pixel_ratio)
	return None


def build_snapshot_lookup(
	snapshot: CaptureSnapshotReturns,
	device_pixel_ratio: float = 1.0,
) -> dict[int, SnapshotNode]:
	"""Build a ``backendNodeId -> SnapshotNode`` lookup from a captured snapshot.

	Nodes that have no layout object (``display: none`` subtrees, ``head``
	content) get an empty ``SnapshotNode`` with no computed styles.
	"""
	snapshot_lookup: dict[int, SnapshotNode] = {}

	if not snapshot.get('documents'):
		return snapshot_lookup

	strings = snapshot['strings']

	for document in snapshot['documents']:
		nodes = document['nodes']
		layout = document['layout']

		# first layout entry wins, later ones are continuation boxes of the same node
		layout_index_map: dict[int, int] = {}
		for layout_idx, node_index in enumerate(layout.get('nodeIndex', [])):
			if node_index not in layout_index_map:
				layout_index_map[node_index] = layout_idx

		for snapshot_index, backend_node_id in enumerate(nodes.get('backendNodeId', [])):
			snapshot_node = SnapshotNode()

			layout_idx = layout_index_map.get(snapshot_index)
			if layout_idx is not None:
				snapshot_node.bounds = _layout_rect(layout, 'bounds', layout_idx, device_pixel_ratio)
				snapshot_node.client_rects = _layout_rect(layout, 'clientRects', layout_idx, device_pixel_ratio)

				styles = layout.get('styles', [])
				if layout_idx < len(styles):
					snapshot_node.computed_styles = _parse_computed_styles(strings, styles[layout_idx])

			snapshot_lookup[backend_node_id] = snapshot_node

	return snapshot_lookup
