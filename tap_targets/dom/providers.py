"""
Host capabilities the tap target gatherer reads through.

The gatherer never touches layout data directly: style, geometry and element
queries go through these protocols so a different host (a live page, a
synthetic test tree) can be plugged in. The default implementations read the
``SnapshotNode`` attached to each ``DOMNode`` by ``DomService``.
"""

from typing import Protocol

from tap_targets.dom.page_functions import get_elements_in_document
from tap_targets.dom.views import ClientRect, ComputedStyle, DOMNode


class StyleProvider(Protocol):
	def computed_style(self, node: DOMNode) -> ComputedStyle | None: ...


class GeometryProvider(Protocol):
	def client_rects(self, node: DOMNode) -> list[ClientRect]: ...

	def bounding_rect(self, node: DOMNode) -> ClientRect | None: ...


class NodeSelector(Protocol):
	def query(self, selectors: list[str]) -> list[DOMNode]: ...


def _has_layout(node: DOMNode) -> bool:
	snapshot_node = node.snapshot_node
	return snapshot_node is not None and (bool(snapshot_node.computed_styles) or snapshot_node.bounds is not None)


class SnapshotStyleProvider:
	"""Computed style from the snapshot.

	An element without a layout object is ``None`` (not rendered), unless
	something below it is laid out. Then it is a ``display: contents`` box the
	snapshot skipped, and it gets a see-through style.
	"""

	def __init__(self):
		self._has_rendered_descendants: dict[int, bool] = {}

	def _renders_descendants(self, node: DOMNode) -> bool:
		if id(node) not in self._has_rendered_descendants:
			stack = list(node.children_nodes) + list(node.shadow_roots)
			found = False
			while stack:
				current = stack.pop()
				if _has_layout(current):
					found = True
					break
				stack.extend(current.children_nodes)
				stack.extend(current.shadow_roots)
			self._has_rendered_descendants[id(node)] = found
		return self._has_rendered_descendants[id(node)]

	def computed_style(self, node: DOMNode) -> ComputedStyle | None:
		if not node.is_element:
			return None
		if node.snapshot_node and node.snapshot_node.computed_styles:
			return ComputedStyle.from_computed_styles(node.snapshot_node.computed_styles)
		if self._renders_descendants(node):
			return ComputedStyle(display='contents')
		return None


class SnapshotGeometryProvider:
	"""Border box rects from the snapshot.

	A snapshot carries one box per layout object, so an inline element broken
	over several lines reports its union rather than one rect per line.
	"""

	def client_rects(self, node: DOMNode) -> list[ClientRect]:
		if not (node.snapshot_node and node.snapshot_node.bounds):
			return []
		return [ClientRect.from_dom_rect(node.snapshot_node.bounds)]

	def bounding_rect(self, node: DOMNode) -> ClientRect | None:
		rects = self.client_rects(node)
		if not rects:
			return None
		left = min(rect.left for rect in rects)
		top = min(rect.top for rect in rects)
		right = max(rect.right for rect in rects)
		bottom = max(rect.bottom for rect in rects)
		return ClientRect.from_xywh(left, top, right - left, bottom - top)


class DocumentNodeSelector:
	def __init__(self, root: DOMNode):
		self.root = root

	def query(self, selectors: list[str]) -> list[DOMNode]:
		return get_elements_in_document(self.root, selectors)
