# @file purpose: Collects the rectangles a node paints and drops those hidden by scroll containers
from tap_targets.dom.providers import GeometryProvider, StyleProvider
from tap_targets.dom.views import ClientRect, DOMNode
from tap_targets.gatherer.visibility import VisibilityResolver


def rect_contains(outer: ClientRect, inner: ClientRect) -> bool:
	"""True when ``inner`` lies entirely inside ``outer``, edges included."""
	return (
		inner.top >= outer.top
		and inner.right <= outer.right
		and inner.bottom <= outer.bottom
		and inner.left >= outer.left
	)


def all_client_rects_empty(client_rects: list[ClientRect]) -> bool:
	return len(client_rects) == 0 or all(rect.is_empty for rect in client_rects)


class ClientRectCollector:
	"""
	Resolves the rectangles of a node that a pointer could actually reach.

	Scroll containers are handled coarsely: a rect survives an ancestor whose
	vertical overflow is not ``visible`` only if it sits fully inside that
	ancestor's box. Partially clipped rects are dropped rather than cut, and
	horizontal clipping is ignored. Content scrolled out of view therefore never
	becomes a target, at the price of missing some that are partly visible.
	"""

	def __init__(
		self,
		style_provider: StyleProvider,
		geometry_provider: GeometryProvider,
		visibility_resolver: VisibilityResolver,
	):
		self.style_provider = style_provider
		self.geometry_provider = geometry_provider
		self.visibility_resolver = visibility_resolver

	def collect_client_rects(self, node: DOMNode, include_children: bool = True) -> list[ClientRect]:
		"""The node's own rects followed by those of its element descendants, in document order."""
		client_rects: list[ClientRect] = []
		stack = [node]
		while stack:
			current = stack.pop()
			client_rects.extend(rect.model_copy() for rect in self.geometry_provider.client_rects(current))
			if include_children:
				stack.extend(reversed(current.element_children))
		return client_rects

	def filter_by_scroll_clip(self, node: DOMNode, client_rects: list[ClientRect]) -> list[ClientRect]:
		ancestor = node.parent_element
		while ancestor is not None and ancestor.tag_name != 'html':
			style = self.style_provider.computed_style(ancestor)
			if style is not None and style.overflow_y != 'visible':
				ancestor_rect = self.geometry_provider.bounding_rect(ancestor)
				if ancestor_rect is None:
					# a clipping box with no geometry shows nothing
					return []
				client_rects = [rect for rect in client_rects if rect_contains(ancestor_rect, rect)]
				if not client_rects:
					return client_rects
			ancestor = ancestor.parent_element
		return client_rects

	def visible_client_rects(self, node: DOMNode) -> list[ClientRect]:
		if not self.visibility_resolver.is_visible(node):
			return []

		client_rects = self.collect_client_rects(node, include_children=True)

		if all_client_rects_empty(client_rects):
			style = self.style_provider.computed_style(node)
			overflow_hidden = style is not None and style.overflow_x == 'hidden' and style.overflow_y == 'hidden'
			if overflow_hidden or not node.element_children:
				# 0x0 with no child content that could spill out
				return []

		return self.filter_by_scroll_clip(node, client_rects)
