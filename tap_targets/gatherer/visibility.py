from dataclasses import dataclass

from tap_targets.dom.providers import StyleProvider
from tap_targets.dom.views import DOMNode

# elements that visibility: collapse removes entirely
COLLAPSIBLE_TAGS = {'tr', 'tbody', 'col', 'colgroup'}


@dataclass
class CacheInfo:
	hits: int = 0
	misses: int = 0


class VisibilityResolver:
	"""
	Decides whether an element can be seen, given its own style and its ancestors.

	A node is hidden by ``display: none``, by ``visibility: collapse`` on table
	structure, by a zero-sized block whose overflow is hidden on that axis, or by
	any hidden ancestor below the root ``html`` element.

	Results are memoized per node for the lifetime of the resolver, so create
	one resolver per pass over an unchanging tree.
	"""

	def __init__(self, style_provider: StyleProvider, memoize: bool = True):
		self.style_provider = style_provider
		self.memoize = memoize
		self._cache: dict[int, bool] = {}
		self._cache_info = CacheInfo()

	def cache_info(self) -> CacheInfo:
		return CacheInfo(hits=self._cache_info.hits, misses=self._cache_info.misses)

	def clear_cache(self) -> None:
		self._cache.clear()
		self._cache_info = CacheInfo()

	def _is_displayed(self, node: DOMNode) -> bool:
		"""The node's own rules, ignoring ancestors."""
		style = self.style_provider.computed_style(node)
		if style is None:
			# no layout object, nothing rendered
			return False

		if style.display == 'none':
			return False
		if style.visibility == 'collapse' and node.tag_name in COLLAPSIBLE_TAGS:
			return False

		if style.display in ('block', 'inline-block'):
			# a zero sized box that clips in that direction has nothing to show or tap
			if node.client_width == 0 and style.overflow_x == 'hidden':
				return False
			if node.client_height == 0 and style.overflow_y == 'hidden':
				return False

		return True

	def is_visible(self, node: DOMNode) -> bool:
		# nodes whose own rules pass and that inherit the outcome of the nodes above them
		chain: list[DOMNode] = []
		current = node
		while True:
			if self.memoize and id(current) in self._cache:
				self._cache_info.hits += 1
				result = self._cache[id(current)]
				break

			self._cache_info.misses += 1
			chain.append(current)
			if not self._is_displayed(current):
				result = False
				break

			parent = current.parent_element
			if parent is None or parent.tag_name == 'html':
				result = True
				break
			current = parent

		if self.memoize:
			for visited in chain:
				self._cache[id(visited)] = result
		return result
