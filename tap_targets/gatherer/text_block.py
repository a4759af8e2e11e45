from tap_targets.dom.providers import StyleProvider
from tap_targets.dom.views import DOMNode

# parents whose text is this much longer than the node's own are treated as prose
MIN_SURROUNDING_TEXT_LENGTH = 5


class TextBlockClassifier:
	"""
	Guesses whether a node is part of a run of text, like a link inside a paragraph.

	Such links are sized by the text around them, so they are not judged as
	standalone tap targets. The guess only looks at direct text node siblings:
	an element surrounded by other elements instead of bare text is not
	recognised even if it renders inline with text.
	"""

	def __init__(self, style_provider: StyleProvider):
		self.style_provider = style_provider

	def _is_inline(self, node: DOMNode) -> bool:
		if node.is_text:
			return True
		if not node.is_element:
			return False
		style = self.style_provider.computed_style(node)
		return style is not None and style.display in ('inline', 'inline-block')

	def _has_text_node_siblings_forming_text_block(self, node: DOMNode) -> bool:
		parent = node.parent_element
		if parent is None:
			return False

		if len(parent.text_content) - len(node.text_content) < MIN_SURROUNDING_TEXT_LENGTH:
			# the parent's text is mostly this node, so the parent isn't a text block
			return False

		for sibling in parent.children_nodes:
			if sibling is node:
				continue
			if sibling.is_text and sibling.text_content.strip():
				return True

		return False

	def is_in_text_block(self, node: DOMNode) -> bool:
		current: DOMNode | None = node
		while current is not None:
			if not self._is_inline(current):
				return False
			if self._has_text_node_siblings_forming_text_block(current):
				return True
			current = current.parent_element
		return False
