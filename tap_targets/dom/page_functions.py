# @file purpose: Tree helpers for locating and describing nodes (query, path, selector, outer HTML)
import html
import re

from tap_targets.dom.views import DOMNode, NodeType

VOID_ELEMENTS = {
	'area',
	'base',
	'br',
	'col',
	'embed',
	'hr',
	'img',
	'input',
	'link',
	'meta',
	'source',
	'track',
	'wbr',
}

RAW_TEXT_ELEMENTS = {'script', 'style', 'xmp', 'iframe', 'noembed', 'noframes', 'plaintext'}

# tag, [attr=value], tag[attr=value] or *
_SIMPLE_SELECTOR_RE = re.compile(
	r"""^\s*(?P<tag>[a-zA-Z][a-zA-Z0-9-]*|\*)?
	(?:\[\s*(?P<attr>[a-zA-Z_:][-a-zA-Z0-9_:.]*)\s*=\s*(?P<value>"[^"]*"|'[^']*'|[^\]\s]+)\s*\])?\s*$""",
	re.VERBOSE,
)


def _parse_selector(selector: str) -> tuple[str | None, str | None, str | None]:
	match = _SIMPLE_SELECTOR_RE.match(selector)
	if not match or not (match.group('tag') or match.group('attr')):
		raise ValueError(f'Unsupported selector: {selector!r}')

	tag = match.group('tag')
	attr = match.group('attr')
	value = match.group('value')
	if value and value[0] in '"\'':
		value = value[1:-1]
	return (None if tag in (None, '*') else tag.lower()), attr, value


def _matches(node: DOMNode, parsed: tuple[str | None, str | None, str | None]) -> bool:
	tag, attr, value = parsed
	if tag is not None and node.tag_name != tag:
		return False
	if attr is not None and node.attributes.get(attr) != value:
		return False
	return True


def iter_document_order(root: DOMNode):
	"""Yield ``root`` and its descendants depth-first, entering shadow roots before light children."""
	stack = [root]
	while stack:
		node = stack.pop()
		yield node
		stack.extend(reversed(node.children_nodes))
		stack.extend(reversed(node.shadow_roots))


def get_elements_in_document(root: DOMNode, selectors: list[str]) -> list[DOMNode]:
	"""All elements under ``root`` matching any of ``selectors``, once each, in document order.

	Shadow roots are searched, iframe documents are not.
	"""
	parsed = [_parse_selector(selector) for selector in selectors]
	return [
		node
		for node in iter_document_order(root)
		if node.is_element and any(_matches(node, selector) for selector in parsed)
	]


def _dom_parent(node: DOMNode) -> DOMNode | None:
	"""``Node.parentNode``: documents and shadow roots have none, even though we link them to their host."""
	if node.node_type in (NodeType.DOCUMENT_NODE, NodeType.DOCUMENT_FRAGMENT_NODE):
		return None
	return node.parent_node


def _get_node_index(node: DOMNode) -> int:
	parent = node.parent_node
	if parent is None or node not in parent.children_nodes:
		return 0

	index = 0
	for sibling in parent.children_nodes:
		if sibling is node:
			break
		if sibling.is_text and not (sibling.node_value or '').strip():
			continue
		index += 1
	return index


def get_node_path(node: DOMNode) -> str:
	"""Structural locator like ``1,HTML,1,BODY,0,DIV``.

	Each step is the node's index among its siblings (whitespace-only text
	does not count) followed by its node name.
	"""
	path: list[str] = []
	current: DOMNode | None = node
	while current is not None and _dom_parent(current) is not None:
		path.append(f'{_get_node_index(current)},{current.node_name}')
		current = _dom_parent(current)
	path.reverse()
	return ','.join(path)


def _get_selector_part(node: DOMNode) -> str:
	part = node.tag_name
	node_id = node.attributes.get('id')
	class_names = (node.attributes.get('class') or '').split()
	if node_id:
		part += '#' + node_id
	elif class_names:
		part += '.' + class_names[0]
	return part


def get_node_selector(node: DOMNode) -> str:
	"""Short human readable selector, at most four levels deep, e.g. ``div#main > ul.nav > li > a``."""
	parts: list[str] = []
	current: DOMNode | None = node
	while len(parts) < 4 and current is not None:
		if current.tag_name == 'html':
			break
		if current.is_element:
			parts.insert(0, _get_selector_part(current))
		current = _dom_parent(current)
	return ' > '.join(parts)


def _escape_attribute(value: str) -> str:
	return value.replace('&', '&amp;').replace('"', '&quot;').replace('\xa0', '&nbsp;')


def _escape_text(value: str) -> str:
	return html.escape(value, quote=False).replace('\xa0', '&nbsp;')


def _serialized_tag_name(node: DOMNode) -> str:
	# HTML elements report an upper-cased nodeName, foreign (SVG, MathML) ones keep their case
	if node.node_name == node.node_name.upper():
		return node.tag_name
	return node.node_name


def get_outer_html(node: DOMNode) -> str:
	"""Serialize ``node`` and its light-DOM subtree back to markup."""
	out: list[str] = []
	# entries are nodes to open or closing tags to emit
	stack: list[DOMNode | str] = [node]
	while stack:
		item = stack.pop()
		if isinstance(item, str):
			out.append(item)
			continue

		if item.node_type == NodeType.TEXT_NODE:
			parent = item.parent_element
			if parent is not None and parent.tag_name in RAW_TEXT_ELEMENTS:
				out.append(item.node_value or '')
			else:
				out.append(_escape_text(item.node_value or ''))
		elif item.node_type == NodeType.COMMENT_NODE:
			out.append(f'<!--{item.node_value or ""}-->')
		elif item.node_type == NodeType.ELEMENT_NODE:
			tag = _serialized_tag_name(item)
			attrs = ''.join(f' {name}="{_escape_attribute(value)}"' for name, value in item.attributes.items())
			out.append(f'<{tag}{attrs}>')
			if tag in VOID_ELEMENTS:
				continue
			stack.append(f'</{tag}>')
			stack.extend(reversed(item.children_nodes))
		else:
			stack.extend(reversed(item.children_nodes))
	return ''.join(out)
