"""Builders for small in-memory documents with layout data attached."""

import itertools

from tap_targets.dom.views import DOMNode, DOMRect, NodeType, SnapshotNode

_ids = itertools.count(1)

DEFAULT_DISPLAY = {
	'a': 'inline',
	'span': 'inline',
	'em': 'inline',
	'strong': 'inline',
	'label': 'inline',
	'button': 'inline-block',
	'input': 'inline-block',
	'select': 'inline-block',
	'textarea': 'inline-block',
	'table': 'table',
	'tbody': 'table-row-group',
	'tr': 'table-row',
	'td': 'table-cell',
	'col': 'table-column',
	'colgroup': 'table-column-group',
}

Rect = tuple[float, float, float, float]


def text(value: str) -> DOMNode:
	node_id = next(_ids)
	return DOMNode(node_id=node_id, backend_node_id=node_id, node_type=NodeType.TEXT_NODE, node_name='#text', node_value=value)


def _append(parent: DOMNode, children) -> None:
	for child in children:
		if isinstance(child, str):
			child = text(child)
		child.parent_node = parent
		parent.children_nodes.append(child)


def element(
	tag: str,
	*children: DOMNode | str,
	rect: Rect | None = (0, 0, 100, 40),
	client: Rect | None = None,
	attributes: dict[str, str] | None = None,
	rendered: bool = True,
	**styles: str,
) -> DOMNode:
	"""An element with a border box ``rect`` (x, y, width, height).

	Style keywords use underscores (``overflow_y='hidden'``). The client area
	defaults to the size of ``rect``; ``rendered=False`` leaves the node without
	computed styles, like a node with no layout object.
	"""
	computed_styles = None
	if rendered:
		computed_styles = {'display': DEFAULT_DISPLAY.get(tag, 'block'), 'visibility': 'visible'}
		computed_styles.update({name.replace('_', '-'): value for name, value in styles.items()})

	if client is None and rect is not None:
		client = (0, 0, rect[2], rect[3])

	node_id = next(_ids)
	node = DOMNode(
		node_id=node_id,
		backend_node_id=node_id,
		node_type=NodeType.ELEMENT_NODE,
		node_name=tag.upper(),
		attributes=attributes or {},
		snapshot_node=SnapshotNode(
			bounds=DOMRect(*rect) if rect is not None else None,
			client_rects=DOMRect(*client) if client is not None else None,
			computed_styles=computed_styles,
		),
	)
	_append(node, children)
	return node


def document(*body_children: DOMNode | str, body_rect: Rect = (0, 0, 1000, 3000)) -> DOMNode:
	"""``#document > [<!DOCTYPE html>, html > [head, body > body_children]]``."""
	body = element('body', *body_children, rect=body_rect)
	html = element('html', element('head', rendered=False, rect=None), body, rect=body_rect)

	doc_id = next(_ids)
	root = DOMNode(node_id=doc_id, backend_node_id=doc_id, node_type=NodeType.DOCUMENT_NODE, node_name='#document')
	doctype_id = next(_ids)
	doctype = DOMNode(
		node_id=doctype_id, backend_node_id=doctype_id, node_type=NodeType.DOCUMENT_TYPE_NODE, node_name='html'
	)
	_append(root, [doctype, html])
	return root


def body_of(root: DOMNode) -> DOMNode:
	html = root.element_children[0]
	return html.element_children[1]
