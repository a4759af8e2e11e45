from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict


class NodeType(int, Enum):
	"""DOM node types, values match the CDP ``nodeType`` field."""

	ELEMENT_NODE = 1
	ATTRIBUTE_NODE = 2
	TEXT_NODE = 3
	CDATA_SECTION_NODE = 4
	ENTITY_REFERENCE_NODE = 5
	ENTITY_NODE = 6
	PROCESSING_INSTRUCTION_NODE = 7
	COMMENT_NODE = 8
	DOCUMENT_NODE = 9
	DOCUMENT_TYPE_NODE = 10
	DOCUMENT_FRAGMENT_NODE = 11
	NOTATION_NODE = 12


@dataclass
class DOMRect:
	x: float
	y: float
	width: float
	height: float


@dataclass
class SnapshotNode:
	"""Layout data for a node, taken from ``DOMSnapshot.captureSnapshot``."""

	bounds: DOMRect | None = None
	"""Border box in CSS pixels"""

	client_rects: DOMRect | None = None
	"""Client area, ``clientWidth``/``clientHeight`` come from here"""

	computed_styles: dict[str, str] | None = None


class ComputedStyle(BaseModel):
	"""The handful of resolved style properties the visibility checks need.

	Defaults are the CSS initial values.
	"""

	model_config = ConfigDict(frozen=True)

	display: str = 'inline'
	visibility: str = 'visible'
	overflow_x: str = 'visible'
	overflow_y: str = 'visible'

	@classmethod
	def from_computed_styles(cls, styles: dict[str, str]) -> 'ComputedStyle':
		overflow = styles.get('overflow', 'visible')
		return cls(
			display=styles.get('display', 'inline'),
			visibility=styles.get('visibility', 'visible'),
			overflow_x=styles.get('overflow-x', overflow),
			overflow_y=styles.get('overflow-y', overflow),
		)


class ClientRect(BaseModel):
	"""Axis-aligned rectangle in page coordinates.

	Plain values only, so it can be serialized and compared without the tree.
	"""

	model_config = ConfigDict(frozen=True)

	left: float
	top: float
	right: float
	bottom: float
	width: float
	height: float

	@classmethod
	def from_xywh(cls, x: float, y: float, width: float, height: float) -> 'ClientRect':
		width = max(width, 0.0)
		height = max(height, 0.0)
		return cls(left=x, top=y, right=x + width, bottom=y + height, width=width, height=height)

	@classmethod
	def from_dom_rect(cls, rect: DOMRect) -> 'ClientRect':
		return cls.from_xywh(rect.x, rect.y, rect.width, rect.height)

	@property
	def is_empty(self) -> bool:
		return self.width == 0 and self.height == 0


@dataclass(eq=False)
class DOMNode:
	"""A node of the captured document tree.

	Nodes compare by identity; ``parent_node`` is a back-reference and is never
	followed when serializing.
	"""

	node_id: int
	backend_node_id: int
	node_type: NodeType
	node_name: str
	node_value: str = ''
	attributes: dict[str, str] = field(default_factory=dict)

	parent_node: 'DOMNode | None' = field(default=None, repr=False)
	children_nodes: list['DOMNode'] = field(default_factory=list, repr=False)
	shadow_roots: list['DOMNode'] = field(default_factory=list, repr=False)
	content_document: 'DOMNode | None' = field(default=None, repr=False)

	snapshot_node: SnapshotNode | None = field(default=None, repr=False)

	@property
	def tag_name(self) -> str:
		return self.node_name.lower()

	@property
	def is_element(self) -> bool:
		return self.node_type == NodeType.ELEMENT_NODE

	@property
	def is_text(self) -> bool:
		return self.node_type == NodeType.TEXT_NODE

	@property
	def parent_element(self) -> 'DOMNode | None':
		"""Parent if it is an element, mirrors ``Node.parentElement``."""
		if self.parent_node is not None and self.parent_node.is_element:
			return self.parent_node
		return None

	@property
	def element_children(self) -> list['DOMNode']:
		return [child for child in self.children_nodes if child.is_element]

	@property
	def text_content(self) -> str:
		"""Descendant text in document order, mirrors ``Node.textContent``."""
		if self.node_type in (NodeType.TEXT_NODE, NodeType.CDATA_SECTION_NODE, NodeType.COMMENT_NODE):
			return self.node_value or ''

		parts: list[str] = []
		stack = list(reversed(self.children_nodes))
		while stack:
			node = stack.pop()
			if node.node_type in (NodeType.TEXT_NODE, NodeType.CDATA_SECTION_NODE):
				parts.append(node.node_value or '')
			elif node.node_type == NodeType.ELEMENT_NODE:
				stack.extend(reversed(node.children_nodes))
		return ''.join(parts)

	@property
	def client_width(self) -> float:
		if self.snapshot_node and self.snapshot_node.client_rects:
			return self.snapshot_node.client_rects.width
		return 0.0

	@property
	def client_height(self) -> float:
		if self.snapshot_node and self.snapshot_node.client_rects:
			return self.snapshot_node.client_rects.height
		return 0.0

	def get_attribute(self, name: str) -> str | None:
		return self.attributes.get(name)
