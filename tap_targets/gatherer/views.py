from pydantic import BaseModel, ConfigDict, Field

from tap_targets.dom.views import ClientRect


class TapTarget(BaseModel):
	"""A visible tap target, detached from the tree so it can be shipped anywhere.

	``model_dump(by_alias=True)`` gives the camelCase ``clientRects`` key that
	tap target audits expect.
	"""

	model_config = ConfigDict(
		extra='forbid',
		frozen=True,
		validate_by_name=True,
		validate_by_alias=True,
	)

	client_rects: list[ClientRect] = Field(min_length=1, alias='clientRects')
	snippet: str
	path: str
	selector: str
	href: str = ''
