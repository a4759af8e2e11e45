"""Configuration for tap-targets.

Process-wide settings are read lazily from the environment (``.env`` is loaded
once on import). Per-run settings live in ``TapTargetsConfig``.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()

TARGET_TAGS = [
	'button',
	'a',
	'input',
	'textarea',
	'select',
	'option',
]

TARGET_ROLES = [
	'button',
	'checkbox',
	'link',
	'menuitem',
	'menuitemcheckbox',
	'menuitemradio',
	'option',
	'scrollbar',
	'slider',
	'spinbutton',
]


class Config:
	"""Environment-backed settings, re-read on every access so tests can monkeypatch."""

	@property
	def TAP_TARGETS_LOGGING_LEVEL(self) -> str:
		return os.getenv('TAP_TARGETS_LOGGING_LEVEL', 'info').lower()

	@property
	def TAP_TARGETS_SETUP_LOGGING(self) -> bool:
		return os.getenv('TAP_TARGETS_SETUP_LOGGING', 'true').lower() in ('true', 'yes', '1')


CONFIG = Config()


class TapTargetsConfig(BaseModel):
	"""What counts as a candidate and how results are rendered."""

	model_config = ConfigDict(extra='forbid', frozen=True)

	target_tags: list[str] = Field(default_factory=lambda: list(TARGET_TAGS))
	target_roles: list[str] = Field(default_factory=lambda: list(TARGET_ROLES))
	snippet_max_length: int = Field(default=700, gt=0, description='Outer HTML is cut to this many characters')
	memoize_visibility: bool = True

	@property
	def selectors(self) -> list[str]:
		return [*self.target_tags, *(f'[role={role}]' for role in self.target_roles)]
