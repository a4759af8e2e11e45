import pytest

from tap_targets.dom.providers import SnapshotStyleProvider
from tap_targets.gatherer.text_block import TextBlockClassifier
from tests.factories import document, element, text


@pytest.fixture
def classifier() -> TextBlockClassifier:
	return TextBlockClassifier(SnapshotStyleProvider())


def test_link_inside_prose_is_in_text_block(classifier):
	link = element('a', 'Contact us')
	document(element('p', 'Some prose and ', link, ' more prose.'))

	assert classifier.is_in_text_block(link)


def test_link_that_is_the_whole_paragraph_is_not(classifier):
	link = element('a', 'Contact us')
	document(element('p', ' ', link, ' '))

	assert not classifier.is_in_text_block(link)


def test_parent_text_barely_longer_than_node_is_not_a_text_block(classifier):
	link = element('a', 'Contact us')
	document(element('p', 'x: ', link))

	# 3 extra characters is below the threshold
	assert not classifier.is_in_text_block(link)


def test_block_level_element_is_never_in_text_block(classifier):
	button = element('button', 'Go', display='block')
	document(element('p', 'Some prose and ', button, ' more prose.'))

	assert not classifier.is_in_text_block(button)


def test_inline_block_element_counts_as_inline(classifier):
	button = element('button', 'Go')
	document(element('p', 'Some prose and ', button, ' more prose.'))

	assert classifier.is_in_text_block(button)


def test_unrendered_element_is_not_inline(classifier):
	link = element('a', 'Contact us', rendered=False)
	document(element('p', 'Some prose and ', link, ' more prose.'))

	assert not classifier.is_in_text_block(link)


def test_nested_inline_wrappers_are_walked(classifier):
	link = element('a', 'Contact us')
	wrapper = element('span', element('strong', link))
	document(element('p', 'Some prose and ', wrapper, ' more prose.'))

	assert classifier.is_in_text_block(link)


def test_walk_stops_at_block_ancestor(classifier):
	link = element('a', 'Contact us')
	document(element('p', 'Some prose and ', element('div', link), ' more prose.'))

	assert not classifier.is_in_text_block(link)


def test_whitespace_only_siblings_do_not_count(classifier):
	link = element('a', 'Contact us')
	document(element('div', '\n   ', link, '\n', element('span', 'a long caption next to it'), '  '))

	assert not classifier.is_in_text_block(link)


def test_element_siblings_are_not_detected(classifier):
	"""Known limitation: prose wrapped in elements is not recognised."""
	link = element('a', 'Contact us')
	document(element('p', element('span', 'Some prose and '), link, element('span', ' more prose.')))

	assert not classifier.is_in_text_block(link)


def test_text_node_is_inline(classifier):
	node = text('hello')
	element('p', 'Some prose and ', node)

	assert classifier.is_in_text_block(node)


def test_node_without_parent(classifier):
	assert not classifier.is_in_text_block(element('a', 'Contact us'))
