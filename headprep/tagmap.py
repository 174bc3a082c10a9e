"""Normalization of part-of-speech tags.

Two strategies are available, both exposing ``transform(word, tag)``:

- :class:`TagMap`: look up each tag in a mapping table read from the
  metadata file. This is the default.
- :class:`TagEditor`: the older strategy that edits tags by deleting
  morphological markers (person, gender, mood, ...) and collapsing verb
  tags, with a memo cache of edited tags.
"""
import logging
from collections import namedtuple

EditRule = namedtuple('EditRule', ['name', 'patterns', 'enabled'])

VERBPATTERNS = ('PASSIVE_VERB', 'VERB_IMPERFECT', 'VERB_PASSIVE',
		'VERB_PERFECT')

# marker classes in the order they are applied. Of each class, the first
# marker found in a tag is deleted (first occurrence only).
MARKERCLASSES = (
		EditRule('nounsuffix', ('+NSUFF', ), False),
		EditRule('detprefix', ('DET+', ), False),
		EditRule('person', ('_1P', '_1S', '_2FS', '_2FP', '_2MS', '_2MP',
			'_3D', '_3FS', '_3FP', '_3MS', '_3MP', ':1P', ':1S', ':2FS',
			':2FP', ':2MS', ':2MP', ':3D', ':3FS', ':3FP', ':3MS', ':3MP'),
			True),
		EditRule('number', ('_SG', '_PL', '_DUAL', '_DU'), False),
		EditRule('gender', ('_MASC', '_FEM'), True),
		EditRule('case', ('_NOM', '_ACCGEN', '_ACC'), False),
		EditRule('definite', ('_INDEF', '_DEF'), True),
		EditRule('pronoun', ('_POSS', '_INDEF'), True),
		EditRule('mood', ('_MOOD:I', '_MOOD:SJ'), True),
		)


class TagMap(object):
	"""An immutable mapping of raw tags to canonical tags.

	:param mapping: an iterable of ``(rawtag, tag)`` pairs or a dict.
	:param puncttag: the generic punctuation tag; words with this tag that
		are in ``commas`` get the word itself as tag.
	:param commas: a set of words."""
	__slots__ = ('_mapping', 'puncttag', 'commas')

	def __init__(self, mapping, puncttag='PUNC', commas=frozenset({','})):
		self._mapping = dict(mapping)
		self.puncttag = puncttag
		self.commas = frozenset(commas)

	def get(self, tag, default=None):
		return self._mapping.get(tag, default)

	def __getitem__(self, tag):
		return self._mapping[tag]

	def __contains__(self, tag):
		return tag in self._mapping

	def __len__(self):
		return len(self._mapping)

	def __iter__(self):
		return iter(self._mapping)

	def items(self):
		return self._mapping.items()

	def transform(self, word, tag):
		"""Return the normalized tag for a word with the given tag.

		A word tagged with the generic punctuation tag becomes its own tag if
		it is a comma; otherwise the punctuation tag is kept. Other tags are
		looked up in the table; an unmapped tag is returned unchanged and a
		warning is logged.

		>>> tagmap = TagMap({'NOUN': 'NN'})
		>>> tagmap.transform('kitAb', 'NOUN'), tagmap.transform(',', 'PUNC')
		('NN', ',')
		"""
		if tag == self.puncttag:
			return word if word in self.commas else tag
		result = self._mapping.get(tag)
		if result is None:
			logging.warning('not mapping %s', tag)
			return tag
		return result

	def __repr__(self):
		return '%s(<%d tags>)' % (self.__class__.__name__, len(self))


class TagEditor(object):
	"""Normalize tags by deleting morphological markers.

	:param puncttags: tags that mark non-alphabetic tokens; a word with such
		a tag that is in ``punctwords`` becomes its own tag.
	:param enabled: names of marker classes to remove; by default those of
		:data:`MARKERCLASSES` that are enabled.
	:param regularizeverbs: whether verb tags are collapsed to the first
		verb pattern they contain.

	Edited tags are stored in a cache; the result of :meth:`transform` does
	not depend on the cache."""

	def __init__(self, puncttags=('NON_ALPHABETIC',
			'NON_ALPHABETIC_PUNCTUATION'), punctwords=('.', '".', ','),
			enabled=None, regularizeverbs=True):
		self.puncttags = frozenset(puncttags)
		self.punctwords = frozenset(punctwords)
		if enabled is None:
			enabled = {rule.name for rule in MARKERCLASSES if rule.enabled}
		unknown = set(enabled) - {rule.name for rule in MARKERCLASSES}
		if unknown:
			raise ValueError('unknown marker classes: %s' % ', '.join(
					sorted(unknown)))
		self.rules = [rule._replace(enabled=rule.name in enabled)
				for rule in MARKERCLASSES]
		self.regularizeverbs = regularizeverbs
		self.cache = {}

	def transform(self, word, tag):
		"""Return the edited tag for a word with the given tag.

		>>> TagEditor().transform('ktb', 'PV+PVSUFF_SUBJ:3MS')
		'PV+PVSUFF_SUBJ'
		>>> TagEditor().transform('yktb', 'IV3MS+VERB_IMPERFECT+IVSUFF_MOOD:I')
		'VERB_IMPERFECT'
		"""
		if tag in self.puncttags:
			return word if word in self.punctwords else tag
		result = self.cache.get(tag)
		if result is None:
			result = self.cache[tag] = self.edit(tag)
		return result

	def edit(self, tag):
		"""Apply the editing rules to tag, without consulting the cache."""
		if self.regularizeverbs:
			for pattern in VERBPATTERNS:
				if pattern in tag:
					return pattern
		for rule in self.rules:
			if not rule.enabled:
				continue
			for marker in rule.patterns:
				if marker in tag:
					tag = tag.replace(marker, '', 1)
					break
		return tag


__all__ = ['TagMap', 'TagEditor', 'EditRule', 'VERBPATTERNS',
		'MARKERCLASSES']
