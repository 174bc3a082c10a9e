"""Orthographic and morphological features of (unknown) English words.

A feature vector is a string of five two-character fields::

	C<capitalization>H<hyphenization>I<inflection>D<derivation>N<numeric>

e.g., ``C4H0I0D3N0`` for a capitalized, non-initial word ending in
``graphy``. Numbers are always encoded as ``C0H0I0D0N1``."""
import re

NUMBERVECTOR = 'C0H0I0D0N1'
CONSONANTS = frozenset('bcdfghjklmnpqrstvwxyz')
# each derivational class is encoded with a single character
CODES = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz'
DERIVATIONALSUFFIXES = ('-backed', '-based', 'graphy', 'meter', 'ente',
		'ment', 'ness', 'tion', 'ael', 'ary', 'ate', 'ble', 'ent', 'ess',
		'est', 'ial', 'ian', 'ine', 'ion', 'ism', 'ist', 'ite', 'ity', 'ive',
		'ize', 'nce', 'ogy', 'ous', 'sis', 'uan', 'al', 'an', 'as', 'er',
		'ez', 'ia', 'ic', 'ly', 'on', 'or', 'os', 'um', 'us', 'a', 'i', 'o',
		'y')


class WordFeatures(object):
	"""Encode words as feature vectors.

	:param useunderscores: whether an underscore counts as a hyphen
		(feature ``H2``).
	:param grouping, decimal: the digit grouping and decimal separators
		accepted in numbers."""

	def __init__(self, useunderscores=False, grouping=',', decimal='.'):
		self.useunderscores = useunderscores
		self.numberre = re.compile(r'-?(?:\d[\d%(g)s]*(?:%(d)s\d*)?'
				r'|%(d)s\d+)' % dict(
				g=re.escape(grouping), d=re.escape(decimal)))

	def features(self, word, firstword=False):
		"""Return the 10-character feature vector of word.

		>>> WordFeatures().features('Geography')
		'C4H0I0D3N0'
		>>> WordFeatures().features('3,000.5')
		'C0H0I0D0N1'
		"""
		if self.isnumber(word):
			return NUMBERVECTOR
		return '%s%s%s%sN0' % (
				capitalization(word, firstword),
				self.hyphenization(word),
				inflection(word),
				derivation(word))

	def isnumber(self, word):
		"""Test whether the whole word can be read as a number."""
		return self.numberre.fullmatch(word) is not None

	def hyphenization(self, word):
		for char in word:
			if char == '-':
				return 'H1'
			elif char == '_' and self.useunderscores:
				return 'H2'
			elif char == '$':
				return 'H3'
		return 'H0'


def capitalization(word, firstword):
	if word and word[0].isupper():
		if firstword:
			return 'C1'
		elif word == word.upper():
			if any(char.isdigit() for char in word):
				return 'C2'
			return 'C3'
		return 'C4'
	return 'C0'


def sinflection(word):
	"""Test for a plural or third person ``-s`` (but not ``-ss``)."""
	return (len(word) > 2 and word[-1] == 's' and word[-2] != 's'
			and (word[-2] == 'e' or word[-2] in CONSONANTS))


def inflection(word):
	if len(word) > 3:
		if sinflection(word):
			return 'I1'
		elif word.endswith('ed'):
			return 'I2'
		elif word.endswith('ing'):
			return 'I3'
	return 'I0'


def derivation(word):
	"""Return the derivational class of word, based on its suffix."""
	if len(word) > 6:
		if sinflection(word):
			word = word[:-1]
		for n, suffix in enumerate(DERIVATIONALSUFFIXES, 1):
			if word.endswith(suffix):
				return 'D' + CODES[n]
	return 'D0'


def features(word, firstword=False):
	"""Encode word with default settings; cf. :meth:`WordFeatures.features`."""
	return DEFAULT.features(word, firstword)


DEFAULT = WordFeatures()

__all__ = ['WordFeatures', 'features', 'capitalization', 'inflection',
		'derivation', 'sinflection', 'DERIVATIONALSUFFIXES', 'NUMBERVECTOR']
