"""Treebank-specific label predicates and nonterminal decomposition.

A nonterminal label such as ``NP-SBJ-1`` consists of a base category
(``NP``), a sequence of augmentations each preceded by a delimiter
(``-SBJ``), and an optional numeric index (``-1``). All properties that
differ between treebanks are collected in a :class:`Language` record; the
:class:`Treebank` object answers questions about labels and nodes using
such a record."""
import re
from collections import namedtuple
from .tree import Tree

Language = namedtuple('Language', [
		'name',
		'delimiters',  # characters that introduce an augmentation
		'exceptions',  # labels that start with one of these are taken as-is
		'canonical',  # map of base labels to canonical labels
		'nulltag',  # preterminal label of null elements
		'puncttoraise',  # punctuation tags that are raised
		'puncttags',  # all punctuation tags
		'puncttag',  # generic punctuation tag, resolved by surface form
		'commas',  # words that are their own tag under puncttag
		'nplabels',
		'basenp',
		'sentencelabels',
		'subjectless',
		'subjectlesshead',  # required head category of subjectless sentences
		'subject',  # function tag of subjects
		'conjunctions',
		'possessive',
		'placeholder',  # root label of a tree that should be skipped
		'ignorepossessive',  # whether base NPs ignore possessive NP children
		'prenullhooks',  # hooks that run before null element removal
		'hooks',  # hooks that run after punctuation raising
		'posthooks',  # hooks that run after augmentation stripping
		])

ARABIC = Language(
		name='arabic',
		delimiters='-=|',
		exceptions=('-LRB-', '-RRB-', '-NONE-', 'VP-SBJ'),
		canonical={'NPB': 'NP', 'SG': 'S', 'VP-SBJ': 'VP'},
		nulltag='-NONE-',
		puncttoraise=frozenset({',', ':'}),
		puncttags=frozenset({'PUNC', ',', '.', ':', '``', "''",
			'-LRB-', '-RRB-', 'NON_ALPHABETIC',
			'NON_ALPHABETIC_PUNCTUATION'}),
		puncttag='PUNC',
		commas=frozenset({','}),
		nplabels=frozenset({'NP'}),
		basenp='NPB',
		sentencelabels=frozenset({'S'}),
		subjectless='SG',
		subjectlesshead=None,
		subject='SBJ',
		conjunctions=frozenset({'CC', 'CONJ', 'CONJP'}),
		possessive='POS',
		placeholder='X',
		ignorepossessive=True,
		prenullhooks=(),
		hooks=('marksubjectvps', ),
		posthooks=(),
		)

ENGLISH = Language(
		name='english',
		delimiters='-=',
		exceptions=('-LRB-', '-RRB-', '-LCB-', '-RCB-', '-NONE-'),
		canonical={'NPB': 'NP', 'SG': 'S'},
		nulltag='-NONE-',
		puncttoraise=frozenset({',', ':'}),
		puncttags=frozenset({',', '.', ':', '``', "''",
			'-LRB-', '-RRB-', '-LCB-', '-RCB-'}),
		puncttag='PUNC',
		commas=frozenset({','}),
		nplabels=frozenset({'NP'}),
		basenp='NPB',
		sentencelabels=frozenset({'S'}),
		subjectless='SG',
		subjectlesshead=None,
		subject='SBJ',
		conjunctions=frozenset({'CC', 'CONJP'}),
		possessive='POS',
		placeholder='X',
		ignorepossessive=False,
		prenullhooks=('relabelsubjectlesssentences', ),
		hooks=(),
		posthooks=(),
		)

PORTUGUESE = ENGLISH._replace(
		name='portuguese',
		puncttags=ENGLISH.puncttags | {'PU', ';', '!', '?'},
		conjunctions=frozenset({'CONJ-C', 'CC', 'CONJP'}),
		subjectlesshead='VP',
		prenullhooks=('relabelsubjectlesssentences', ),
		posthooks=('fixsubjectlesssentences', ),
		)

# variant that passes the argument mark of an NP on to its NP head
PORTUGUESENPARG = PORTUGUESE._replace(
		name='portuguese-npargthread',
		posthooks=('fixsubjectlesssentences', 'threadnpargaugmentations'),
		)

LANGUAGES = {lang.name: lang for lang in (
		ARABIC, ENGLISH, PORTUGUESE, PORTUGUESENPARG)}


class Nonterminal(object):
	"""A nonterminal label decomposed into base, augmentations and index.

	``augmentations`` is a list of ``(delimiter, augmentation)`` pairs in the
	order of the original label; ``index`` is None or a string of digits,
	preceded by ``indexdelim``. ``str()`` reproduces the original label."""
	__slots__ = ('base', 'augmentations', 'index', 'indexdelim')

	def __init__(self, base, augmentations=(), index=None, indexdelim='-'):
		self.base = base
		self.augmentations = list(augmentations)
		self.index = index
		self.indexdelim = indexdelim

	def augs(self):
		"""Return the augmentations without their delimiters."""
		return [aug for _, aug in self.augmentations]

	def __str__(self):
		return '%s%s%s' % (self.base,
				''.join(delim + aug for delim, aug in self.augmentations),
				'' if self.index is None else self.indexdelim + self.index)

	def __repr__(self):
		return '%s(%r, %r, %r)' % (self.__class__.__name__, self.base,
				self.augmentations, self.index)


class Treebank(object):
	"""Predicates on labels and nodes for a given :class:`Language`."""

	def __init__(self, lang):
		if isinstance(lang, str):
			try:
				lang = LANGUAGES[lang]
			except KeyError:
				raise ValueError('unknown language %r; choose from: %s' % (
						lang, ', '.join(sorted(LANGUAGES))))
		self.lang = lang
		self.augre = re.compile('([%s])([^%s]*)' % (
				re.escape(lang.delimiters), re.escape(lang.delimiters)))

	def _exception(self, label):
		"""Return the exception this label starts with, if any."""
		for exc in self.lang.exceptions:
			if label.startswith(exc):
				return exc
		return None

	def _basesplit(self, label):
		"""Return the index where the augmentations of label start."""
		exc = self._exception(label)
		if exc is not None:
			return len(exc)
		for n, char in enumerate(label[1:], 1):
			if char in self.lang.delimiters:
				return n
		return len(label)

	def parsenonterminal(self, label):
		"""Decompose a label into a :class:`Nonterminal`.

		>>> tb = Treebank('english')
		>>> nt = tb.parsenonterminal('NP-SBJ-1')
		>>> nt.base, nt.augs(), nt.index
		('NP', ['SBJ'], '1')
		>>> str(nt)
		'NP-SBJ-1'
		"""
		if isinstance(label, Nonterminal):
			return label
		n = self._basesplit(label)
		augmentations = self.augre.findall(label, n)
		index, indexdelim = None, '-'
		if augmentations and augmentations[-1][1].isdigit():
			indexdelim, index = augmentations.pop()
		return Nonterminal(label[:n], augmentations, index, indexdelim)

	def stripaugmentation(self, label):
		"""Remove augmentations and index; ``NP-SBJ-1`` => ``NP``."""
		return label[:self._basesplit(label)]

	def getcanonical(self, label):
		"""Strip augmentations and map to the canonical category.

		>>> Treebank('english').getcanonical('NPB-A')
		'NP'
		"""
		base = self.stripaugmentation(label)
		return self.lang.canonical.get(base, base)

	def subsumes(self, pattern, label):
		"""Test whether nonterminal pattern subsumes label.

		True if the canonical bases are equal (or the pattern's base is
		``*``) and every augmentation of the pattern occurs in label."""
		pattern = self.parsenonterminal(pattern)
		other = self.parsenonterminal(label)
		if pattern.base != '*' and (self.lang.canonical.get(
				pattern.base, pattern.base) != self.lang.canonical.get(
				other.base, other.base)):
			return False
		otheraugs = set(other.augs())
		return all(aug in otheraugs for aug in pattern.augs())

	def addaugmentation(self, label, aug):
		"""Add augmentation to label, unless already present.

		The augmentation goes before the index, if any."""
		nt = self.parsenonterminal(label)
		if aug in nt.augs():
			return label
		nt.augmentations.append((self.lang.delimiters[0], aug))
		return str(nt)

	def hasaugmentation(self, label, aug):
		"""Test whether label carries augmentation aug."""
		return aug in self.parsenonterminal(label).augs()

	@staticmethod
	def ispreterminal(node):
		"""Test whether node is a Tree with a single terminal child."""
		return isinstance(node, Tree) and node.ispreterminal()

	def isnullelement(self, node):
		"""Test whether node is a null element preterminal ``(-NONE- *)``."""
		return self.ispreterminal(node) and node.label == self.lang.nulltag

	def ispuncttoraise(self, node):
		"""Test whether node is a punctuation preterminal to be raised."""
		return self.ispreterminal(node) and node.label in self.lang.puncttoraise

	def ispunctuation(self, label):
		"""Test whether label is a punctuation tag."""
		return label in self.lang.puncttags

	def isnp(self, label):
		return self.getcanonical(label) in self.lang.nplabels

	def isbasenp(self, label):
		return self.stripaugmentation(label) == self.lang.basenp

	def issentence(self, label):
		return self.getcanonical(label) in self.lang.sentencelabels

	def isconjunction(self, label):
		return label in self.lang.conjunctions

	def ispossessive(self, label):
		return label == self.lang.possessive

	def issubject(self, label):
		"""Test whether label has the subject function tag."""
		return self.hasaugmentation(label, self.lang.subject)


__all__ = ['Language', 'Nonterminal', 'Treebank', 'LANGUAGES', 'ARABIC',
		'ENGLISH', 'PORTUGUESE']
