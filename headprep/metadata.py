"""Reading the metadata resource and runtime parameters.

The metadata file is a sequence of S-expressions; ``;`` starts a comment::

	(tag-map (NOUN NN) (NOUN_PROP NNP))
	(arg-contexts
		(PP (head 1))
		(VP (head-post first not ADVP PP PU))
		(S (NP-SBJ S SBAR VP))
		(* (head-pre last NP)))
	(sem-tag-arg-stop-list (ADV VOC BNF DIR EXT LOC MNR PRP TMP CLR))
	(prune-nodes (X))
	(prune-words (...))
	(arg-augmentation A)

An argument context maps a parent category to one of three rules, which
select the children of a node that are arguments of its head:

- ``(head N)``: the child ``N`` positions away from the head
  (:class:`FixedHeadOffset`).
- ``(head-pre|head-post first|last [not] LABEL...)``: scan the children to
  the left (``head-pre``) or right (``head-post``) of the head, from left to
  right (``first``) or right to left (``last``); the first child with one of
  the labels is the argument, or with ``not``, the first child without one of
  the labels (:class:`DirectionalSearch`).
- ``(LABEL...)``: every child subsumed by one of the labels
  (:class:`ExplicitLabelList`).
"""
import io
import os
import logging
from collections import namedtuple
from .tree import readsexps, tosexpstr
from .tagmap import TagMap

WILDCARD = '*'
LEFT, RIGHT = 'left', 'right'
OUTWARD, INWARD = 'outward', 'inward'

# Runtime parameters; may be specified in a parameter file, cf. readparam()
DEFAULTS = dict(
		lang='arabic',  # one of headprep.treebank.LANGUAGES
		metadata=None,  # metadata file; default: data/<lang>.metadata
		headrules=None,  # head rules file; default: data/<lang>.headrules
		tagstrategy='map',  # 'map': tag map; 'edit': delete markers
		relabelheadchildrenasargs=False,  # head child may be an argument
		addnplevel=False,  # insert NP above base NPs where needed
		repairbasenps=False,  # move final S out of base NPs
		useunderscores=False,  # word features: '_' counts as hyphen
		)


class MetadataError(ValueError):
	"""Raised for a malformed metadata file."""


class FixedHeadOffset(namedtuple('FixedHeadOffset', ['offset'])):
	"""The argument is the child at ``head + offset``."""
	__slots__ = ()

	def __str__(self):
		return '(head %d)' % self.offset


class DirectionalSearch(namedtuple('DirectionalSearch',
		['side', 'order', 'negate', 'labels'])):
	"""The argument is the first child on one side of the head that has
	(or with ``negate``, does not have) one of the given labels.

	:param side: ``'left'`` or ``'right'`` of the head.
	:param order: ``'outward'`` (away from the head) or ``'inward'``
		(towards the head)."""
	__slots__ = ()

	def indices(self, head, numchildren):
		"""The indices of the children to scan, in order."""
		if self.side == LEFT:
			if self.order == OUTWARD:
				return range(head - 1, -1, -1)
			return range(0, head)
		if self.order == OUTWARD:
			return range(head + 1, numchildren)
		return range(numchildren - 1, head, -1)

	def __str__(self):
		first = (self.side == LEFT) == (self.order == INWARD)
		return '(%s %s %s%s)' % (
				'head-pre' if self.side == LEFT else 'head-post',
				'first' if first else 'last',
				'not ' if self.negate else '',
				' '.join(sorted(self.labels)))


class ExplicitLabelList(namedtuple('ExplicitLabelList', ['labels'])):
	"""Every child subsumed by one of the labels is an argument."""
	__slots__ = ()

	def __str__(self):
		return '(%s)' % ' '.join(self.labels)


class ArgumentContextTable(object):
	"""Map of canonical parent categories to argument rules.

	A rule for ``*`` applies to parents for which there is no other rule."""

	def __init__(self, rules=()):
		self.rules = {}
		for parent, rule in (rules.items() if isinstance(rules, dict)
				else rules):
			if parent in self.rules:
				raise MetadataError('duplicate argument context for %r'
						% parent)
			self.rules[parent] = rule

	def lookup(self, parent):
		"""Return the rule for canonical category parent, or None."""
		rule = self.rules.get(parent)
		if rule is None:
			rule = self.rules.get(WILDCARD)
		return rule

	def __len__(self):
		return len(self.rules)

	def __contains__(self, parent):
		return parent in self.rules

	def __repr__(self):
		return '%s(%r)' % (self.__class__.__name__, self.rules)


Metadata = namedtuple('Metadata', ['tagmap', 'argcontexts', 'semtagstopset',
		'prunenodes', 'prunewords', 'argaugmentation'])


def parserule(sexp):
	"""Convert the S-expression of an argument context to a rule object.

	>>> rule = parserule(['head-post', 'first', 'not', 'ADVP', 'PP'])
	>>> rule.side, rule.order, rule.negate
	('right', 'outward', True)
	"""
	if not isinstance(sexp, list) or not sexp:
		raise MetadataError('expected a non-empty list as argument context; '
				'got %s' % tosexpstr(sexp))
	if any(isinstance(a, list) for a in sexp):
		raise MetadataError('unexpected nested list in argument context: %s'
				% tosexpstr(sexp))
	if sexp[0] == 'head':
		if len(sexp) != 2:
			raise MetadataError('expected (head <offset>); got %s'
					% tosexpstr(sexp))
		try:
			return FixedHeadOffset(int(sexp[1]))
		except ValueError:
			raise MetadataError('head offset is not an integer: %s'
					% tosexpstr(sexp))
	elif sexp[0] in ('head-pre', 'head-post'):
		if len(sexp) < 2 or sexp[1] not in ('first', 'last'):
			raise MetadataError('expected first or last after %s: %s'
					% (sexp[0], tosexpstr(sexp)))
		side = LEFT if sexp[0] == 'head-pre' else RIGHT
		first = sexp[1] == 'first'
		order = OUTWARD if (side == LEFT) != first else INWARD
		negate = len(sexp) > 2 and sexp[2] == 'not'
		labels = frozenset(sexp[3 if negate else 2:])
		return DirectionalSearch(side, order, negate, labels)
	return ExplicitLabelList(tuple(sexp))


def _symbols(section, sexp):
	"""Return the atoms in a section of the form ``(name (A B ...))``."""
	if (len(sexp) != 2 or not isinstance(sexp[1], list)
			or any(isinstance(a, list) for a in sexp[1])):
		raise MetadataError('expected (%s (<symbol>...)); got %s' % (
				section, tosexpstr(sexp)))
	return sexp[1]


def parsemetadata(lines, puncttag='PUNC', commas=frozenset({','})):
	"""Parse the lines of a metadata file and return a Metadata tuple."""
	tagmap = {}
	argcontexts = []
	semtagstopset = set()
	prunenodes, prunewords = set(), set()
	argaugmentation = 'A'
	for lineno, sexp in readsexps(lines, comment=';'):
		if not isinstance(sexp, list) or not sexp or not isinstance(
				sexp[0], str):
			raise MetadataError('line %d: expected a section; got %s' % (
					lineno, tosexpstr(sexp)))
		section = sexp[0]
		try:
			if section == 'tag-map':
				for pair in sexp[1:]:
					if (not isinstance(pair, list) or len(pair) != 2
							or not all(isinstance(a, str) for a in pair)):
						raise MetadataError('expected (<tag> <tag>); got %s'
								% tosexpstr(pair))
					tagmap[pair[0]] = pair[1]
			elif section == 'arg-contexts':
				for entry in sexp[1:]:
					if (not isinstance(entry, list) or len(entry) != 2
							or not isinstance(entry[0], str)):
						raise MetadataError('expected (<parent> <rule>); '
								'got %s' % tosexpstr(entry))
					if any(entry[0] == parent for parent, _ in argcontexts):
						raise MetadataError('duplicate argument context for %r'
								% entry[0])
					argcontexts.append((entry[0], parserule(entry[1])))
			elif section == 'sem-tag-arg-stop-list':
				semtagstopset.update(_symbols(section, sexp))
			elif section == 'prune-nodes':
				prunenodes.update(_symbols(section, sexp))
			elif section == 'prune-words':
				prunewords.update(_symbols(section, sexp))
			elif section == 'arg-augmentation':
				if len(sexp) != 2 or not isinstance(sexp[1], str):
					raise MetadataError('expected (arg-augmentation <symbol>)')
				argaugmentation = sexp[1]
			else:
				logging.warning('line %d: ignoring unknown metadata section %r',
						lineno, section)
		except MetadataError as err:
			raise MetadataError('line %d: %s' % (lineno, err))
	return Metadata(
			TagMap(tagmap, puncttag, commas),
			ArgumentContextTable(argcontexts),
			frozenset(semtagstopset),
			frozenset(prunenodes),
			frozenset(prunewords),
			argaugmentation)


def readmetadata(filename, treebank=None):
	"""Read a metadata file.

	:param treebank: if given, the generic punctuation tag and comma words
		of its language are used for the tag map.
	:raises MetadataError: if the file is malformed."""
	kwargs = {}
	if treebank is not None:
		kwargs = dict(puncttag=treebank.lang.puncttag,
				commas=treebank.lang.commas)
	with io.open(filename, encoding='utf8') as inp:
		try:
			result = parsemetadata(inp, **kwargs)
		except ValueError as err:  # includes unbalanced parentheses
			raise MetadataError('%s: %s' % (filename, err))
	logging.info('metadata %s: %d mapped tags, %d argument contexts, '
			'%d pruned labels', filename, len(result.tagmap),
			len(result.argcontexts), len(result.prunenodes))
	return result


def datafile(lang, ext):
	"""Return the path of a resource file distributed with this package."""
	return os.path.join(os.path.dirname(os.path.abspath(__file__)),
			'data', '%s.%s' % (lang, ext))


def readparam(filename):
	"""Parse a parameter file.

	:param filename: The file should contain a list of comma-separated
		``attribute=value`` pairs and will be read using ``eval('dict(%s)' %
		open(file).read())``.
	:returns: a dict with the values of DEFAULTS for missing keys.
	:raises ValueError: for an unrecognized key."""
	with io.open(filename, encoding='utf8') as fileobj:
		params = eval('dict(%s)' % fileobj.read())  # pylint: disable=eval-used
	for key in params:
		if key not in DEFAULTS:
			raise ValueError('unrecognized option: %r' % key)
	result = DEFAULTS.copy()
	result.update(params)
	return result


__all__ = ['FixedHeadOffset', 'DirectionalSearch', 'ExplicitLabelList',
		'ArgumentContextTable', 'Metadata', 'MetadataError', 'parserule',
		'parsemetadata', 'readmetadata', 'readparam', 'datafile', 'DEFAULTS',
		'WILDCARD', 'LEFT', 'RIGHT', 'OUTWARD', 'INWARD']
