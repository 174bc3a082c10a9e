"""Tree objects and S-expression input for treebank parses."""
# This is an adaptation of the tree.py file from NLTK,
# reduced to the mutable Tree class with string terminals.
# Original notice:
# Natural Language Toolkit: Text Trees
#
# Copyright (C) 2001-2010 NLTK Project
# Author: Edward Loper <edloper@gradient.cis.upenn.edu>
#         Steven Bird <sb@csse.unimelb.edu.au>
#         Nathan Bodenstab <bodenstab@cslu.ogi.edu> (tree transforms)
# URL: <http://www.nltk.org/>
# For license information, see LICENSE.TXT
import re

SEXPTOKENRE = re.compile(r'\(|\)|[^\s()]+')


class MalformedTreeError(ValueError):
	"""Raised when an S-expression does not describe a well-formed tree."""


class Tree(object):
	"""A mutable, labeled, n-ary tree structure.

	A tree's children are encoded as a list of terminals and subtrees, where
	a terminal is a string (a word) and a subtree is a nested Tree. A node
	with exactly one terminal child is a preterminal ``(tag word)``.

	The constructor can be called in two ways:

	- ``Tree(label, children)`` constructs a new tree with the specified label
		and list of children.
	- ``Tree(s)`` constructs a new tree by parsing the string s. Equivalent to
		calling the class method ``Tree.parse(s)``.
	"""
	__slots__ = ('label', 'children')

	def __new__(cls, label_or_str=None, children=None):
		if label_or_str is None:
			return object.__new__(cls)  # used by copy.deepcopy
		if children is None:
			if not isinstance(label_or_str, str):
				raise TypeError("%s: Expected a label and child list "
						"or a single string; got: %s" % (
						cls.__name__, type(label_or_str)))
			return cls.parse(label_or_str)
		if isinstance(children, str) or not hasattr(children, '__iter__'):
			raise TypeError("%s() argument 2 should be a list, not a "
					"string" % cls.__name__)
		return object.__new__(cls)

	def __init__(self, label_or_str, children=None):
		# __new__ may delegate to Tree.parse(), in which case __init__ has
		# already been called on the result.
		if children is None:
			return
		self.label = label_or_str
		self.children = list(children)

	# === Comparison operators ==================================
	def __eq__(self, other):
		if not isinstance(other, Tree):
			return False
		return (self.label == other.label
				and self.children == other.children)

	def __ne__(self, other):
		return not self.__eq__(other)

	# === Delegated list operations ==============================
	def insert(self, index, child):
		"""Insert child at integer index."""
		self.children.insert(index, child)

	def pop(self, index=-1):
		"""Remove child at specified integer index (or default to last)."""
		return self.children.pop(index)

	def remove(self, child):
		"""Remove child, based on identity."""
		for n, a in enumerate(self.children):
			if a is child:
				del self.children[n]
				return
		raise ValueError('child not in tree')

	def __iter__(self):
		return self.children.__iter__()

	def __len__(self):
		return self.children.__len__()

	# === Indexing ==============================================
	def __getitem__(self, index):
		return self.children.__getitem__(index)

	def __setitem__(self, index, value):
		return self.children.__setitem__(index, value)

	# === Basic tree operations =================================
	def ispreterminal(self):
		"""Test whether this node has a single terminal child."""
		return len(self.children) == 1 and isinstance(self.children[0], str)

	def leaves(self):
		""":returns: list containing this tree's terminals, in order."""
		leaves = []
		for child in self.children:
			if isinstance(child, Tree):
				leaves.extend(child.leaves())
			else:
				leaves.append(child)
		return leaves

	def subtrees(self, condition=None):
		"""Yield subtrees of this tree in depth-first, pre-order traversal.

		:param condition: a function ``Tree -> bool`` to filter which nodes are
			yielded (does not affect whether children are visited).

		NB: store traversal as list before any structural modifications."""
		agenda = [self]
		while agenda:
			node = agenda.pop()
			if isinstance(node, Tree):
				if condition is None or condition(node):
					yield node
				agenda.extend(node[::-1])

	def postorder(self, condition=None):
		"""A generator that does a post-order traversal of this tree.

		NB: store traversal as list before any structural modifications.

		:yields: Tree objects."""
		agenda = [self]
		visited = set()
		while agenda:
			node = agenda[-1]
			if not isinstance(node, Tree):
				agenda.pop()
			elif id(node) in visited:
				agenda.pop()
				if condition is None or condition(node):
					yield node
			else:
				agenda.extend(node[::-1])
				visited.add(id(node))

	# === Convert, copy =========================================
	@classmethod
	def convert(cls, val):
		"""Convert a tree, recursively copying every node."""
		if isinstance(val, Tree):
			return cls(val.label, [cls.convert(child) for child in val])
		return val

	def copy(self, deep=False):
		"""Create a copy of this tree."""
		if not deep:
			return self.__class__(self.label, self)
		return self.__class__.convert(self)

	# === Parsing ===============================================
	@classmethod
	def parse(cls, s):
		"""Parse a bracketed tree string and return the resulting tree.

		Trees are represented as nested bracketings, such as:
		``(S (NP (NNP John)) (VP (V runs)))``. An unlabeled outer bracket, as
		in ``( (S ...) )``, is removed.

		:raises MalformedTreeError: if the string is not a single tree."""
		sexps = list(readsexps([s]))
		if len(sexps) != 1:
			raise MalformedTreeError('expected exactly one tree; got %d: %r'
					% (len(sexps), s))
		return fromsexp(sexps[0][1])

	# === String Representations ================================
	def __repr__(self):
		childstr = ", ".join(repr(c) for c in self)
		return '%s(%r, [%s])' % (self.__class__.__name__, self.label, childstr)

	def __str__(self):
		return self._pprint_flat()

	def _pprint_flat(self):
		"""Pretty-printing helper function."""
		childstrs = []
		for child in self.children:
			if isinstance(child, Tree):
				childstrs.append(child._pprint_flat())
			else:
				childstrs.append(child)
		return '(%s %s)' % (self.label, ' '.join(childstrs))


def readsexps(lines, comment=None):
	"""Read S-expressions from an iterable of lines.

	Atoms are sequences of non-whitespace characters other than parentheses.
	A list is returned as a Python list of atoms and lists. An S-expression
	may span several lines; several S-expressions may share a line.

	:param comment: if given, everything after this character in a line is
		ignored.

	:yields: tuples ``(lineno, sexp)`` where lineno is the line on which
		the S-expression started.
	:raises ValueError: for an unbalanced closing parenthesis, or for input
		ending inside an S-expression."""
	stack = []
	start = None
	lineno = 0
	for lineno, line in enumerate(lines, 1):
		if comment is not None and comment in line:
			line = line[:line.index(comment)]
		for match in SEXPTOKENRE.finditer(line):
			token = match.group()
			if token == '(':
				if not stack:
					start = lineno
				stack.append([])
			elif token == ')':
				if not stack:
					raise ValueError('line %d: unbalanced closing '
							'parenthesis' % lineno)
				sexp = stack.pop()
				if stack:
					stack[-1].append(sexp)
				else:
					yield start, sexp
			elif stack:
				stack[-1].append(token)
			else:
				yield lineno, token
	if stack:
		raise ValueError('line %d: unexpected end of input; S-expression '
				'starting on line %d is not closed' % (lineno, start))


def fromsexp(sexp):
	"""Convert an S-expression as read by :func:`readsexps` into a Tree.

	An unlabeled wrapper around a single tree, as in ``( (S ...) )``,
	is stripped.

	:raises MalformedTreeError: if the S-expression is not a labeled list."""
	if isinstance(sexp, list) and len(sexp) == 1 and isinstance(
			sexp[0], list):
		sexp = sexp[0]
	if not isinstance(sexp, list):
		raise MalformedTreeError('expected a tree; got atom %r' % sexp)
	return _fromsexp(sexp)


def _fromsexp(sexp):
	"""Recursive helper for fromsexp."""
	if not sexp:
		raise MalformedTreeError('empty list in tree')
	if not isinstance(sexp[0], str):
		raise MalformedTreeError('expected a label; got %s' % tosexpstr(
				sexp[0]))
	return Tree(sexp[0], [_fromsexp(child) if isinstance(child, list)
			else child for child in sexp[1:]])


def tosexpstr(sexp):
	"""Format an S-expression (nested lists of atoms) as a string."""
	if isinstance(sexp, list):
		return '(%s)' % ' '.join(tosexpstr(a) for a in sexp)
	return sexp


__all__ = ['Tree', 'MalformedTreeError', 'readsexps', 'fromsexp',
		'tosexpstr']
