"""Functions related to finding the linguistic head of a constituent."""
import io
import re
from .tree import Tree

HEADRULERE = re.compile(r'^(\S+)\s+(LEFT-TO-RIGHT|RIGHT-TO-LEFT'
		r'|LEFT|RIGHT|LEFTDIS|RIGHTDIS|LIKE)(?:\s+(.*))?$')


def readheadrules(filename):
	"""Read a file containing heuristic rules for head assignment.

	Example line: ``s right-to-left vmfin vafin vaimp``, which means
	traverse siblings of an S constituent from right to left, the first child
	with a label of vmfin, vafin, or vaimp will be marked as head.

	:raises ValueError: for a line that is not a valid rule."""
	headrules = {}
	with io.open(filename, encoding='utf8') as inp:
		for n, line in enumerate(inp, 1):
			line = line.strip().upper()
			if line and not line.startswith("%") and len(line.split()) >= 2:
				match = HEADRULERE.match(line)
				if match is None:
					raise ValueError('%s:%d: malformed head rule: %r' % (
							filename, n, line))
				label, direction, heads = match.groups()
				if heads is None:
					heads = ''
				headrules.setdefault(label, [])
				if direction == 'LIKE':
					if heads not in headrules:
						raise ValueError('%s:%d: %s is LIKE undefined label %r'
								% (filename, n, label, heads))
					headrules[label].extend(headrules[heads])
				else:
					headrules[label].append((direction, heads.split()))
	return headrules


class HeadFinder(object):
	"""Use head finding rules to select one child of a node as head.

	Calling the object with a node returns the index of the head child,
	or None if the node has no head (a preterminal or an empty node).

	:param headrules: a dictionary as returned by :func:`readheadrules`.
	:param treebank: a :class:`headprep.treebank.Treebank` object.
	"""

	def __init__(self, headrules, treebank):
		self.headrules = headrules
		self.treebank = treebank

	def __call__(self, node):
		return self.findhead(node)

	def findhead(self, node):
		"""Return the index of the head child of node, or None."""
		def find(heads, children):
			"""Match children with possible heads."""
			for head in heads:
				for n, child in children:
					if (isinstance(child, Tree)
							and canonical(child.label) == head):
						return n

		def invfind(heads, children):
			"""Inverted version of find()."""
			for n, child in children:
				for head in heads:
					if (isinstance(child, Tree)
							and canonical(child.label) == head):
						return n

		if not node.children or node.ispreterminal():
			return None
		canonical = self.treebank.getcanonical
		ispunctuation = self.treebank.ispunctuation
		head = None
		children = list(enumerate(node))
		for direction, heads in self.headrules.get(
				canonical(node.label).upper(), []):
			if direction.startswith('LEFT'):
				children = list(enumerate(node))
			elif direction.startswith('RIGHT'):
				children = list(enumerate(node))[::-1]
			else:
				raise ValueError('expected RIGHT or LEFT.')
			if direction in ('LEFTDIS', 'RIGHTDIS'):
				head = invfind(heads, children)
			else:
				head = find(heads, children)
			if head is not None:
				break
		if head is None:
			# default head is initial/last nonterminal (depending on direction)
			for n, child in children:
				if isinstance(child, Tree) and not ispunctuation(child.label):
					return n
			return children[0][0]
		# a head preceded by a conjunction is the last conjunct; take the
		# nearest non-punctuation child before the conjunction instead.
		if (head >= 2 and isinstance(node[head - 1], Tree)
				and self.treebank.isconjunction(node[head - 1].label)
				and not self.treebank.isbasenp(node.label)):
			for n in range(head - 2, -1, -1):
				if not ispunctuation(node[n].label):
					return n
		return head


__all__ = ['readheadrules', 'HeadFinder']
