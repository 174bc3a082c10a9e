"""Identification of the arguments (complements) of heads.

Arguments are marked by adding an augmentation to their label, e.g.,
``NP-SBJ`` => ``NP-SBJ-A``. Which children of a node are arguments is
decided by the rule for the node's category in an
:class:`headprep.metadata.ArgumentContextTable`."""
from .tree import Tree
from .metadata import FixedHeadOffset, DirectionalSearch, ExplicitLabelList

ARGAUGMENTATION = 'A'


def identifyarguments(tree, treebank, headfinder, argcontexts,
		semtagstopset=frozenset(), argaugmentation=ARGAUGMENTATION,
		relabelheadchildrenasargs=False):
	"""Mark arguments in all nodes of tree, bottom-up (in-place).

	:param headfinder: a function that returns the index of the head child
		of a node, or None.
	:param argcontexts: an ArgumentContextTable.
	:param semtagstopset: augmentations that prevent a child from being
		marked by an explicit label list.
	:param relabelheadchildrenasargs: whether an explicit label list may mark
		the head child.
	:returns: the tree."""
	for node in list(tree.postorder(
			lambda n: n.children and not n.ispreterminal())):
		for idx in findarguments(node, treebank, headfinder, argcontexts,
				semtagstopset, relabelheadchildrenasargs):
			node[idx].label = treebank.addaugmentation(
					node[idx].label, argaugmentation)
	return tree


def findarguments(node, treebank, headfinder, argcontexts,
		semtagstopset=frozenset(), relabelheadchildrenasargs=False):
	"""Return the indices of the children of node that are arguments.

	A head offset that points to a preterminal (e.g., punctuation or a
	conjunction) moves on to the nearest phrasal child further away from the
	head; if there is none, there is no argument."""
	parent = treebank.getcanonical(node.label)
	rule = argcontexts.lookup(parent)
	if rule is None:
		return []
	head = headfinder(node)
	if head is None or not isinstance(node[head], Tree):
		return []
	# a head with the category of its parent indicates coordination
	if treebank.getcanonical(node[head].label) == parent:
		return []
	if isinstance(rule, FixedHeadOffset):
		idx = head + rule.offset
		if rule.offset == 0 or not 0 <= idx < len(node):
			return []
		step = 1 if rule.offset > 0 else -1
		end = len(node) if rule.offset > 0 else -1
		idx = next((n for n in range(idx, end, step)
				if isinstance(node[n], Tree)
				and not node[n].ispreterminal()), None)
		return [] if idx is None else [idx]
	elif isinstance(rule, DirectionalSearch):
		for idx in rule.indices(head, len(node)):
			child = node[idx]
			if not isinstance(child, Tree):
				continue
			if (child.label in rule.labels) != rule.negate:
				return [idx]
		return []
	elif isinstance(rule, ExplicitLabelList):
		result = []
		for idx, child in enumerate(node):
			if not isinstance(child, Tree) or (
					idx == head and not relabelheadchildrenasargs):
				continue
			nt = treebank.parsenonterminal(child.label)
			if (any(treebank.subsumes(pattern, nt) for pattern in rule.labels)
					and semtagstopset.isdisjoint(nt.augs())):
				result.append(idx)
		return result
	raise ValueError('unknown argument rule: %r' % (rule, ))


def isargument(treebank, label, argaugmentation=ARGAUGMENTATION):
	"""Test whether label is marked as argument."""
	return treebank.hasaugmentation(label, argaugmentation)


def removeargaugmentation(treebank, label, argaugmentation=ARGAUGMENTATION):
	"""Remove the argument augmentation from label, if present."""
	nt = treebank.parsenonterminal(label)
	nt.augmentations = [(delim, aug) for delim, aug in nt.augmentations
			if aug != argaugmentation]
	return str(nt)


__all__ = ['identifyarguments', 'findarguments', 'isargument',
		'removeargaugmentation', 'ARGAUGMENTATION']
