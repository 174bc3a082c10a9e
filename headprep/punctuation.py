"""Punctuation related functions."""
import logging
from .tree import Tree


def raisepunctuation(tree, treebank):
	"""Raise punctuation at the edges of constituents (in-place).

	Punctuation preterminals to be raised (cf.
	``Treebank.ispuncttoraise``) at the right edge of a constituent are
	moved up to become the right sibling of that constituent; in a second
	pass, the same is done for punctuation at left edges. Punctuation that
	ends up at an edge of the root is removed.

	:returns: the list of removed punctuation preterminals.

	>>> from headprep.treebank import Treebank
	>>> tree = Tree('(S (NP (NN dog) (, ,)) (VP (VB barks)))')
	>>> raisepunctuation(tree, Treebank('english'))
	[]
	>>> print(tree)
	(S (NP (NN dog)) (, ,) (VP (VB barks)))
	"""
	pruned = []
	for lefttoright in (True, False):
		queue = []
		_raisepunct(tree, queue, lefttoright, treebank)
		pruned.extend(queue)
	return pruned


def _raisepunct(node, queue, lefttoright, treebank):
	"""Visit the children of node in one direction.

	The punctuation at the final edge (in the direction of traversal) is
	removed and added to the queue; a non-empty queue after visiting a
	child that is not the last is emptied into the node, directly after
	that child."""
	if not isinstance(node, Tree) or node.ispreterminal() or not node:
		return
	if allpuncttoraise(node, treebank):
		logging.warning('all children are punctuation to raise:\n\t%s', node)
		return
	step = 1 if lefttoright else -1
	i = 0 if lefttoright else len(node) - 1
	while 0 <= i < len(node):
		last = len(node) - 1 if lefttoright else 0
		_raisepunct(node[i], queue, lefttoright, treebank)
		if i == last:
			removed = []
			while node and treebank.ispuncttoraise(node[last]):
				removed.append(node.pop(last))
				last = len(node) - 1 if lefttoright else 0
			# removed from the outside in; the queue is in surface order
			# for the direction of traversal
			queue.extend(reversed(removed))
			break
		elif queue:
			if lefttoright:
				for n, punct in enumerate(queue, i + 1):
					node.insert(n, punct)
				i += len(queue)
			else:
				# inserting at i moves the current child to the right
				for punct in queue:
					node.insert(i, punct)
			del queue[:]
		i += step


def allpuncttoraise(node, treebank):
	"""Test whether all children of node are punctuation to be raised."""
	return all(treebank.ispuncttoraise(child) for child in node)


__all__ = ['raisepunctuation', 'allpuncttoraise']
