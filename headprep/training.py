"""Preprocessing of treebank trees for training a head-driven parser.

The passes of :meth:`Training.preprocess`, in order:

1. transform part-of-speech tags
2. prune nodes and words
3. mark base NPs
4. remove null elements
5. raise punctuation
6. language specific relabeling (e.g., marking VPs with a subject)
7. identify arguments
8. strip augmentations

Language specific hooks may also run before step 4 (they need the null
elements) or after step 8."""
import logging
from .tree import Tree, MalformedTreeError
from .treebank import Treebank
from .heads import readheadrules, HeadFinder
from .metadata import readmetadata, datafile, DEFAULTS
from .tagmap import TagEditor
from .punctuation import raisepunctuation
from .arguments import identifyarguments, isargument

PASSES = ('transformtags', 'prune', 'addbasenps', 'removenullelements',
		'raisepunctuation', 'identifyarguments', 'stripaugmentations')
INVALID = 'invalid tree'


class Training(object):
	"""Configuration and passes for preprocessing training trees.

	:param treebank: a :class:`headprep.treebank.Treebank`.
	:param headfinder: a function returning the index of the head child of
		a node, or None.
	:param metadata: a :class:`headprep.metadata.Metadata` tuple.
	:param tagstrategy: ``'map'`` to normalize tags with the tag map of the
		metadata; ``'edit'`` to delete morphological markers from tags.
	:param relabelheadchildrenasargs: whether an explicit list of argument
		labels applies to the head child as well.
	:param addnplevel: whether to insert an NP above a base NP that is not
		the head of an NP, or that is in a coordination.
	:param repairbasenps: whether a sentence at the end of a base NP is moved
		out of it.

	The (word, tag) pairs of preterminals removed by pruning are collected in
	the set ``prunedpreterms``; those of punctuation raised out of the root in
	the set ``prunedpunctuation``."""

	def __init__(self, treebank, headfinder, metadata, tagstrategy='map',
			relabelheadchildrenasargs=False, addnplevel=False,
			repairbasenps=False):
		self.treebank = treebank
		self.headfinder = headfinder
		self.metadata = metadata
		if tagstrategy == 'map':
			self.tagger = metadata.tagmap
		elif tagstrategy == 'edit':
			self.tagger = TagEditor()
		else:
			raise ValueError('tagstrategy should be map or edit; got %r'
					% tagstrategy)
		self.relabelheadchildrenasargs = relabelheadchildrenasargs
		self.addnplevel = addnplevel
		self.repairbasenps = repairbasenps
		self.prunedpreterms = set()
		self.prunedpunctuation = set()

	@classmethod
	def fromparams(cls, params):
		"""Construct from a dictionary with the keys of ``DEFAULTS``.

		Missing metadata and head rule files default to the files for the
		language distributed with this package."""
		params = dict(DEFAULTS, **params)
		treebank = Treebank(params['lang'])
		lang = treebank.lang.name.split('-')[0]
		metadata = readmetadata(params['metadata']
				or datafile(lang, 'metadata'), treebank)
		headrules = readheadrules(params['headrules']
				or datafile(lang, 'headrules'))
		logging.info('language: %s; tag strategy: %s; %d head rules',
				treebank.lang.name, params['tagstrategy'], len(headrules))
		return cls(treebank, HeadFinder(headrules, treebank), metadata,
				tagstrategy=params['tagstrategy'],
				relabelheadchildrenasargs=params['relabelheadchildrenasargs'],
				addnplevel=params['addnplevel'],
				repairbasenps=params['repairbasenps'])

	def preprocess(self, tree):
		"""Return a preprocessed copy of tree.

		:raises MalformedTreeError: if tree is not well-formed."""
		reason = malformed(tree)
		if reason is not None:
			raise MalformedTreeError('%s: %s' % (reason, tree))
		tree = tree.copy(deep=True)
		lang = self.treebank.lang
		self.transformtags(tree)
		self.prune(tree)
		self.addbasenps(tree)
		self.runhooks(lang.prenullhooks, tree)
		self.removenullelements(tree)
		self.raisepunctuation(tree)
		self.runhooks(lang.hooks, tree)
		self.identifyarguments(tree)
		self.stripaugmentations(tree)
		self.runhooks(lang.posthooks, tree)
		return tree

	def runhooks(self, hooks, tree):
		"""Apply the methods with the given names to tree."""
		for name in hooks:
			getattr(self, name)(tree)
		return tree

	def normalizetag(self, word, tag):
		"""Return the normalized tag of a word with the active tag strategy."""
		return self.tagger.transform(word, tag)

	def preprocesstest(self, words, tags):
		"""Normalize the candidate tags of a test sentence.

		:param words: a list of words.
		:param tags: for each word, a list of candidate tags.
		:returns: a new list of lists of tags; duplicates are removed."""
		result = []
		for word, wordtags in zip(words, tags):
			newtags = []
			for tag in wordtags:
				tag = self.normalizetag(word, tag)
				if tag not in newtags:
					newtags.append(tag)
			result.append(newtags)
		return result

	# === Validity ==============================================
	def isvalidtree(self, tree):
		"""Test whether tree can be used for training."""
		return self.skip(tree) is None

	def skip(self, tree):
		"""Return None if tree is valid; otherwise the reason to skip it."""
		if (malformed(tree) is not None
				or tree.label == self.treebank.lang.placeholder
				or self.allpruned(tree) or self.allnull(tree)):
			return INVALID
		return None

	def allpruned(self, node):
		"""Test whether pruning would remove every node of the tree."""
		if node.label in self.metadata.prunenodes:
			return True
		if node.ispreterminal():
			return node[0] in self.metadata.prunewords
		return all(self.allpruned(child) for child in node)

	def allnull(self, tree):
		"""Test whether every preterminal of tree is a null element."""
		return all(self.treebank.isnullelement(node) for node
				in tree.subtrees(lambda n: n.ispreterminal()))

	# === Passes ================================================
	def transformtags(self, tree):
		"""Normalize the tag of each preterminal, except null elements."""
		for node in tree.subtrees(lambda n: n.ispreterminal()
				and not self.treebank.isnullelement(n)):
			node.label = self.normalizetag(node[0], node.label)
		return tree

	def prune(self, tree):
		"""Remove nodes with a label to prune, and preterminals of words to
		prune; nodes left without children are removed as well."""
		prunenodes = self.metadata.prunenodes
		prunewords = self.metadata.prunewords

		def prunable(node):
			return (node.label in prunenodes
					or (node.ispreterminal() and node[0] in prunewords))

		for node in removenodes(tree, prunable):
			self.prunedpreterms.update((preterm[0], preterm.label)
					for preterm in node.subtrees(lambda n: n.ispreterminal()))
		return tree

	def removenullelements(self, tree):
		"""Remove null elements, and nodes left without children."""
		removenodes(tree, self.treebank.isnullelement)
		return tree

	def raisepunctuation(self, tree):
		"""Raise punctuation at constituent edges; cf.
		:func:`headprep.punctuation.raisepunctuation`."""
		self.prunedpunctuation.update((preterm[0], preterm.label)
				for preterm in raisepunctuation(tree, self.treebank))
		return tree

	def addbasenps(self, tree):
		"""Relabel NPs that do not dominate another NP as base NPs.

		Nodes are visited top-down, so whether an NP is a base NP depends on
		its original children. An NP that ends in a possessive marker does not
		count as NP child, unless the language ignores possessives."""
		self._addbasenps(None, None, tree)
		return tree

	def _addbasenps(self, parent, idx, node):
		if self._isbasenp(node):
			node.label = self._relabel(node.label, self.treebank.lang.basenp)
			if (self.addnplevel and parent is not None
					and self._needsnplevel(parent, idx)):
				nt = self.treebank.parsenonterminal(node.label)
				nt.base = self.treebank.lang.canonical.get(nt.base, nt.base)
				parent[idx] = Tree(str(nt), [node])
				node.label = self.treebank.lang.basenp
			if (self.repairbasenps and parent is not None and len(node) > 1
					and isinstance(node[-1], Tree)
					and not node[-1].ispreterminal()
					and self.treebank.issentence(node[-1].label)):
				parent.insert(idx + 1, node.pop())
		i = 0
		while i < len(node):
			child = node[i]
			if isinstance(child, Tree) and not child.ispreterminal():
				self._addbasenps(node, i, child)
			i += 1

	def _isbasenp(self, node):
		"""Test whether node is an NP that dominates no other NP."""
		treebank = self.treebank
		if (node.ispreterminal() or not treebank.isnp(node.label)
				or treebank.isbasenp(node.label)):
			return False
		for child in node:
			if (isinstance(child, Tree) and not child.ispreterminal()
					and treebank.isnp(child.label)
					and (treebank.lang.ignorepossessive
						or not self._ispossessive(child))):
				return False
		return True

	def _ispossessive(self, node):
		"""Test whether NP node ends in a possessive marker."""
		return (isinstance(node[-1], Tree) and node[-1].ispreterminal()
				and self.treebank.ispossessive(node[-1].label))

	def _needsnplevel(self, parent, idx):
		"""Test whether the base NP at parent[idx] needs an NP above it.

		Under an NP, only a base NP in a coordination, or one that is not the
		head of an NP that is not itself a base NP, gets an NP level."""
		if not self.treebank.isnp(parent.label):
			return True
		head = self.headfinder(parent)
		return self.iscoordinated(parent, head) or (
				head != idx and not self.treebank.isbasenp(parent.label))

	def iscoordinated(self, node, head):
		"""Test whether node is a coordinated phrase.

		True if a conjunction follows the head and is not the last child, or
		if the head is preceded (ignoring punctuation) by a conjunction that is
		not the first child."""
		treebank = self.treebank
		if head is None:
			return False
		for n in range(head + 1, len(node) - 1):
			if (isinstance(node[n], Tree)
					and treebank.isconjunction(node[n].label)):
				return True
		for n in range(head - 1, -1, -1):
			if not treebank.ispunctuation(node[n].label):
				return n > 0 and treebank.isconjunction(node[n].label)
		return False

	def identifyarguments(self, tree):
		"""Mark arguments; cf. :func:`headprep.arguments.identifyarguments`."""
		return identifyarguments(tree, self.treebank, self.headfinder,
				self.metadata.argcontexts, self.metadata.semtagstopset,
				self.metadata.argaugmentation,
				relabelheadchildrenasargs=self.relabelheadchildrenasargs)

	def stripaugmentations(self, tree):
		"""Remove all augmentations and indices from nonterminals, except
		argument augmentations."""
		keep = {self.metadata.argaugmentation}
		for node in tree.subtrees(lambda n: not n.ispreterminal()):
			nt = self.treebank.parsenonterminal(node.label)
			nt.augmentations = [(delim, aug) for delim, aug
					in nt.augmentations if aug in keep]
			nt.index = None
			node.label = str(nt)
		return tree

	# === Language specific hooks ===============================
	def marksubjectvps(self, tree):
		"""Relabel VPs with a subject child as ``VP-SBJ``."""
		treebank = self.treebank
		pattern = '*%s%s' % (treebank.lang.delimiters[0],
				treebank.lang.subject)
		for node in tree.subtrees(lambda n: not n.ispreterminal()):
			if (treebank.stripaugmentation(node.label) == 'VP'
					and any(isinstance(child, Tree)
						and treebank.subsumes(pattern, child.label)
						for child in node)):
				node.label = self._relabel(node.label, 'VP-SBJ')
		return tree

	def relabelsubjectlesssentences(self, tree):
		"""Relabel sentences whose subject is a null element.

		A sentence is subjectless if it has a subject child that dominates
		nothing but a null element."""
		treebank = self.treebank
		for node in tree.subtrees(lambda n: not n.ispreterminal()
				and treebank.stripaugmentation(n.label)
				in treebank.lang.sentencelabels):
			if not any(isinstance(child, Tree)
					and treebank.issubject(child.label)
					and self._isnullchain(child) for child in node):
				continue
			if treebank.lang.subjectlesshead is not None:
				head = self.headfinder(node)
				if head is None or treebank.getcanonical(
						node[head].label) != treebank.lang.subjectlesshead:
					continue
			node.label = self._relabel(node.label, treebank.lang.subjectless)
		return tree

	def _isnullchain(self, node):
		"""Test whether node dominates only a null element."""
		while (isinstance(node, Tree) and len(node) == 1
				and not node.ispreterminal()):
			node = node[0]
		return self.treebank.isnullelement(node)

	def fixsubjectlesssentences(self, tree):
		"""Relabel subjectless sentences that have an argument before their
		head as ordinary sentences."""
		treebank = self.treebank
		sentence = treebank.lang.canonical.get(
				treebank.lang.subjectless, treebank.lang.subjectless)
		for node in tree.subtrees(lambda n: not n.ispreterminal()
				and treebank.stripaugmentation(n.label)
				== treebank.lang.subjectless):
			head = self.headfinder(node)
			if head is not None and any(isinstance(child, Tree)
					and isargument(treebank, child.label,
						self.metadata.argaugmentation)
					for child in node[:head]):
				node.label = self._relabel(node.label, sentence)
		return tree

	def threadnpargaugmentations(self, tree):
		"""Add the argument augmentation of an NP to its NP head child."""
		treebank = self.treebank
		argaug = self.metadata.argaugmentation
		for node in tree.subtrees(lambda n: not n.ispreterminal()):
			if not (treebank.isnp(node.label)
					and isargument(treebank, node.label, argaug)):
				continue
			head = self.headfinder(node)
			if head is None or not isinstance(node[head], Tree):
				continue
			child = node[head]
			if (treebank.isnp(child.label) and not child.ispreterminal()
					and not isargument(treebank, child.label, argaug)):
				child.label = treebank.addaugmentation(child.label, argaug)
		return tree

	def _relabel(self, label, base):
		"""Replace the base category of label, keeping augmentations."""
		nt = self.treebank.parsenonterminal(label)
		nt.base = base
		return str(nt)


def removenodes(tree, predicate):
	"""Remove nodes for which predicate is true, and any nodes left
	without children (in-place).

	:returns: the list of removed nodes for which predicate was true."""
	removed = []
	_removenodes(tree, predicate, removed)
	return removed


def _removenodes(node, predicate, removed):
	for child in node[:]:
		if not isinstance(child, Tree):
			continue
		if predicate(child):
			node.remove(child)
			removed.append(child)
		elif not child.ispreterminal():
			_removenodes(child, predicate, removed)
			if not child:
				node.remove(child)


def malformed(tree):
	"""Return the reason tree is malformed, or None if it is well-formed."""
	if not isinstance(tree, Tree):
		return 'not a tree'
	if tree.ispreterminal():
		return 'tree is a preterminal'
	for node in tree.subtrees():
		if not node.children:
			return 'node %s without children' % node.label
		if not node.ispreterminal() and not all(
				isinstance(child, Tree) for child in node):
			return 'terminal outside preterminal under %s' % node.label
	return None


__all__ = ['Training', 'removenodes', 'malformed', 'PASSES', 'INVALID',
		'MalformedTreeError']
