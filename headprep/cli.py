"""Command-line interface to preprocess treebanks."""
import logging
import multiprocessing
from sys import argv, stdout, stderr
from sys import exit as sysexit
from .tree import readsexps, fromsexp, MalformedTreeError
from .training import Training, PASSES
from .metadata import readparam, DEFAULTS
from .wordfeatures import WordFeatures
from .util import workerfunc, openread

PASSFLAGS = dict(zip('tpbnria', PASSES))
PARAMS = {}  # global state of worker processes


def main():
	"""Preprocess trees for training a head-driven parser.
Usage: headprep [-tpbnria] [--combine] [options] [<treebank>|-]

Trees are read as S-expressions from the given file or standard input;
an unlabeled outer bracket around each tree is removed. Preprocessed trees
are written to standard output.

Passes (in the order below, regardless of the order on the command line):
  -t            transform part-of-speech tags
  -p            prune nodes and words
  -b            mark base NPs
  -n            remove null elements
  -r            raise punctuation
  -i            identify arguments
  -a            strip augmentations
If no passes are given, the complete preprocessing, including language
specific steps, is applied to each valid tree.

Options:
  --combine     only print the tree after the last pass; by default, the
                tree is printed after each of the selected passes.
  --lang=x      one of arabic (default), english, portuguese,
                portuguese-npargthread.
  --metadata=x  metadata file with tag map, argument contexts, &c.
  --headrules=x file with head rules.
  --params=x    parameter file with keys: %s
  --tagstrategy=map|edit
                normalize tags with the tag map (default),
                or by deleting morphological markers.
  --features    print feature vectors of the words after each tree.
  --numproc=n   number of processes to use (default: 1).
  -q            do not report invalid trees.
  -v            print version.
"""
	from getopt import gnu_getopt, GetoptError
	flags = 'combine features help version'.split()
	options = ('lang= metadata= headrules= params= tagstrategy= '
			'numproc=').split()
	try:
		opts, args = gnu_getopt(argv[1:], ''.join(PASSFLAGS) + 'qhv',
				flags + options)
		if len(args) > 1:
			raise GetoptError('expected 0 or 1 positional arguments')
		numproc = int(dict(opts).get('--numproc', 1))
	except (GetoptError, ValueError) as err:
		print('error:', err, file=stderr)
		print(usage(), file=stderr)
		sysexit(2)
	opts = dict(opts)
	if '-h' in opts or '--help' in opts:
		print(usage())
		return
	if '-v' in opts or '--version' in opts:
		from . import __version__
		print(__version__)
		return
	level = logging.WARNING if '-q' in opts else logging.INFO
	logging.basicConfig(level=level, format='%(message)s')
	params = readparam(opts['--params']) if '--params' in opts else dict(
			DEFAULTS)
	for key in ('lang', 'metadata', 'headrules', 'tagstrategy'):
		if '--' + key in opts:
			params[key] = opts['--' + key]
	passes = [name for flag, name in PASSFLAGS.items() if '-' + flag in opts]
	try:
		initworker(params, passes, '--combine' in opts, '--features' in opts,
				'-q' in opts)
	except (IOError, ValueError) as err:
		print('error:', err, file=stderr)
		sysexit(2)
	infilename = args[0] if args else '-'
	with openread(infilename) as inp:
		numtrees, numskipped = preprocesstrees(readsexps(inp), params,
				passes, '--combine' in opts, '--features' in opts,
				'-q' in opts, numproc)
	logging.info('processed %d trees; skipped %d', numtrees, numskipped)


def usage():
	"""Return the usage message."""
	return main.__doc__ % ', '.join(sorted(DEFAULTS))


def preprocesstrees(sexps, params, passes, combine, features, quiet,
		numproc=1, out=None):
	"""Preprocess trees and write them in the original order.

	:param sexps: an iterable of ``(lineno, sexp)`` tuples.
	:param out: file object to write to; default: stdout.
	:returns: a tuple with the number of trees, and the number of trees that
		were skipped."""
	if out is None:
		out = stdout
	work = ((n, lineno, sexp) for n, (lineno, sexp) in enumerate(sexps, 1))
	if numproc == 1:
		pool = None
		mymap, myworker = map, worker
	else:
		pool = multiprocessing.Pool(processes=numproc, initializer=initworker,
				initargs=(params, passes, combine, features, quiet))
		mymap, myworker = pool.imap, mpworker
	numtrees = numskipped = 0
	try:
		for n, lineno, results, error in mymap(myworker, work):
			numtrees += 1
			if error is not None:
				numskipped += 1
				if not quiet:
					logging.warning('tree No. %d from line %d invalid: %s',
							n, lineno, error)
				continue
			for line in results:
				out.write(line + '\n')
	finally:
		if pool is not None:
			pool.close()
			pool.join()
	return numtrees, numskipped


def initworker(params, passes, combine, features, quiet=False):
	"""Read the resources and set up the preprocessing for this process."""
	if quiet:
		logging.getLogger().setLevel(logging.WARNING)
	PARAMS.update(
			training=Training.fromparams(params),
			passes=passes,
			combine=combine,
			wordfeatures=WordFeatures(params['useunderscores'])
				if features else None)


@workerfunc
def mpworker(item):
	"""Worker function for preprocessing (multiprocessing wrapper)."""
	return worker(item)


def worker(item):
	"""Preprocess a single tree.

	:param item: a tuple ``(n, lineno, sexp)``.
	:returns: a tuple ``(n, lineno, results, error)``, with results a list of
		lines of output, or error a message explaining why the tree was
		skipped."""
	n, lineno, sexp = item
	training = PARAMS['training']
	try:
		tree = fromsexp(sexp)
	except MalformedTreeError as err:
		return n, lineno, None, str(err)
	reason = training.skip(tree)
	if reason is not None:
		return n, lineno, None, reason
	results = []
	if PARAMS['passes']:
		tree = tree.copy(deep=True)
		for name in PARAMS['passes']:
			getattr(training, name)(tree)
			if not PARAMS['combine']:
				results.append(str(tree))
		if PARAMS['combine']:
			results.append(str(tree))
	else:
		tree = training.preprocess(tree)
		results.append(str(tree))
	if PARAMS['wordfeatures'] is not None:
		results.append(' '.join('%s/%s' % (word,
				PARAMS['wordfeatures'].features(word, m == 0))
				for m, word in enumerate(tree.leaves())))
	return n, lineno, results, None


if __name__ == '__main__':
	main()

__all__ = ['main', 'preprocesstrees', 'initworker', 'worker', 'mpworker']
