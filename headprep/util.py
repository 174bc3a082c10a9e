"""Helpers for reading input and running worker processes."""
import sys
import gzip
import traceback
from functools import wraps


def workerfunc(func):
	"""Wrap a multiprocessing worker function to produce a full traceback."""
	@wraps(func)
	def wrapper(*args, **kwds):
		"""Apply decorated function."""
		try:
			return func(*args, **kwds)
		except Exception:  # pylint: disable=W0703
			# Put traceback as string into an exception and raise that
			raise Exception('in worker process\n%s' %
					''.join(traceback.format_exception(*sys.exc_info())))
	return wrapper


def openread(filename, encoding='utf8'):
	"""Open stdin/file for reading; decompress gz files on-the-fly."""
	if filename == '-':
		return open(sys.stdin.fileno(), mode='rt', encoding=encoding,
				closefd=False)
	if filename.endswith('.gz'):
		return gzip.open(filename, mode='rt', encoding=encoding)
	return open(filename, mode='rt', encoding=encoding)


__all__ = ['workerfunc', 'openread']
