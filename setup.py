"""Generic setup.py for a pure Python package."""
import sys
from setuptools import setup
from headprep import __version__

with open('README.rst') as inp:
	README = inp.read()

REQUIRES = []
METADATA = dict(name='headprep',
		version=__version__,
		description='Treebank preprocessing for head-driven parsing',
		long_description=README,
		classifiers=[
				'Development Status :: 4 - Beta',
				'Environment :: Console',
				'Intended Audience :: Science/Research',
				'License :: OSI Approved :: GNU General Public License (GPL)',
				'Operating System :: POSIX',
				'Programming Language :: Python :: 3',
				'Topic :: Text Processing :: Linguistic',
		],
		install_requires=REQUIRES,
		extras_require={'test': ['pytest']},
		packages=['headprep'],
		package_data={'headprep': ['data/*.metadata', 'data/*.headrules']},
		entry_points={
				'console_scripts': ['headprep = headprep.cli:main']},
	)

if __name__ == '__main__':
	if sys.version_info[:2] < (3, 3):
		raise RuntimeError('Python version 3.3+ required.')
	setup(**METADATA)
