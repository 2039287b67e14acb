# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from setuptools import setup


setup(
  name='lexfa',
  version='0.0.1',
  description='lexfa compiles token patterns into a minimized DFA and scans text with longest match semantics.',
  python_requires='>=3.10',
  packages=['lexfa'],
  extras_require={'test': ['pytest']},
  entry_points={'console_scripts': ['lexfa=lexfa.__main__:main']},
)
