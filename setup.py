#!/usr/bin/env python
# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.
from setuptools import setup, find_packages
import pathlib

HERE = pathlib.Path(__file__).parent.absolute()

PROTEAN_PATH = HERE / "protean"


def get_version(path):
    ns = {}
    with open(path) as f:
        exec(f.read(), ns)
    return ns['__version__']


VERSION = get_version(PROTEAN_PATH / '_version.py')

with open(HERE / 'README.md') as f:
    LONG_DESCRIPTION = f.read()


if __name__ == '__main__':
    setup(
      name='protean',
      version=VERSION,
      description='Structural diff and patch for typed Python records',
      long_description=LONG_DESCRIPTION,
      long_description_content_type='text/markdown',
      license='BSD',
      python_requires='>=3.8',
      packages=find_packages(include=['protean', 'protean.*']),
      package_data={
          'protean': ['*.schema.json'],
      },
      install_requires=[
          'colorama',
          'jupyter_core',
          'traitlets>=5',
      ],
      extras_require={
          'test': [
              'jsonschema',
              'pytest>=6.0',
          ],
      },
      entry_points={
          'console_scripts': [
              'protean = protean.__main__:main_dispatch',
              'protean-diff = protean.diffapp:main',
              'protean-patch = protean.patchapp:main',
              'protean-show = protean.showapp:main',
          ],
      },
      classifiers=[
          'Intended Audience :: Developers',
          'License :: OSI Approved :: BSD License',
          'Programming Language :: Python :: 3',
      ],
    )
