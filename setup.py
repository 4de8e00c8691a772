"""Setup script for Weir."""
import codecs
import os.path

from setuptools import setup


def main():
    here = os.path.dirname(os.path.abspath(__file__))
    version_path = os.path.join(here, 'VERSION')

    with codecs.open(version_path, encoding='utf-8') as version_file:
        version = version_file.read().strip()

    setup(
        name='weir', version=version, packages=['weir'],
        description=(
            "Stateful stream primitives: batching, deduplication, "
            "and numbering."),
        python_requires='>=3.7',
        extras_require={'test': ['pytest']})


main()
