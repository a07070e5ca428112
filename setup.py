# coding: utf-8

"""Setup file for PyPI"""

from setuptools import setup, find_packages
from codecs import open
from os import path
import sys


here = path.abspath(path.dirname(__file__))

with open(path.join(here, "DESCRIPTION.md"), encoding="utf-8") as description:
    long_description = description.read()

version = {}
with open(path.join(here, "Locompare", "version.py")) as fp:
    exec(fp.read(), version)
version = version["__version__"]

if version is None:
    print("No version found, exiting", file=sys.stderr)
    sys.exit(1)

if sys.version_info.major != 3:
    raise EnvironmentError("""Locompare is specifically programmed for python3,
    and is not compatible with Python2. Please upgrade your python before proceeding!""")

setup(
    name="Locompare",
    version=version,
    description="A Python3 program to cluster gene annotations into loci and compare their gene models",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="LGPL3",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)",
        "Operating System :: POSIX :: Linux",
        "Framework :: Pytest",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
    ],
    zip_safe=False,
    keywords="annotation genomics comparison loci",
    packages=find_packages(),
    python_requires=">=3.6",
    entry_points={"console_scripts": ["locompare = Locompare.__main__:main"]},
    install_requires=[line.rstrip() for line in open(path.join(here, "requirements.txt"), "rt")
                      if line.strip() and not line.startswith("#")],
    extras_require={
        "tests": ["pytest"]
    },
    include_package_data=True
)
