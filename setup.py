from setuptools import setup, find_packages
import os
import re

DISTNAME = 'wudesim'
PACKAGES = find_packages()
DESCRIPTION = 'Water quality network loader for dead-end pipe simulation'
AUTHOR = 'WUDESIM Developers'
LICENSE = 'Revised BSD'
DEPENDENCIES = ['numpy>=1.21', 'networkx', 'pandas']
EXTRAS = {'test': ['pytest']}

# use README file as the long description
file_dir = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(file_dir, 'README.md'), encoding='utf-8') as f:
    LONG_DESCRIPTION = f.read()

# get version from __init__.py
with open(os.path.join(file_dir, 'wudesim', '__init__.py')) as f:
    version_file = f.read()
    version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]",
                              version_file, re.M)
    if version_match:
        VERSION = version_match.group(1)
    else:
        raise RuntimeError("Unable to find version string.")

setup(name=DISTNAME,
      version=VERSION,
      packages=PACKAGES,
      description=DESCRIPTION,
      long_description=LONG_DESCRIPTION,
      long_description_content_type='text/markdown',
      author=AUTHOR,
      license=LICENSE,
      zip_safe=False,
      install_requires=DEPENDENCIES,
      extras_require=EXTRAS,
      package_data={'wudesim': ['tests/networks_for_testing/*.inp']},
      include_package_data=True)
