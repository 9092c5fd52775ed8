"""
Setuptools script for the closure_sim package of runtime-selectable closure models.

This setup.py provides:
- Package metadata with the version read from closure_sim/__init__.py
- Runtime dependencies from requirements.txt and development tools from requirements-dev.txt
- The closure-sim-models console script for listing models and validating case files
"""

import pathlib
import re

import setuptools

HERE = pathlib.Path(__file__).parent
PACKAGE_DIR = HERE / 'closure_sim'
README_PATH = HERE / 'README.md'
REQUIREMENTS_PATH = HERE / 'requirements.txt'
DEV_REQUIREMENTS_PATH = HERE / 'requirements-dev.txt'

PACKAGE_NAME = 'closure-sim'
AUTHOR = 'closure_sim Development Team'
DESCRIPTION = 'Runtime-selectable closure models with mesh-adaptive cached state'
LICENSE = 'MIT'

KEYWORDS = [
    'computational fluid dynamics', 'multiphase flow', 'wall boiling', 'flame wrinkling',
    'closure models', 'lagrangian particles', 'scientific computing'
]

CLASSIFIERS = [
    'Development Status :: 3 - Alpha',
    'Intended Audience :: Science/Research',
    'Topic :: Scientific/Engineering :: Physics',
    'License :: OSI Approved :: MIT License',
    'Programming Language :: Python :: 3',
    'Programming Language :: Python :: 3.10',
    'Programming Language :: Python :: 3.11',
    'Programming Language :: Python :: 3.12',
    'Programming Language :: Python :: 3.13',
]

TEST_REQUIREMENTS = [
    'pytest>=8.0.0',
    'pytest-cov>=4.0.0',
    'hypothesis>=6.100.0',
]


def read_requirements(requirements_file: pathlib.Path) -> list:
    """
    Read requirement specifiers from a requirements file, skipping blank lines and comments.

    Args:
        requirements_file (pathlib.Path): Path to the requirements file

    Returns:
        list: Requirement strings for setuptools, empty if the file is missing
    """
    if not requirements_file.exists():
        return []

    requirements = []
    for line in requirements_file.read_text(encoding='utf-8').splitlines():
        line = line.split('#')[0].strip()
        if line and not line.startswith('-'):
            requirements.append(line)
    return requirements


def read_long_description() -> str:
    if README_PATH.exists():
        return README_PATH.read_text(encoding='utf-8')
    return DESCRIPTION


def get_version_from_package() -> str:
    """
    Extract __version__ from closure_sim/__init__.py without importing the package,
    so that building does not need the runtime dependencies installed.
    """
    init_text = (PACKAGE_DIR / '__init__.py').read_text(encoding='utf-8')
    match = re.search(r'^__version__\s*=\s*["\']([^"\']+)["\']', init_text, re.MULTILINE)
    if not match:
        raise RuntimeError('Unable to find __version__ in closure_sim/__init__.py')
    return match.group(1)


def setup_package():
    version = get_version_from_package()

    install_requires = read_requirements(REQUIREMENTS_PATH)
    if not install_requires:
        install_requires = [
            'numpy>=1.26.0',
            'pydantic>=2.5.0',
            'omegaconf>=2.3.0',
            'loguru>=0.7.0',
            'typing_extensions>=4.8.0',
        ]

    dev_requirements = read_requirements(DEV_REQUIREMENTS_PATH) or TEST_REQUIREMENTS

    setuptools.setup(
        name=PACKAGE_NAME,
        version=version,
        description=DESCRIPTION,
        long_description=read_long_description(),
        long_description_content_type='text/markdown',
        author=AUTHOR,
        license=LICENSE,
        keywords=KEYWORDS,
        classifiers=CLASSIFIERS,
        packages=setuptools.find_packages(include=['closure_sim', 'closure_sim.*']),
        install_requires=install_requires,
        extras_require={
            'dev': dev_requirements,
            'test': TEST_REQUIREMENTS,
        },
        entry_points={
            'console_scripts': [
                'closure-sim-models=closure_sim.cli.models:main',
            ]
        },
        package_data={'closure_sim': ['py.typed']},
        python_requires='>=3.10',
        zip_safe=False,
        include_package_data=True,
    )


if __name__ == '__main__':
    setup_package()
