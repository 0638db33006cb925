#!/usr/bin/env python3
"""
Setup script for monitor-config
"""

from setuptools import setup, find_packages
import os
import sys

# Import the version
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
from monitor_config import __version__

# Read README for long_description
def read_file(filename):
    with open(os.path.join(os.path.dirname(__file__), filename), encoding='utf-8') as f:
        return f.read()

setup(
    name='monitor-config',
    version=__version__,
    description='Save and restore KDE multi-monitor layouts with kscreen-doctor',
    long_description=read_file('README.md'),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.9',
    install_requires=[],
    extras_require={
        'dev': [
            'pytest>=7.0',
            'pytest-cov',
            'pytest-timeout',
        ],
    },
    entry_points={
        'console_scripts': [
            'monitor-config=monitor_config.cli:main',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: End Users/Desktop',
        'Topic :: Utilities',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13',
        'Operating System :: POSIX :: Linux',
        'Topic :: Desktop Environment :: K Desktop Environment (KDE)',
    ],
)
