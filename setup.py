#!/usr/bin/env python
# -*- coding: utf-8 -*-
import os

from setuptools import setup, find_packages

pkg_name = 'subshift'


def read_file(fname):
    with open(fname, 'r') as f:
        return f.read()


def read_version():
    about = {}
    exec(read_file(os.path.join(pkg_name, 'version.py')), about)
    return about['__version__']


requirements = read_file('requirements.txt').strip().split()
dev_requirements = read_file('requirements-dev.txt').strip().split()
setup(
    name=pkg_name,
    version=read_version(),
    description='Delay or advance every timestamp of an .srt subtitle file.',
    long_description=read_file('README.md'),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'docs']),
    include_package_data=True,
    install_requires=requirements,
    extras_require={'test': dev_requirements},
    python_requires='>=3.7',
    entry_points={
        'console_scripts': [
            'subshift = subshift:main',
        ],
    },
    license='MIT',
    zip_safe=False,
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: End Users/Desktop',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
        'Topic :: Multimedia :: Video',
        'Topic :: Text Processing',
    ],
)

# python setup.py sdist
# twine upload dist/*
