#!/usr/bin/python3

import os

from setuptools import setup, Command, find_packages


class CleanCommand(Command):
    user_options = []
    def initialize_options(self):
        #pylint: disable=attribute-defined-outside-init
        self.cwd = None
    def finalize_options(self):
        #pylint: disable=attribute-defined-outside-init
        self.cwd = os.getcwd()
    def run(self):
        assert os.getcwd() == self.cwd, 'Must be in package root: %s' % self.cwd
        os.system('rm -rf ./build ./dist ./*.pyc ./*.egg-info')

setup(
    name='s2dctl',
    version='0.3.1',
    description='Maintenance orchestrator for Storage Spaces Direct clusters',
    packages=find_packages(exclude=["s2dctl_test", "s2dctl_test.*"]),
    python_requires='>=3.9',
    install_requires=[
        'dacite',
        'lxml',
        'pycurl',
        'python-dateutil',
    ],
    zip_safe=False,
    entry_points={
        'console_scripts': [
            's2dctl = s2dctl.app:main',
        ],
    },
    cmdclass={
        'clean': CleanCommand,
    }
)
