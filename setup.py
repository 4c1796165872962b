# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="treefactor",
    version="1.0.0",
    description="Editable model of a directory tree loaded from 'tree -J' JSON listings",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["treefactor*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'treefactor=treefactor.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
