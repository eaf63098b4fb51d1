"""
Setup script for Node Compare - peer snapshot intersection and version probing
"""

from setuptools import setup, find_packages

# Read requirements from requirements.txt
def read_requirements():
    try:
        with open('requirements.txt', 'r') as f:
            return [line.strip() for line in f if line.strip() and not line.startswith('#')]
    except FileNotFoundError:
        return []

setup(
    name="nodecmp",
    version="0.1.0",
    description="Node Compare - versions of peers common to several network snapshots",
    long_description="Finds the peers listed in every given peer-list snapshot and reports the version of each reachable one.",
    packages=find_packages(include=['nodecmp', 'nodecmp.*']),
    package_data={
        'nodecmp': ['defaults.yaml'],
    },
    include_package_data=True,
    install_requires=read_requirements(),
    extras_require={
        "dev": [
            "pytest>=6.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'nodecmp=nodecmp.cli:main',
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: System Administrators",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
)
