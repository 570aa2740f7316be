from setuptools import find_packages, setup

setup(
    name="ciflow",
    version="0.1.0",
    description="Programmable CI/CD execution engine",
    packages=find_packages(include=["ciflow", "ciflow.*"]),
    install_requires=[line for line in open("requirements-core.txt").read().splitlines() if line],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "ciflow=ciflow.cli:main",
        ],
    },
)
