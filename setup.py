from setuptools import setup, find_packages

setup(
    name="gravity4",
    version="0.1.0",
    description="Connect Four with invertible gravity: rules engine, heuristic AI and Gymnasium environment",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "gymnasium",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["gravity4=gravity4.interfaces.cli:main"],
    },
)
