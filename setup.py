from setuptools import setup, find_packages

setup(
    name="c4engine",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["run"],
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "gymnasium",  # Gymnasium environment wrapper
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["c4engine=c4engine.interfaces.cli:main"],
    },
)
