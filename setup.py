from setuptools import setup, find_packages

setup(
    name="implied_yield_engine",
    version="0.1.0",
    description="Implied yield and points analytics for yield token trades",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "pandas>=2.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
)
