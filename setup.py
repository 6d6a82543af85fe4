from setuptools import setup, find_packages

setup(
    name="footystats",
    version="0.1.0",
    description="Football match statistics, predictions and value-bet tracking",
    author="Andy Cheng",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "structlog>=23.1.0",
        "colorama>=0.4.6",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "footystats=footystats.cli:main",
        ],
    },
)
