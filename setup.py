from setuptools import setup, find_packages


# Read README for long description
def read_readme():
    try:
        with open("README.md", "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        return "Whole-string regular expression matching with Thompson NFAs and bit-set simulation"


setup(
    name="pandas-thompson-regex",
    version="0.1.0",
    description="Whole-string regular expression matching with Thompson NFAs and bit-set simulation",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["thompson_regex", "thompson_regex.*"]),
    python_requires=">=3.8",
    install_requires=[
        "pandas>=1.0.0",
        "numpy>=1.18.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
            "hypothesis>=6.0",
            "black",
            "flake8",
        ],
        "test": [
            "pytest>=6.0",
            "hypothesis>=6.0",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Text Processing",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords="regex, nfa, thompson construction, shunting yard, automata, pandas",
)
