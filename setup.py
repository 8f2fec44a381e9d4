from setuptools import setup, find_packages

setup(
    name="pv-minutes-parser",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "beautifulsoup4>=4.12.0",
        "lxml>=4.9.0",
        "mammoth>=1.6.0",
        "pdfplumber>=0.10.0",
        "openpyxl>=3.1.0",
        "rapidfuzz>=3.5.0",
        "click>=8.1.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "python-docx>=1.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pv-parser=pvparser.cli:cli",
        ],
    },
)
