from setuptools import setup, find_packages
import pathlib


here = pathlib.Path(__file__).parent
try:
    long_description = (here / "README.md").read_text(encoding="utf-8")
except Exception:
    long_description = "BITVolume — a Fenwick tree (binary indexed tree) with a trade volume CSV loader and an interactive command loop."

setup(
    name="bitvolume",
    version="0.1.0",
    description="Fenwick tree prefix and range sums over price-bucketed trade volumes",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests",)),
    python_requires='>=3.10',
    install_requires=[
        "numpy",
        "pandas",
        "tqdm",
    ],
    extras_require={
        "dev": [
            "pytest",
        ]
    },
    entry_points={
        "console_scripts": [
            "bitvolume=BITVolume.CLI.menu:main",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Operating System :: OS Independent",
    ],
    zip_safe=False,
)
