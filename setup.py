# setup.py
from setuptools import setup, find_packages

install_requires = [
    "requests>=2.28",
    "beautifulsoup4>=4.11",
    "regex>=2022.1.18",
    "soupsieve>=2.3",
    "tqdm>=4.64",
    "setproctitle>=1.3",
]

extras_require = {
    "test": ["pytest>=7"],
}

setup(
    name="headword-index",
    version="0.1.0",
    description="Concurrent headword harvesting from numbered dictionary pages",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages("src", include=["headword_index", "headword_index.*"]),
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": ["headword-index=headword_index.cli:main"],
    },
)
