from setuptools import setup, find_packages

setup(
    name="site_feeds",
    version="1.0.0",
    description="Scrape websites into RSS, Atom and JSON feeds",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "requests>=2.25.0",
        "beautifulsoup4>=4.12.0",
        "soupsieve>=2.0",
        "html2text>=2020.1.16",
        "pandas>=1.3.0",
        "pytz>=2021.1",
        "python-dotenv>=0.19.0",
        "PyYAML>=5.4",
        "feedgen>=0.9.0",
    ],
    extras_require={
        "test": [
            "feedparser>=6.0.0",
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "run-site-feeds=site_feeds.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
    ],
)
