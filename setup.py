# setup.py
from setuptools import setup, find_packages

setup(
    name="ua_scout",
    version="0.1.0",
    description="Проверка форм сайта на готовность к интернационализированным email-адресам (UA)",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"ua_scout": ["report/templates/*.j2"]},
    include_package_data=True,
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "jinja2>=3.1",
        "markupsafe>=2.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["ua_scout=ua_scout.cli:cli"],
    },
    python_requires=">=3.11",
)
